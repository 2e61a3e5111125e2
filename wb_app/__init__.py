"""Application layer for the workbench setup tool (selection core and services)."""

from wb_app.client import SetupClient

__all__ = ["SetupClient"]
