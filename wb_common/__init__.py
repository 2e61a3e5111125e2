"""Shared helpers for workbench-setup."""

from wb_common.api import WBError, configure_logging

__all__ = ["configure_logging", "WBError"]
