"""Stable UI-layer API surface."""

from wb_ui.cli.main import app, build_app, main
from wb_ui.presenters.apply import render_apply_report
from wb_ui.presenters.status import build_status_tables, render_status
from wb_ui.tui.system.facade import TUI
from wb_ui.tui.system.headless import HeadlessUI
from wb_ui.tui.system.models import SetupOutcome, TableModel
from wb_ui.wiring.dependencies import UIContext

__all__ = [
    "app",
    "build_app",
    "build_status_tables",
    "HeadlessUI",
    "main",
    "render_apply_report",
    "render_status",
    "SetupOutcome",
    "TableModel",
    "TUI",
    "UIContext",
]
