"""
UI adapter package providing Rich-based and headless renderers.
"""

from wb_ui.tui.system.facade import TUI
from wb_ui.tui.system.headless import HeadlessUI
from wb_ui.tui.system.protocols import Presenter, Progress, TablePresenter, UI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "TablePresenter",
    "Presenter",
    "Progress",
]
