from __future__ import annotations

from typing import Mapping

from wb_app.models import ComponentStatus

RICH_ACCENT = "cyan"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

CURSOR_MARKER = "▶"
CHECKED_MARK = "[✓]"
UNINSTALL_MARK = "[X]"
UNCHECKED_MARK = "[ ]"

STATUS_SYMBOLS: dict[ComponentStatus, str] = {
    ComponentStatus.INSTALLED: "✓",
    ComponentStatus.NEEDS_CREDENTIALS: "⚠",
    ComponentStatus.NOT_INSTALLED: "✗",
    ComponentStatus.UNKNOWN: "✗",
}

RICH_STATUS_COLORS: dict[ComponentStatus, str] = {
    ComponentStatus.INSTALLED: "green",
    ComponentStatus.NEEDS_CREDENTIALS: "yellow",
    ComponentStatus.NOT_INSTALLED: "dim",
    ComponentStatus.UNKNOWN: "magenta",
}

STATUS_LABELS: dict[ComponentStatus, str] = {
    ComponentStatus.INSTALLED: "installed",
    ComponentStatus.NEEDS_CREDENTIALS: "needs credentials",
    ComponentStatus.NOT_INSTALLED: "not installed",
    ComponentStatus.UNKNOWN: "unknown",
}

HEADER_TITLE = "Workbench Setup"
HEADER_HELP = "↑↓/jk move  ←→/hl section  Space toggle  Enter apply  q/Ctrl+C quit"
LOADING_MESSAGE = "Loading components..."


def status_text(status: ComponentStatus) -> str:
    label = STATUS_LABELS.get(status, status.value)
    color = RICH_STATUS_COLORS.get(status)
    if not color:
        return label
    return f"[{color}]{label}[/{color}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def prompt_toolkit_setup_style() -> Mapping[str, str]:
    return {
        "selected": "bg:#005f87 fg:white bold",
        "checked": "fg:#00ff00 bold",
        "uninstall": "fg:#ff5f5f bold",
        "needs-creds": "fg:#ffaf00",
        "separator": "fg:#5f5f5f",
        "frame.border": "fg:#00afaf",
        "frame.label": "fg:#00afaf bold",
        "header": "bold",
        "help": "fg:#8a8a8a",
        "status": "reverse",
        "loading": "fg:#ffaf00 italic",
        "description": "fg:#8a8a8a italic",
    }
