"""Text rendering shared by the full-screen and plain setup screens."""

from __future__ import annotations

from wb_app.models import ComponentAction, ComponentStatus, Entry
from wb_app.selection import SetupSession
from wb_ui.tui.core import theme

NAME_WIDTH = 16


def checkbox(entry: Entry) -> str:
    if not entry.checked:
        return theme.UNCHECKED_MARK
    if entry.action is ComponentAction.UNINSTALL:
        return theme.UNINSTALL_MARK
    return theme.CHECKED_MARK


def status_symbol(status: ComponentStatus) -> str:
    return theme.STATUS_SYMBOLS.get(status, "✗")


def truncate(name: str, width: int = NAME_WIDTH) -> str:
    if len(name) <= width:
        return name
    return name[: width - 1] + "…"


def format_row(entry: Entry, *, is_cursor: bool) -> str:
    """``▶ [✓] ✓ Name``; separators render as a blank line."""
    if entry.is_separator:
        return ""
    marker = theme.CURSOR_MARKER if is_cursor else " "
    return f"{marker} {checkbox(entry)} {status_symbol(entry.status)} {truncate(entry.name)}"


def row_style(entry: Entry, *, is_cursor: bool) -> str:
    if entry.is_separator:
        return "class:separator"
    if is_cursor:
        return "class:selected"
    if entry.checked and entry.action is ComponentAction.UNINSTALL:
        return "class:uninstall"
    if entry.status is ComponentStatus.NEEDS_CREDENTIALS:
        return "class:needs-creds"
    if entry.checked:
        return "class:checked"
    return ""


def status_line(session: SetupSession) -> str:
    if session.is_loading:
        return theme.LOADING_MESSAGE
    if session.load_error is not None:
        return f"Failed to load components: {session.load_error}"
    installs, uninstalls = session.pending_changes()
    line = f"Changes selected: {session.selected_count()}"
    if installs:
        line += f"  (+{installs} install)"
    if uninstalls:
        line += f"  (-{uninstalls} uninstall)"
    return line


def current_description(session: SetupSession) -> str:
    state = session.state
    entry = session.collection.get(state.section, state.index)
    if entry is None or entry.is_separator:
        return ""
    return entry.description
