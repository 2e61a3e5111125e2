"""Toggle policy: maps an entry's (checked, status) to its next (checked, action)."""

from __future__ import annotations

from dataclasses import replace

from wb_app.models import ComponentAction, Entry


def toggle(entry: Entry) -> Entry:
    """Return the entry that results from pressing space on ``entry``.

    Installed entries are checked by default, meaning "keep installed".
    Toggling one flips between keep and uninstall without unchecking it.
    Entries that are not installed cycle between install and untouched.
    """
    if entry.is_separator:
        return entry

    installed = entry.is_installed
    if not entry.checked:
        action = ComponentAction.NONE if installed else ComponentAction.INSTALL
        return replace(entry, checked=True, action=action)

    if not installed:
        return replace(entry, checked=False, action=ComponentAction.NONE)

    if entry.action is ComponentAction.UNINSTALL:
        return replace(entry, action=ComponentAction.NONE)
    return replace(entry, action=ComponentAction.UNINSTALL)
