"""Keyboard-driven selection core of the setup screen."""

from wb_app.selection.collection import ItemCollection
from wb_app.selection.gate import InitializationGate
from wb_app.selection.keys import KeyDecoder, KeyEvent, KeySymbol
from wb_app.selection.session import SetupSession
from wb_app.selection.state_machine import (
    NavAction,
    NavigationState,
    SelectionStateMachine,
    resolve_action,
)
from wb_app.selection.toggle import toggle

__all__ = [
    "InitializationGate",
    "ItemCollection",
    "KeyDecoder",
    "KeyEvent",
    "KeySymbol",
    "NavAction",
    "NavigationState",
    "SelectionStateMachine",
    "SetupSession",
    "resolve_action",
    "toggle",
]
