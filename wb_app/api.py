"""Stable application-layer API surface."""

from wb_app.client import SetupClient
from wb_app.models import (
    ComponentAction,
    ComponentCategory,
    ComponentStatus,
    Entry,
    Section,
    SelectionSnapshot,
)
from wb_app.selection import (
    InitializationGate,
    ItemCollection,
    KeyDecoder,
    KeyEvent,
    KeySymbol,
    NavAction,
    NavigationState,
    SelectionStateMachine,
    SetupSession,
    resolve_action,
    toggle,
)
from wb_app.services import (
    ApplyOutcome,
    ApplyReport,
    CommandResult,
    CommandRunner,
    ComponentService,
    ConfigService,
    InstallerService,
    SetupSettings,
    StatusService,
)

__all__ = [
    "ApplyOutcome",
    "ApplyReport",
    "CommandResult",
    "CommandRunner",
    "ComponentAction",
    "ComponentCategory",
    "ComponentService",
    "ComponentStatus",
    "ConfigService",
    "Entry",
    "InitializationGate",
    "InstallerService",
    "ItemCollection",
    "KeyDecoder",
    "KeyEvent",
    "KeySymbol",
    "NavAction",
    "NavigationState",
    "Section",
    "SelectionSnapshot",
    "SelectionStateMachine",
    "SetupClient",
    "SetupSession",
    "SetupSettings",
    "StatusService",
    "resolve_action",
    "toggle",
]
