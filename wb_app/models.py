"""Domain types shared by the selection core and the services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ComponentStatus(str, Enum):
    INSTALLED = "installed"
    NOT_INSTALLED = "not_installed"
    NEEDS_CREDENTIALS = "needs_creds"
    UNKNOWN = "unknown"

    @property
    def is_installed(self) -> bool:
        """Installed-but-unconfigured components still count as installed."""
        return self in (ComponentStatus.INSTALLED, ComponentStatus.NEEDS_CREDENTIALS)


class ComponentAction(str, Enum):
    INSTALL = "install"
    UNINSTALL = "uninstall"
    NONE = "none"


class ComponentCategory(str, Enum):
    BENCH = "bench"
    ASSISTANT = "ai"
    TOOL = "tool"


class Section(IntEnum):
    """Column order of the setup screen."""

    BENCHES = 0
    ASSISTANTS = 1
    TOOLS = 2

    @property
    def title(self) -> str:
        return _SECTION_TITLES[self]


_SECTION_TITLES = {
    Section.BENCHES: "DEV BENCHES",
    Section.ASSISTANTS: "AI ASSISTANTS",
    Section.TOOLS: "TOOLS",
}


@dataclass(frozen=True)
class Entry:
    """One selectable component (bench, assistant or tool)."""

    id: str
    name: str
    description: str
    category: ComponentCategory
    status: ComponentStatus = ComponentStatus.UNKNOWN
    checked: bool = False
    action: ComponentAction = ComponentAction.NONE
    is_separator: bool = False

    @property
    def is_installed(self) -> bool:
        return self.status.is_installed

    @property
    def has_pending_action(self) -> bool:
        return not self.is_separator and self.action is not ComponentAction.NONE


@dataclass(frozen=True)
class SelectionSnapshot:
    """Final, read-only view of the three sections handed to the installer."""

    benches: tuple[Entry, ...] = ()
    assistants: tuple[Entry, ...] = ()
    tools: tuple[Entry, ...] = ()

    def all_entries(self) -> tuple[Entry, ...]:
        return self.benches + self.assistants + self.tools

    def pending(self) -> list[Entry]:
        return [entry for entry in self.all_entries() if entry.has_pending_action]
