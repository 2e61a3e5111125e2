"""Selection state machine driving the three-column setup screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from wb_app.models import Section, SelectionSnapshot
from wb_app.selection.collection import ItemCollection
from wb_app.selection.keys import KeyEvent, KeySymbol
from wb_app.selection.toggle import toggle

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[SelectionSnapshot], None]
QuitCallback = Callable[[], None]
RenderCallback = Callable[[], None]


class NavAction(str, Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    QUIT = "quit"


# Arrow keys plus the vim (hjkl) and ijkl-style aliases.
KEY_BINDINGS: dict[str, NavAction] = {
    KeySymbol.UP.value: NavAction.MOVE_UP,
    "k": NavAction.MOVE_UP,
    "i": NavAction.MOVE_UP,
    KeySymbol.DOWN.value: NavAction.MOVE_DOWN,
    "j": NavAction.MOVE_DOWN,
    KeySymbol.LEFT.value: NavAction.MOVE_LEFT,
    "h": NavAction.MOVE_LEFT,
    "u": NavAction.MOVE_LEFT,
    KeySymbol.RIGHT.value: NavAction.MOVE_RIGHT,
    "l": NavAction.MOVE_RIGHT,
    "o": NavAction.MOVE_RIGHT,
    KeySymbol.SPACE.value: NavAction.TOGGLE,
    KeySymbol.ENTER.value: NavAction.CONFIRM,
    KeySymbol.QUIT.value: NavAction.QUIT,
    "q": NavAction.QUIT,
}


def resolve_action(event: KeyEvent) -> NavAction | None:
    """Map a normalized key to the navigation action it triggers."""
    return KEY_BINDINGS.get(event.key)


@dataclass(frozen=True)
class NavigationState:
    section: int = Section.BENCHES
    index: int = 0


class SelectionStateMachine:
    """Tracks the focused section/entry and applies key-driven transitions.

    The machine reads the live ``ItemCollection`` on every event, so it keeps
    working when the collection is populated after construction. Transitions
    are total: bad input and out-of-range moves are silently rejected and no
    exception escapes ``handle``.
    """

    def __init__(
        self,
        collection: ItemCollection,
        *,
        on_confirm: ConfirmCallback,
        on_quit: QuitCallback,
        request_render: RenderCallback | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._collection = collection
        self._on_confirm = on_confirm
        self._on_quit = on_quit
        self._request_render = request_render
        self._log = log or logger
        self._section = int(Section.BENCHES)
        self._index = 0
        self._finished = False

    @property
    def state(self) -> NavigationState:
        return NavigationState(section=self._section, index=self._index)

    @property
    def current_section(self) -> int:
        return self._section

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def finished(self) -> bool:
        """True once quit or confirm ended the interactive session."""
        return self._finished

    def handle(self, event: KeyEvent) -> bool:
        """Process one key event; return True when the state changed."""
        if self._finished:
            self._log.debug("Ignoring %r: session already finished", event.key)
            return False

        action = resolve_action(event)
        if action is None:
            self._log.debug("Unbound key %r", event.key)
            return False

        if action is NavAction.QUIT:
            self._finish(self._on_quit)
            return True
        if action is NavAction.CONFIRM:
            snapshot = self._collection.snapshot()
            self._finish(lambda: self._on_confirm(snapshot))
            return True

        if self._collection.length(self._section) == 0:
            self._log.debug("No entries loaded in section %s; ignoring %s", self._section, action.value)
            return False

        changed = self._dispatch(action)
        self._log.debug(
            "%s -> section=%s index=%s changed=%s",
            action.value,
            self._section,
            self._index,
            changed,
        )
        if changed:
            self._render()
        return changed

    def _dispatch(self, action: NavAction) -> bool:
        if action is NavAction.MOVE_UP:
            return self.move_up()
        if action is NavAction.MOVE_DOWN:
            return self.move_down()
        if action is NavAction.MOVE_LEFT:
            return self.move_left()
        if action is NavAction.MOVE_RIGHT:
            return self.move_right()
        if action is NavAction.TOGGLE:
            return self.toggle_current()
        return False

    def _is_separator(self, index: int) -> bool:
        entry = self._collection.get(self._section, index)
        return entry is not None and entry.is_separator

    def move_up(self) -> bool:
        new_index = self._index - 1
        while new_index >= 0 and self._is_separator(new_index):
            new_index -= 1
        if new_index < 0:
            return False
        self._index = new_index
        return True

    def move_down(self) -> bool:
        max_index = self._collection.length(self._section) - 1
        new_index = self._index + 1
        while new_index <= max_index and self._is_separator(new_index):
            new_index += 1
        if new_index > max_index:
            return False
        self._index = new_index
        return True

    def move_left(self) -> bool:
        if self._section <= Section.BENCHES:
            return False
        self._switch_section(self._section - 1)
        return True

    def move_right(self) -> bool:
        if self._section >= Section.TOOLS:
            return False
        self._switch_section(self._section + 1)
        return True

    def _switch_section(self, section: int) -> None:
        self._section = section
        self._index = 0
        # Index 0 is never a separator in shipped data; skip ahead if it is.
        length = self._collection.length(section)
        while self._index < length - 1 and self._is_separator(self._index):
            self._index += 1

    def toggle_current(self) -> bool:
        entry = self._collection.get(self._section, self._index)
        if entry is None or entry.is_separator:
            return False
        self._collection.replace(self._section, self._index, toggle(entry))
        return True

    def _finish(self, callback: Callable[[], None]) -> None:
        self._finished = True
        try:
            callback()
        except Exception:
            self._log.exception("Session callback failed")

    def _render(self) -> None:
        if self._request_render is None:
            return
        try:
            self._request_render()
        except Exception:
            self._log.exception("Render request failed")
