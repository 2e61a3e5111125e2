"""Three ordered, independently addressable entry sequences."""

from __future__ import annotations

from typing import Iterable, Sequence

from wb_app.models import ComponentAction, Entry, Section, SelectionSnapshot


class ItemCollection:
    """Owns the Benches, Assistants and Tools entry lists.

    Sections are never reordered or shrunk during a session: the only
    mutations are the initial bulk ``load`` and single-entry ``replace``.
    """

    def __init__(
        self,
        benches: Iterable[Entry] = (),
        assistants: Iterable[Entry] = (),
        tools: Iterable[Entry] = (),
    ) -> None:
        self._sections: list[list[Entry]] = [list(benches), list(assistants), list(tools)]

    def load(
        self,
        benches: Iterable[Entry],
        assistants: Iterable[Entry],
        tools: Iterable[Entry],
    ) -> None:
        """Populate all sections at once (used when startup loading completes)."""
        self._sections = [list(benches), list(assistants), list(tools)]

    def entries(self, section: int) -> Sequence[Entry]:
        """Return a read-only view of a section; unknown sections are empty."""
        if section not in range(len(self._sections)):
            return ()
        return tuple(self._sections[section])

    def length(self, section: int) -> int:
        if section not in range(len(self._sections)):
            return 0
        return len(self._sections[section])

    def get(self, section: int, index: int) -> Entry | None:
        if index < 0 or index >= self.length(section):
            return None
        return self._sections[section][index]

    def replace(self, section: int, index: int, entry: Entry) -> None:
        """Swap a single entry in place, preserving order and length."""
        if index < 0 or index >= self.length(section):
            raise IndexError(f"No entry at section {section}, index {index}")
        self._sections[section][index] = entry

    def is_empty(self) -> bool:
        return not any(self._sections)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            benches=tuple(self._sections[Section.BENCHES]),
            assistants=tuple(self._sections[Section.ASSISTANTS]),
            tools=tuple(self._sections[Section.TOOLS]),
        )

    def selected_count(self) -> int:
        return sum(
            1
            for section in self._sections
            for entry in section
            if entry.checked and not entry.is_separator
        )

    def pending_changes(self) -> tuple[int, int]:
        """Return ``(installs, uninstalls)`` across all sections."""
        installs = uninstalls = 0
        for entry in self.snapshot().pending():
            if entry.action is ComponentAction.INSTALL:
                installs += 1
            elif entry.action is ComponentAction.UNINSTALL:
                uninstalls += 1
        return installs, uninstalls
