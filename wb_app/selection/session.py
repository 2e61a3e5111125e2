"""Setup session: decoder -> initialization gate -> selection state machine."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from wb_app.models import SelectionSnapshot
from wb_app.selection.collection import ItemCollection
from wb_app.selection.gate import InitializationGate
from wb_app.selection.keys import KeyDecoder, KeyEvent
from wb_app.selection.state_machine import (
    ConfirmCallback,
    NavigationState,
    QuitCallback,
    RenderCallback,
    SelectionStateMachine,
)

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[SelectionSnapshot]]


class SetupSession:
    """Single-threaded controller behind every setup screen.

    Input may arrive before ``initialize`` has finished loading the entry
    lists; such events are held by the gate and replayed in order once
    loading completes (successfully or not).
    """

    def __init__(
        self,
        loader: Loader,
        *,
        on_confirm: ConfirmCallback,
        on_quit: QuitCallback,
        request_render: RenderCallback | None = None,
        collection: ItemCollection | None = None,
        log: logging.Logger | None = None,
        split_arrows: bool = False,
    ) -> None:
        self._loader = loader
        self._log = log or logger
        self._request_render = request_render
        self.collection = collection or ItemCollection()
        self.decoder = KeyDecoder(split_arrows=split_arrows)
        self.machine = SelectionStateMachine(
            self.collection,
            on_confirm=on_confirm,
            on_quit=on_quit,
            request_render=request_render,
            log=self._log,
        )
        self.gate: InitializationGate[KeyEvent] = InitializationGate(
            self.machine.handle, log=self._log
        )
        self.load_error: BaseException | None = None

    @property
    def is_loading(self) -> bool:
        return not self.gate.is_open

    @property
    def finished(self) -> bool:
        return self.machine.finished

    @property
    def state(self) -> NavigationState:
        return self.machine.state

    def submit(self, event: KeyEvent) -> None:
        self.gate.submit(event)

    def feed_bytes(self, data: bytes) -> int:
        """Decode raw terminal input and submit every resulting key."""
        events = self.decoder.feed_bytes(data)
        for event in events:
            self.submit(event)
        return len(events)

    def feed_event(
        self,
        name: str | None = None,
        *,
        char: str | None = None,
        ctrl: bool = False,
        shift: bool = False,
    ) -> KeyEvent | None:
        """Normalize a structured key event and submit it when it maps to a key."""
        event = self.decoder.from_event(name, char=char, ctrl=ctrl, shift=shift)
        if event is not None:
            self.submit(event)
        return event

    async def initialize(self) -> None:
        """Load entries, then open the gate and replay buffered input."""
        self.load_error = await self.gate.open_after(self._load())
        self._render()

    async def _load(self) -> None:
        snapshot = await self._loader()
        self.collection.load(snapshot.benches, snapshot.assistants, snapshot.tools)
        self._log.info(
            "Loaded %d benches, %d assistants, %d tools",
            len(snapshot.benches),
            len(snapshot.assistants),
            len(snapshot.tools),
        )

    def selected_count(self) -> int:
        return self.collection.selected_count()

    def pending_changes(self) -> tuple[int, int]:
        return self.collection.pending_changes()

    def _render(self) -> None:
        if self._request_render is None:
            return
        try:
            self._request_render()
        except Exception:
            self._log.exception("Render request failed")
