"""Initialization gate: buffers key events until the entry lists are loaded."""

from __future__ import annotations

import logging
from collections import deque
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InitializationGate(Generic[T]):
    """FIFO buffer in front of a dispatch function.

    While closed, submitted events are queued in arrival order. ``open``
    replays the queue through ``dispatch`` and every later event is
    dispatched directly. The gate never closes again.
    """

    def __init__(
        self,
        dispatch: Callable[[T], object],
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._dispatch = dispatch
        self._queue: deque[T] = deque()
        self._open = False
        self._replaying = False
        self._log = log or logger

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def pending(self) -> int:
        return len(self._queue)

    def submit(self, event: T) -> None:
        if not self._open or self._replaying:
            self._log.debug("Gate closed, queueing %r (queue=%d)", event, len(self._queue) + 1)
            self._queue.append(event)
            return
        self._dispatch(event)

    def open(self) -> int:
        """Open the gate and replay queued events; return how many were replayed."""
        if self._open:
            return 0
        self._open = True
        self._replaying = True
        replayed = 0
        try:
            # Events submitted during replay join the tail of the queue.
            while self._queue:
                event = self._queue.popleft()
                self._dispatch(event)
                replayed += 1
        finally:
            self._replaying = False
        if replayed:
            self._log.debug("Replayed %d queued key events", replayed)
        return replayed

    async def open_after(self, loader: Awaitable[None]) -> BaseException | None:
        """Await ``loader`` and open the gate whether or not it succeeded.

        Returns the exception raised by the loader, if any, so the caller can
        report it; the gate is open in both cases.
        """
        error: BaseException | None = None
        try:
            await loader
        except Exception as exc:
            self._log.exception("Initialization failed; continuing with empty sections")
            error = exc
        finally:
            self.open()
        return error
