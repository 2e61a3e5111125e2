"""Key decoding: raw terminal bytes or structured key events -> normalized keys.

Both input paths converge on :class:`KeyEvent`, whose ``key`` is either one of
the :class:`KeySymbol` values or a single lower-cased passthrough character.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ESC = 0x1B
CTRL_C = 0x03
CSI_INTRODUCER = ord("[")
SS3_INTRODUCER = ord("O")
SHIFT_MODIFIER_PARAMS = "1;2"
# Longest CSI parameter string we are willing to buffer ("1;2").
_MAX_CSI_PARAMS = 3


class KeySymbol(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    SPACE = "space"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyEvent:
    """A normalized key press."""

    key: str
    ctrl: bool = False
    shift: bool = False

    @property
    def symbol(self) -> KeySymbol | None:
        try:
            return KeySymbol(self.key)
        except ValueError:
            return None


_ARROW_FINALS = {
    ord("A"): KeySymbol.UP,
    ord("B"): KeySymbol.DOWN,
    ord("C"): KeySymbol.RIGHT,
    ord("D"): KeySymbol.LEFT,
}

# Symbolic names delivered by key-parsing input sources, matched case-insensitively.
KEY_NAME_MAP: dict[str, KeySymbol] = {
    "arrowup": KeySymbol.UP,
    "arrowdown": KeySymbol.DOWN,
    "arrowleft": KeySymbol.LEFT,
    "arrowright": KeySymbol.RIGHT,
    "up": KeySymbol.UP,
    "down": KeySymbol.DOWN,
    "left": KeySymbol.LEFT,
    "right": KeySymbol.RIGHT,
    "return": KeySymbol.ENTER,
    "enter": KeySymbol.ENTER,
    "c-m": KeySymbol.ENTER,
    "c-j": KeySymbol.ENTER,
    " ": KeySymbol.SPACE,
    "space": KeySymbol.SPACE,
    "c-c": KeySymbol.QUIT,
}


class _EscapeState(Enum):
    IDLE = "idle"
    ESCAPE = "escape"
    CSI = "csi"
    SS3 = "ss3"


class KeyDecoder:
    """Stateful decoder shared by the raw-byte and structured-event paths.

    Arrow keys arrive from a raw terminal as ``ESC [ <letter>`` (or
    ``ESC O <letter>`` in application cursor mode), possibly split across
    reads, so the pending escape state survives between calls. A byte that
    does not continue a pending sequence cancels it and neither byte emits
    a key.

    ``split_arrows`` enables the same recovery for structured sources that
    report an unparsed arrow tail as separate ``"["`` and ``"a".."d"``
    events. With it off, ``"["`` is an ordinary character.
    """

    def __init__(self, *, split_arrows: bool = False) -> None:
        self._state = _EscapeState.IDLE
        self._params = ""
        self._split_arrows = split_arrows

    @property
    def pending(self) -> bool:
        """True while an escape sequence has been started but not resolved."""
        return self._state is not _EscapeState.IDLE

    def cancel_pending(self) -> None:
        self._state = _EscapeState.IDLE
        self._params = ""

    def feed_bytes(self, data: bytes) -> list[KeyEvent]:
        """Decode a raw byte buffer into zero or more key events, in order."""
        events: list[KeyEvent] = []
        for byte in data:
            event = self._feed_byte(byte)
            if event is not None:
                events.append(event)
        return events

    def _feed_byte(self, byte: int) -> KeyEvent | None:
        if self._state is _EscapeState.ESCAPE:
            if byte == CSI_INTRODUCER:
                self._state = _EscapeState.CSI
            elif byte == SS3_INTRODUCER:
                self._state = _EscapeState.SS3
            else:
                self.cancel_pending()
            return None

        if self._state is _EscapeState.SS3:
            symbol = _ARROW_FINALS.get(byte)
            self.cancel_pending()
            return KeyEvent(symbol.value) if symbol else None

        if self._state is _EscapeState.CSI:
            return self._feed_csi_byte(byte)

        if byte == ESC:
            self._state = _EscapeState.ESCAPE
            return None
        return decode_single_byte(byte)

    def _feed_csi_byte(self, byte: int) -> KeyEvent | None:
        if 0x30 <= byte <= 0x39 or byte == 0x3B:
            if len(self._params) >= _MAX_CSI_PARAMS:
                self.cancel_pending()
            else:
                self._params += chr(byte)
            return None

        symbol = _ARROW_FINALS.get(byte)
        params = self._params
        self.cancel_pending()
        if symbol is None:
            return None
        if not params:
            return KeyEvent(symbol.value)
        if params == SHIFT_MODIFIER_PARAMS:
            return KeyEvent(symbol.value, shift=True)
        return None

    def from_event(
        self,
        name: str | None = None,
        *,
        char: str | None = None,
        ctrl: bool = False,
        shift: bool = False,
    ) -> KeyEvent | None:
        """Normalize a structured key event from a key-parsing input source.

        ``name`` is the source's symbolic key name (``"ArrowUp"``, ``"return"``,
        ``"c-c"``, ``"s-up"``...), ``char`` the printable character when the
        source provides one. Modifier flags are copied verbatim.
        """
        raw = (name or char or "").lower()
        if not raw:
            return None

        if self._split_arrows:
            # Some sources hand over the tail of an unparsed arrow sequence as
            # separate "[" and "a".."d" events.
            pending_csi = self._state is _EscapeState.CSI
            self.cancel_pending()
            if pending_csi:
                symbol = _ARROW_FINALS.get(ord(raw.upper())) if len(raw) == 1 else None
                return KeyEvent(symbol.value, ctrl=ctrl, shift=shift) if symbol else None
            if raw == "[":
                self._state = _EscapeState.CSI
                return None

        if raw.startswith("s-") and raw[2:] in KEY_NAME_MAP:
            raw = raw[2:]
            shift = True

        symbol = KEY_NAME_MAP.get(raw)
        if symbol is KeySymbol.QUIT:
            return KeyEvent(symbol.value, ctrl=True, shift=shift)
        if symbol is not None:
            return KeyEvent(symbol.value, ctrl=ctrl, shift=shift)

        if ctrl and raw == "c":
            return KeyEvent(KeySymbol.QUIT.value, ctrl=True, shift=shift)
        if len(raw) == 1 and raw.isprintable():
            return KeyEvent(raw, ctrl=ctrl, shift=shift)
        return None


def decode_single_byte(byte: int) -> KeyEvent | None:
    """Map one byte outside an escape sequence to a key event."""
    if byte == CTRL_C:
        return KeyEvent(KeySymbol.QUIT.value, ctrl=True)
    if byte in (0x0D, 0x0A):
        return KeyEvent(KeySymbol.ENTER.value)
    if byte == 0x20:
        return KeyEvent(KeySymbol.SPACE.value)
    if 0x21 <= byte <= 0x7E:
        original = chr(byte)
        lowered = original.lower()
        return KeyEvent(lowered, shift=original != lowered)
    return None
