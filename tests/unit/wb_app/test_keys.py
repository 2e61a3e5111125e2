import pytest

from wb_app.selection.keys import KeyDecoder, KeyEvent, KeySymbol, decode_single_byte

pytestmark = pytest.mark.unit_app


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\x1b[A", "up"),
        (b"\x1b[B", "down"),
        (b"\x1b[C", "right"),
        (b"\x1b[D", "left"),
        (b"\x1bOA", "up"),
        (b"\x1bOD", "left"),
    ],
)
def test_arrow_sequences_decode(data: bytes, expected: str) -> None:
    assert KeyDecoder().feed_bytes(data) == [KeyEvent(expected)]


def test_shift_modified_arrow_sets_shift() -> None:
    assert KeyDecoder().feed_bytes(b"\x1b[1;2C") == [KeyEvent("right", shift=True)]


def test_other_modifiers_are_dropped() -> None:
    assert KeyDecoder().feed_bytes(b"\x1b[1;5C") == []


def test_sequence_split_across_reads() -> None:
    decoder = KeyDecoder()
    assert decoder.feed_bytes(b"\x1b") == []
    assert decoder.pending
    assert decoder.feed_bytes(b"[") == []
    assert decoder.feed_bytes(b"B") == [KeyEvent("down")]
    assert not decoder.pending


def test_interrupted_escape_emits_nothing() -> None:
    decoder = KeyDecoder()
    assert decoder.feed_bytes(b"\x1bx") == []
    assert not decoder.pending
    assert decoder.feed_bytes(b"j") == [KeyEvent("j")]


def test_unknown_csi_final_is_ignored() -> None:
    assert KeyDecoder().feed_bytes(b"\x1b[Zj") == [KeyEvent("j")]


def test_cancel_pending_drops_partial_sequence() -> None:
    decoder = KeyDecoder()
    decoder.feed_bytes(b"\x1b[")
    decoder.cancel_pending()
    assert decoder.feed_bytes(b"A") == [KeyEvent("a", shift=True)]


def test_control_and_plain_bytes() -> None:
    events = KeyDecoder().feed_bytes(b"\x03\r\n Qk")
    assert events == [
        KeyEvent("quit", ctrl=True),
        KeyEvent("enter"),
        KeyEvent("enter"),
        KeyEvent("space"),
        KeyEvent("q", shift=True),
        KeyEvent("k"),
    ]


def test_non_printable_bytes_are_ignored() -> None:
    assert decode_single_byte(0x7F) is None
    assert decode_single_byte(0x01) is None


def test_event_symbol_property() -> None:
    assert KeyEvent("enter").symbol is KeySymbol.ENTER
    assert KeyEvent("j").symbol is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("ArrowUp", KeyEvent("up")),
        ("DOWN", KeyEvent("down")),
        ("return", KeyEvent("enter")),
        ("c-m", KeyEvent("enter")),
        ("space", KeyEvent("space")),
        ("s-left", KeyEvent("left", shift=True)),
        ("c-c", KeyEvent("quit", ctrl=True)),
    ],
)
def test_structured_names(name: str, expected: KeyEvent) -> None:
    assert KeyDecoder().from_event(name) == expected


def test_structured_ctrl_c_from_char() -> None:
    assert KeyDecoder().from_event(char="c", ctrl=True) == KeyEvent("quit", ctrl=True)


def test_structured_printable_passthrough_keeps_flags() -> None:
    decoder = KeyDecoder()
    assert decoder.from_event(char="K") == KeyEvent("k")
    assert decoder.from_event(char="x", shift=True) == KeyEvent("x", shift=True)


def test_structured_unknown_names_are_dropped() -> None:
    decoder = KeyDecoder()
    assert decoder.from_event("escape") is None
    assert decoder.from_event("f5") is None
    assert decoder.from_event() is None


def test_structured_bracket_then_letter_is_arrow() -> None:
    decoder = KeyDecoder(split_arrows=True)
    assert decoder.from_event(char="[") is None
    assert decoder.from_event(char="a") == KeyEvent("up")
    assert decoder.from_event(char="a") == KeyEvent("a")


def test_structured_bracket_then_other_key_is_dropped() -> None:
    decoder = KeyDecoder(split_arrows=True)
    decoder.from_event(char="[")
    assert decoder.from_event(char="x") is None
    assert decoder.from_event(char="j") == KeyEvent("j")


def test_structured_bracket_is_plain_char_by_default() -> None:
    decoder = KeyDecoder()
    assert decoder.from_event(char="[") == KeyEvent("[")
    assert not decoder.pending
    assert decoder.from_event(char="q") == KeyEvent("q")
