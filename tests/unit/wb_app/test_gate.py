import asyncio

import pytest

from wb_app.selection.gate import InitializationGate

pytestmark = pytest.mark.unit_app


def test_closed_gate_queues_in_order() -> None:
    seen: list[str] = []
    gate: InitializationGate[str] = InitializationGate(seen.append)
    for key in ("a", "b", "c"):
        gate.submit(key)
    assert seen == []
    assert gate.pending == 3

    assert gate.open() == 3
    assert seen == ["a", "b", "c"]
    assert gate.is_open
    assert gate.pending == 0


def test_open_gate_dispatches_directly() -> None:
    seen: list[str] = []
    gate: InitializationGate[str] = InitializationGate(seen.append)
    gate.open()
    gate.submit("x")
    assert seen == ["x"]
    assert gate.open() == 0


def test_events_submitted_during_replay_keep_order() -> None:
    seen: list[str] = []
    gate: InitializationGate[str] = InitializationGate(lambda e: None)

    def dispatch(event: str) -> None:
        seen.append(event)
        if event == "a":
            gate.submit("late")

    gate._dispatch = dispatch
    gate.submit("a")
    gate.submit("b")
    gate.open()
    assert seen == ["a", "b", "late"]


def test_open_after_success() -> None:
    seen: list[str] = []
    gate: InitializationGate[str] = InitializationGate(seen.append)
    gate.submit("down")

    async def load() -> None:
        assert not gate.is_open

    error = asyncio.run(gate.open_after(load()))
    assert error is None
    assert seen == ["down"]


def test_open_after_failure_still_opens() -> None:
    seen: list[str] = []
    gate: InitializationGate[str] = InitializationGate(seen.append)
    gate.submit("q")

    async def load() -> None:
        raise RuntimeError("probe crashed")

    error = asyncio.run(gate.open_after(load()))
    assert isinstance(error, RuntimeError)
    assert gate.is_open
    assert seen == ["q"]
