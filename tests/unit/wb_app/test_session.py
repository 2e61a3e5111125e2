import asyncio

import pytest

from wb_app.models import ComponentAction, ComponentStatus, Section, SelectionSnapshot
from wb_app.selection.session import SetupSession
from tests.unit.wb_app.factories import make_entry, separator

pytestmark = pytest.mark.unit_app


def _snapshot() -> SelectionSnapshot:
    return SelectionSnapshot(
        benches=(make_entry("bench_flutterBench"), make_entry("bench_javaBench")),
        assistants=(
            make_entry("claude_cli", status=ComponentStatus.INSTALLED),
            separator(),
            make_entry("openspec"),
        ),
        tools=(make_entry("vscode"),),
    )


class Harness:
    def __init__(self, loader=None) -> None:
        self.confirmed: list[SelectionSnapshot] = []
        self.quits = 0
        self.renders = 0

        async def default_loader() -> SelectionSnapshot:
            return _snapshot()

        self.session = SetupSession(
            loader or default_loader,
            on_confirm=self.confirmed.append,
            on_quit=self._quit,
            request_render=self._render,
        )

    def _quit(self) -> None:
        self.quits += 1

    def _render(self) -> None:
        self.renders += 1


def test_keys_before_load_are_replayed_in_order() -> None:
    harness = Harness()
    session = harness.session
    assert session.is_loading

    session.feed_bytes(b"\x1b[B ")
    assert session.gate.pending == 2
    assert session.state.index == 0

    asyncio.run(session.initialize())
    assert not session.is_loading
    assert session.state.index == 1
    entry = session.collection.get(Section.BENCHES, 1)
    assert entry.action is ComponentAction.INSTALL
    assert harness.renders >= 1


def test_structured_events_share_the_gate() -> None:
    harness = Harness()
    session = harness.session
    session.feed_event("right")
    session.feed_event(char="j")
    asyncio.run(session.initialize())
    assert session.state.section == Section.ASSISTANTS
    assert session.state.index == 2


def test_quit_before_load_finishes_session() -> None:
    harness = Harness()
    harness.session.feed_bytes(b"q")
    harness.session.feed_bytes(b"\r")
    asyncio.run(harness.session.initialize())
    assert harness.quits == 1
    assert harness.confirmed == []
    assert harness.session.finished


def test_failed_load_opens_gate_with_empty_sections() -> None:
    async def failing() -> SelectionSnapshot:
        raise RuntimeError("config unreadable")

    harness = Harness(failing)
    session = harness.session
    session.feed_bytes(b"j")
    asyncio.run(session.initialize())

    assert isinstance(session.load_error, RuntimeError)
    assert not session.is_loading
    assert session.collection.is_empty()
    session.feed_bytes(b"\r")
    assert len(harness.confirmed) == 1
    assert harness.confirmed[0].pending() == []


def test_status_counters() -> None:
    harness = Harness()
    session = harness.session
    asyncio.run(session.initialize())
    session.feed_bytes(b" l ")
    assert session.pending_changes() == (1, 1)
    assert session.selected_count() == 2


def test_unmapped_structured_event_is_not_submitted() -> None:
    harness = Harness()
    assert harness.session.feed_event("f12") is None
    assert harness.session.gate.pending == 0


def test_replay_matches_live_processing() -> None:
    benches = tuple(make_entry(f"bench_{name}") for name in ("aBench", "bBench", "cBench", "dBench"))

    async def loader() -> SelectionSnapshot:
        return SelectionSnapshot(benches=benches)

    queued = Harness(loader).session
    queued.feed_bytes(b"jj ")
    asyncio.run(queued.initialize())

    live = Harness(loader).session
    asyncio.run(live.initialize())
    live.feed_bytes(b"jj ")

    assert queued.state == live.state
    assert queued.state.index == 2
    assert queued.collection.snapshot() == live.collection.snapshot()
    assert queued.collection.get(Section.BENCHES, 2).action is ComponentAction.INSTALL
