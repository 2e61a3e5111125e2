import asyncio
import io
import os
import pty
import termios

import pytest
from rich.console import Console

from wb_app.models import ComponentCategory, ComponentStatus, SelectionSnapshot
from wb_ui.tui.screens.raw_screen import ESCAPE_TIMEOUT, RawSetupScreen
from tests.unit.wb_app.factories import make_entry

pytestmark = pytest.mark.unit_ui


async def _loader() -> SelectionSnapshot:
    return SelectionSnapshot(
        benches=(make_entry("bench_javaBench", category=ComponentCategory.BENCH),),
        assistants=(make_entry("claude_cli", status=ComponentStatus.INSTALLED),),
        tools=(make_entry("vscode"),),
    )


def _screen() -> tuple[RawSetupScreen, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, force_terminal=False, color_system=None)
    return RawSetupScreen(_loader, console=console), buffer


def test_render_shows_loading_then_rows() -> None:
    screen, buffer = _screen()
    screen._console.print(screen.render())
    assert "Loading components..." in buffer.getvalue()

    asyncio.run(screen.session.initialize())
    screen._console.print(screen.render())
    output = buffer.getvalue()
    assert "DEV BENCHES" in output
    assert "▶ [ ] ✗ Bench Javabench" in output
    assert "[✓] ✓ Claude Cli" in output
    assert "Changes selected: 1" in output


def test_lone_escape_is_dropped_after_timeout() -> None:
    screen, _ = _screen()

    async def scenario() -> list[str]:
        await screen.session.initialize()
        screen.feed(b"\x1b")
        assert screen.session.decoder.pending
        await asyncio.sleep(ESCAPE_TIMEOUT + 0.1)
        assert not screen.session.decoder.pending
        screen.feed(b"[B")
        return [str(screen.session.state.index), str(screen.session.state.section)]

    assert asyncio.run(scenario()) == ["0", "0"]


def test_split_arrow_within_timeout_still_decodes() -> None:
    screen, _ = _screen()

    async def scenario() -> int:
        await screen.session.initialize()
        screen.feed(b"\x1b[")
        screen.feed(b"C")
        return screen.session.state.section

    assert asyncio.run(scenario()) == 1


def test_confirm_resolves_outcome() -> None:
    screen, _ = _screen()

    async def scenario():
        screen._outcome = asyncio.get_running_loop().create_future()
        await screen.session.initialize()
        screen.feed(b" \r")
        return await screen._outcome

    outcome = asyncio.run(scenario())
    assert outcome.confirmed
    assert [entry.id for entry in outcome.snapshot.pending()] == ["bench_javaBench"]


@pytest.fixture
def terminal():
    master, slave = pty.openpty()
    stdin = os.fdopen(slave, "rb", buffering=0)
    yield master, stdin
    stdin.close()
    os.close(master)


def _run_with_input(terminal, data: bytes):
    master, stdin = terminal
    console = Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)
    screen = RawSetupScreen(_loader, console=console, stdin=stdin)

    async def scenario():
        task = asyncio.create_task(screen.run_async())
        await asyncio.sleep(0.1)
        os.write(master, data)
        return await asyncio.wait_for(task, timeout=2)

    return asyncio.run(scenario())


def test_ctrl_c_byte_quits_instead_of_raising(terminal) -> None:
    _, stdin = terminal
    isig_before = termios.tcgetattr(stdin.fileno())[3] & termios.ISIG
    assert isig_before

    outcome = _run_with_input(terminal, b"\x03")

    assert not outcome.confirmed
    assert not outcome.has_changes
    assert termios.tcgetattr(stdin.fileno())[3] & termios.ISIG == isig_before


def test_q_byte_quits_from_terminal(terminal) -> None:
    outcome = _run_with_input(terminal, b"q")
    assert not outcome.confirmed
