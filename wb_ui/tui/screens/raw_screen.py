"""Plain-terminal setup screen: cbreak stdin, raw byte decoding, rich redraws."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import IO

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wb_app.models import Section, SelectionSnapshot
from wb_app.selection import SetupSession
from wb_app.selection.session import Loader
from wb_ui.tui.core import theme
from wb_ui.tui.screens import rows
from wb_ui.tui.system.models import SetupOutcome

logger = logging.getLogger(__name__)

ESCAPE_TIMEOUT = 0.2
_READ_SIZE = 1024

_RICH_ROW_STYLES = {
    "class:selected": "reverse bold",
    "class:checked": "green",
    "class:uninstall": "red",
    "class:needs-creds": "yellow",
    "class:separator": "dim",
}


def _enter_cbreak(fd: int) -> None:
    """Unbuffered, unechoed input with Ctrl-C delivered as a byte, not SIGINT."""
    tty.setcbreak(fd)
    mode = termios.tcgetattr(fd)
    mode[tty.LFLAG] &= ~termios.ISIG
    termios.tcsetattr(fd, termios.TCSANOW, mode)


class RawSetupScreen:
    """Fallback screen for terminals where prompt_toolkit cannot run."""

    def __init__(
        self,
        loader: Loader,
        *,
        console: Console | None = None,
        stdin: IO[str] | None = None,
    ) -> None:
        self._console = console or Console()
        self._stdin = stdin or sys.stdin
        self._live: Live | None = None
        self._outcome: asyncio.Future[SetupOutcome] | None = None
        self._escape_timer: asyncio.TimerHandle | None = None
        self.session = SetupSession(
            loader,
            on_confirm=self._on_confirm,
            on_quit=self._on_quit,
            request_render=self.refresh,
            log=logger,
        )

    def run(self) -> SetupOutcome:
        return asyncio.run(self.run_async())

    async def run_async(self) -> SetupOutcome:
        loop = asyncio.get_running_loop()
        self._outcome = loop.create_future()
        fd = self._stdin.fileno()
        saved = termios.tcgetattr(fd)
        try:
            _enter_cbreak(fd)
            loop.add_reader(fd, self._on_readable, fd)
            with Live(
                self.render(),
                console=self._console,
                screen=True,
                auto_refresh=False,
            ) as live:
                self._live = live
                load = asyncio.create_task(self.session.initialize())
                outcome = await self._outcome
                if not load.done():
                    load.cancel()
                return outcome
        finally:
            self._live = None
            self._cancel_escape_timer()
            loop.remove_reader(fd)
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)

    def _on_readable(self, fd: int) -> None:
        try:
            data = os.read(fd, _READ_SIZE)
        except BlockingIOError:
            return
        if not data:
            self._on_quit()
            return
        self.feed(data)

    def feed(self, data: bytes) -> None:
        """Feed raw terminal bytes; a lone ESC is dropped after a short delay."""
        self._cancel_escape_timer()
        self.session.feed_bytes(data)
        if self.session.decoder.pending:
            loop = asyncio.get_running_loop()
            self._escape_timer = loop.call_later(ESCAPE_TIMEOUT, self._expire_escape)

    def _expire_escape(self) -> None:
        self._escape_timer = None
        self.session.decoder.cancel_pending()

    def _cancel_escape_timer(self) -> None:
        if self._escape_timer is not None:
            self._escape_timer.cancel()
            self._escape_timer = None

    def refresh(self) -> None:
        if self._live is not None:
            self._live.update(self.render(), refresh=True)

    def render(self) -> RenderableType:
        grid = Table.grid(expand=True, padding=(0, 1))
        for _ in Section:
            grid.add_column(ratio=1)
        grid.add_row(*(self._render_section(section) for section in Section))
        return Group(
            Text(theme.HEADER_TITLE, style="bold"),
            Text(theme.HEADER_HELP, style="dim"),
            grid,
            Text(rows.current_description(self.session), style="dim italic"),
            Text(rows.status_line(self.session), style="reverse"),
        )

    def _render_section(self, section: Section) -> Panel:
        active = self.session.state.section == section
        border = "bold white" if active else theme.RICH_BORDER_STYLE
        if self.session.is_loading:
            return Panel(Text(theme.LOADING_MESSAGE, style="yellow italic"), title=section.title, border_style=border)

        body = Text()
        state = self.session.state
        for index, entry in enumerate(self.session.collection.entries(section)):
            is_cursor = active and state.index == index
            style = _RICH_ROW_STYLES.get(rows.row_style(entry, is_cursor=is_cursor), "")
            body.append(rows.format_row(entry, is_cursor=is_cursor), style=style)
            body.append("\n")
        return Panel(body, title=section.title, border_style=border)

    def _resolve(self, outcome: SetupOutcome) -> None:
        if self._outcome is not None and not self._outcome.done():
            self._outcome.set_result(outcome)

    def _on_confirm(self, snapshot: SelectionSnapshot) -> None:
        self._resolve(SetupOutcome(confirmed=True, snapshot=snapshot))

    def _on_quit(self) -> None:
        self._resolve(SetupOutcome(confirmed=False, load_error=self.session.load_error))
