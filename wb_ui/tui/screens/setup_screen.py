from __future__ import annotations

import logging
from typing import Any

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from wb_app.models import Section, SelectionSnapshot
from wb_app.selection import SetupSession
from wb_app.selection.session import Loader
from wb_ui.tui.core import theme
from wb_ui.tui.screens import rows
from wb_ui.tui.system.models import SetupOutcome

logger = logging.getLogger(__name__)

_ENTER_ALIASES = frozenset({"c-m", "c-j"})


def translate_key(key: str) -> dict[str, Any]:
    """Map a prompt_toolkit key press to ``SetupSession.feed_event`` kwargs.

    Printable keys arrive as the character itself, everything else as a
    symbolic name such as ``"up"``, ``"s-left"`` or ``"c-c"``.
    """
    if len(key) == 1:
        return {"char": key}
    return {"name": key, "ctrl": key.startswith("c-") and key not in _ENTER_ALIASES}


class SetupScreen:
    """Full-screen three-column selection screen."""

    def __init__(self, loader: Loader, *, title: str = theme.HEADER_TITLE) -> None:
        self._title = title
        self.session = SetupSession(
            loader,
            on_confirm=self._on_confirm,
            on_quit=self._on_quit,
            request_render=self._invalidate,
            log=logger,
        )
        self._app: Application[SetupOutcome] = self._build_app()

    def run(self) -> SetupOutcome:
        result = self._app.run(pre_run=self._pre_run)
        if result is None:
            return SetupOutcome(confirmed=False, load_error=self.session.load_error)
        return result

    def _pre_run(self) -> None:
        self._app.create_background_task(self.session.initialize())

    def _build_app(self) -> Application[SetupOutcome]:
        header = HSplit(
            [
                Window(
                    FormattedTextControl(lambda: [("class:header", f" {self._title}")]),
                    height=1,
                ),
                Window(
                    FormattedTextControl([("class:help", f" {theme.HEADER_HELP}")]),
                    height=1,
                ),
            ]
        )
        columns = VSplit(
            [self._column(section) for section in Section],
            padding=1,
        )
        footer = HSplit(
            [
                Window(
                    FormattedTextControl(self._render_description),
                    height=1,
                ),
                Window(
                    FormattedTextControl(self._render_status),
                    height=1,
                    style="class:status",
                ),
            ]
        )
        return Application(
            layout=Layout(HSplit([header, columns, footer])),
            key_bindings=self._bindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_setup_style())),
            full_screen=True,
        )

    def _column(self, section: Section) -> Frame:
        control = FormattedTextControl(lambda: self._render_section(section))
        return Frame(
            Window(control, width=Dimension(weight=1)),
            title=lambda: self._column_title(section),
        )

    def _column_title(self, section: Section) -> str:
        if self.session.state.section == section:
            return f"▸ {section.title}"
        return section.title

    def _render_section(self, section: Section) -> list[tuple[str, str]]:
        if self.session.is_loading:
            return [("class:loading", theme.LOADING_MESSAGE)]
        state = self.session.state
        fragments: list[tuple[str, str]] = []
        for index, entry in enumerate(self.session.collection.entries(section)):
            is_cursor = state.section == section and state.index == index
            fragments.append((rows.row_style(entry, is_cursor=is_cursor), rows.format_row(entry, is_cursor=is_cursor)))
            fragments.append(("", "\n"))
        return fragments

    def _render_description(self) -> list[tuple[str, str]]:
        return [("class:description", f" {rows.current_description(self.session)}")]

    def _render_status(self) -> list[tuple[str, str]]:
        return [("", f" {rows.status_line(self.session)}")]

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add(Keys.Any)
        def _(event: Any) -> None:
            for press in event.key_sequence:
                key = press.key.value if isinstance(press.key, Keys) else press.key
                self.session.feed_event(**translate_key(key))

        return kb

    def _invalidate(self) -> None:
        self._app.invalidate()

    def _on_confirm(self, snapshot: SelectionSnapshot) -> None:
        self._exit(SetupOutcome(confirmed=True, snapshot=snapshot))

    def _on_quit(self) -> None:
        self._exit(SetupOutcome(confirmed=False, load_error=self.session.load_error))

    def _exit(self, result: SetupOutcome) -> None:
        try:
            self._app.exit(result=result)
        except Exception as exc:  # pragma: no cover
            if "Return value already set" not in str(exc):
                raise
