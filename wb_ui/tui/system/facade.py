from typing import Sequence

from rich.console import Console

from wb_ui.tui.system.components.presenter import RichPresenter
from wb_ui.tui.system.components.progress import RichProgress
from wb_ui.tui.system.components.table import RichTablePresenter
from wb_ui.tui.system.models import TableModel
from wb_ui.tui.system.protocols import Presenter, Progress, TablePresenter, UI


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.tables: TablePresenter = RichTablePresenter(self.console)
        self.present: Presenter = RichPresenter(self.console)
        self.progress: Progress = RichProgress(self.console)

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        model = TableModel(title=title, columns=list(columns), rows=[list(r) for r in rows])
        self.tables.show(model)
