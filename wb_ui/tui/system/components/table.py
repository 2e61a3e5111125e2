from rich import box
from rich.console import Console
from rich.table import Table

from wb_ui.tui.core import theme
from wb_ui.tui.system.models import TableModel
from wb_ui.tui.system.protocols import TablePresenter


def build_rich_table(model: TableModel, *, show_lines: bool = False) -> Table:
    table = Table(
        title=model.title,
        show_lines=show_lines,
        box=box.ROUNDED,
        border_style=theme.RICH_BORDER_STYLE,
        header_style=theme.RICH_ACCENT_BOLD,
        title_style=theme.RICH_ACCENT_BOLD,
    )
    for column in model.columns:
        table.add_column(column, overflow="ellipsis")
    for row in model.rows:
        table.add_row(*row)
    return table


class RichTablePresenter(TablePresenter):
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        self._console.print(build_rich_table(table))
