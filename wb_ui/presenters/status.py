"""Presenter for component status tables."""

from __future__ import annotations

from typing import List

from wb_app.models import Section, SelectionSnapshot
from wb_ui.tui.core import theme
from wb_ui.tui.system.models import TableModel


def build_status_tables(snapshot: SelectionSnapshot) -> List[TableModel]:
    """Transform a probed snapshot into one table per section."""
    sections = {
        Section.BENCHES: snapshot.benches,
        Section.ASSISTANTS: snapshot.assistants,
        Section.TOOLS: snapshot.tools,
    }
    tables = []
    for section, entries in sections.items():
        rows = [
            [entry.id, entry.name, theme.status_text(entry.status)]
            for entry in entries
            if not entry.is_separator
        ]
        tables.append(
            TableModel(
                title=section.title,
                columns=["ID", "Name", "Status"],
                rows=rows,
            )
        )
    return tables


def render_status(ui, snapshot: SelectionSnapshot) -> None:
    for table in build_status_tables(snapshot):
        ui.tables.show(table)
