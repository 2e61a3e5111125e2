from dataclasses import dataclass, field

from wb_app.models import SelectionSnapshot


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]


@dataclass(frozen=True)
class SetupOutcome:
    """Result of an interactive setup screen."""

    confirmed: bool
    snapshot: SelectionSnapshot = field(default_factory=SelectionSnapshot)
    load_error: BaseException | None = None

    @property
    def has_changes(self) -> bool:
        return bool(self.snapshot.pending())
