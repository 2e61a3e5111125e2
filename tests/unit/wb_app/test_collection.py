import pytest

from wb_app.models import ComponentAction, ComponentStatus, Section
from wb_app.selection.collection import ItemCollection
from tests.unit.wb_app.factories import make_entry, separator

pytestmark = pytest.mark.unit_app


def _collection() -> ItemCollection:
    return ItemCollection(
        benches=[make_entry("bench_pythonBench", action=ComponentAction.INSTALL, checked=True)],
        assistants=[
            make_entry("claude_cli", status=ComponentStatus.INSTALLED, action=ComponentAction.UNINSTALL),
            separator(),
            make_entry("openspec"),
        ],
        tools=[make_entry("vscode", status=ComponentStatus.INSTALLED)],
    )


def test_empty_by_default() -> None:
    collection = ItemCollection()
    assert collection.is_empty()
    assert collection.length(Section.BENCHES) == 0
    assert collection.get(Section.TOOLS, 0) is None


def test_unknown_section_is_empty() -> None:
    collection = _collection()
    assert collection.entries(7) == ()
    assert collection.length(-1) == 0


def test_get_and_replace() -> None:
    collection = _collection()
    entry = collection.get(Section.ASSISTANTS, 2)
    assert entry is not None and entry.id == "openspec"

    collection.replace(Section.ASSISTANTS, 2, make_entry("openspec", checked=True))
    assert collection.get(Section.ASSISTANTS, 2).checked is True
    assert collection.length(Section.ASSISTANTS) == 3


def test_replace_out_of_range_raises() -> None:
    with pytest.raises(IndexError):
        _collection().replace(Section.TOOLS, 5, make_entry("wave"))


def test_counts_skip_separators() -> None:
    collection = _collection()
    assert collection.selected_count() == 3
    assert collection.pending_changes() == (1, 1)


def test_snapshot_is_a_copy() -> None:
    collection = _collection()
    snapshot = collection.snapshot()
    collection.replace(Section.TOOLS, 0, make_entry("vscode"))
    assert snapshot.tools[0].status is ComponentStatus.INSTALLED
    assert [entry.id for entry in snapshot.pending()] == ["bench_pythonBench", "claude_cli"]


def test_load_replaces_all_sections() -> None:
    collection = ItemCollection()
    collection.load([make_entry("bench_javaBench")], [], [make_entry("warp")])
    assert not collection.is_empty()
    assert collection.length(Section.BENCHES) == 1
    assert collection.length(Section.ASSISTANTS) == 0
