"""Unit tests for BoardStore."""

import pytest

from zenager.board import (
    DEFAULT_COLUMN_IDS,
    BoardStore,
    Column,
    ColumnExistsError,
    ColumnNotFoundError,
    InvalidColumnOrderError,
    IssueNotFoundError,
    column_id_from_name,
    new_manual_issue,
)
from zenager.providers import Issue


@pytest.fixture
def store() -> BoardStore:
    store = BoardStore()
    store.initialize_defaults()
    return store


@pytest.mark.unit
class TestColumns:
    """Tests for the column lifecycle."""

    def test_initialize_defaults(self, store: BoardStore) -> None:
        assert store.column_ids == [
            "backlog",
            "todo",
            "in-progress",
            "code-review",
            "blocked",
            "done",
        ]
        assert store.visible_column_ids == DEFAULT_COLUMN_IDS

    def test_initialize_defaults_is_idempotent(self) -> None:
        store = BoardStore([Column(id="mine", name="Mine")])

        assert store.initialize_defaults() is False
        assert store.column_ids == ["mine"]

    def test_add_column(self, store: BoardStore) -> None:
        store.add_column(Column(id="waiting-on-qa", name="Waiting On QA"))

        assert store.column_ids[-1] == "waiting-on-qa"
        assert "waiting-on-qa" in store.visible_column_ids

    def test_add_duplicate_column(self, store: BoardStore) -> None:
        with pytest.raises(ColumnExistsError):
            store.add_column(Column(id="todo", name="Todo again"))

    def test_remove_column_drops_issues(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1)])

        store.remove_column("todo")

        assert "todo" not in store.column_ids
        assert "todo" not in store.visible_column_ids

    def test_remove_unknown_column(self, store: BoardStore) -> None:
        with pytest.raises(ColumnNotFoundError):
            store.remove_column("nope")

    def test_reorder_columns(self, store: BoardStore) -> None:
        new_order = list(reversed(store.column_ids))

        store.reorder_columns(new_order)

        assert store.column_ids == new_order

    @pytest.mark.parametrize(
        "order",
        [
            ["backlog", "todo"],
            ["backlog", "todo", "in-progress", "code-review", "blocked", "blocked"],
            ["backlog", "todo", "in-progress", "code-review", "blocked", "archive"],
        ],
    )
    def test_reorder_requires_permutation(self, store: BoardStore, order: list[str]) -> None:
        before = store.column_ids

        with pytest.raises(InvalidColumnOrderError):
            store.reorder_columns(order)
        assert store.column_ids == before

    def test_visibility(self, store: BoardStore) -> None:
        store.set_column_visible("blocked", False)
        assert "blocked" not in store.visible_column_ids

        store.set_column_visible("blocked", True)
        assert store.visible_column_ids[-1] == "blocked"

    def test_column_id_from_name(self) -> None:
        assert column_id_from_name("  Waiting   On QA ") == "waiting-on-qa"


@pytest.mark.unit
class TestIssues:
    """Tests for issue mutations."""

    def test_reads_are_copies(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1)])

        store.get_column("todo").issues.clear()
        store.get_columns()[1].issues.clear()

        assert len(store.get_column("todo").issues) == 1

    def test_move_issue_between_columns(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1), make_issue(2)])
        store.replace_column_issues("blocked", [make_issue(3)])

        store.move_issue(2, "todo", "blocked", 0, source_id="github:octo/board")

        assert [i.id for i in store.get_column("todo").issues] == [1]
        assert [i.id for i in store.get_column("blocked").issues] == [2, 3]

    def test_move_issue_clamps_index(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1), make_issue(2), make_issue(3)])

        store.move_issue(1, "todo", "todo", 99, source_id="github:octo/board")

        assert [i.id for i in store.get_column("todo").issues] == [2, 3, 1]

    def test_move_unknown_issue(self, store: BoardStore) -> None:
        with pytest.raises(IssueNotFoundError):
            store.move_issue(1, "todo", "done")

    def test_move_to_unknown_column(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1)])

        with pytest.raises(ColumnNotFoundError):
            store.move_issue(1, "todo", "archive", source_id="github:octo/board")
        assert len(store.get_column("todo").issues) == 1

    def test_add_manual_issue_forces_manual(self, store: BoardStore) -> None:
        issue = Issue(id=1, title="note", source_url="https://x", source_id="github:o/r")

        added = store.add_manual_issue("todo", issue)

        assert added.is_manual
        assert added.source_url is None
        assert added.source_id is None

    def test_add_manual_issue_bumps_clashing_id(self, store: BoardStore) -> None:
        first = store.add_manual_issue("todo", Issue(id=10, title="a"))
        second = store.add_manual_issue("blocked", Issue(id=10, title="b"))

        assert first.id == 10
        assert second.id == 11

    def test_new_manual_issue(self) -> None:
        issue = new_manual_issue("Write docs", "soon")

        assert issue.is_manual
        assert issue.is_open
        assert issue.id > 1_600_000_000_000
        assert issue.created_at == issue.updated_at

    def test_remove_manual_issue(self, store: BoardStore) -> None:
        added = store.add_manual_issue("todo", Issue(id=5, title="note"))

        removed = store.remove_manual_issue("todo", added.id)

        assert removed.title == "note"
        assert store.get_column("todo").issues == []
        with pytest.raises(IssueNotFoundError):
            store.remove_manual_issue("todo", added.id)

    def test_remove_manual_issue_skips_legacy_tracker_issue(
        self, store: BoardStore, make_issue
    ) -> None:
        legacy = make_issue(5, source_id=None)
        store.replace_column_issues("todo", [legacy])

        with pytest.raises(IssueNotFoundError):
            store.remove_manual_issue("todo", 5)

        assert [i.key for i in store.get_column("todo").issues] == [(None, 5)]

    def test_clear_tracker_issues_keeps_manual(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1), make_issue(2)])
        store.add_manual_issue("todo", Issue(id=7, title="note"))

        assert store.clear_tracker_issues() == 2
        assert [i.id for i in store.get_column("todo").issues] == [7]

    def test_replace_all_issues_empties_unmentioned(self, store: BoardStore, make_issue) -> None:
        store.replace_column_issues("todo", [make_issue(1)])

        store.replace_all_issues({"done": [make_issue(1)], "archive": [make_issue(2)]})

        assert store.get_column("todo").issues == []
        assert [i.id for i in store.get_column("done").issues] == [1]
        assert "archive" not in store.column_ids
