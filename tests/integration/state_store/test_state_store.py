"""Integration tests for StateStore persistence."""

from pathlib import Path

import pytest

from zenager.board import Column, default_columns
from zenager.providers import GitHubSource, GitLabSource, Issue, Label
from zenager.state_store import Credentials, StateKey, StateStore
from zenager.state_store.models import PersistedValue


@pytest.fixture
def store():
    """Create an in-memory StateStore."""
    s = StateStore(":memory:")
    yield s
    s.close()


def _write_raw(store: StateStore, key: StateKey, raw: str) -> None:
    with store._db.session() as session:
        session.merge(PersistedValue(key=key.value, value=raw))


@pytest.mark.integration
class TestEmptyStore:
    """Tests for a fresh database."""

    def test_loads_defaults(self, store: StateStore) -> None:
        state = store.load_state()

        assert state.columns == []
        assert state.sources == []
        assert state.selected_source_ids == []
        assert state.visible_column_ids is None
        assert state.credentials == Credentials()


@pytest.mark.integration
class TestRoundTrip:
    """Tests for saving and loading each persisted value."""

    def test_columns(self, store: StateStore) -> None:
        columns = default_columns()
        columns[1].issues = [
            Issue(id=1, title="Bug", labels=[Label("bug", "d73a4a")], source_id="github:o/r"),
            Issue(id=2, title="Note", is_manual=True),
        ]

        store.save_columns(columns)

        assert store.load_columns() == columns

    def test_sources_and_selection(self, store: StateStore) -> None:
        sources = [
            GitHubSource(owner="octo", repo_name="board", assignee="alice"),
            GitLabSource(domain="https://gitlab.com", project_path="g/p"),
        ]

        store.save_sources(sources)
        store.save_selected_source_ids(["github:octo/board"])

        assert store.load_sources() == sources
        assert store.load_selected_source_ids() == ["github:octo/board"]

    def test_overwrite(self, store: StateStore) -> None:
        store.save_visible_column_ids(["todo"])
        store.save_visible_column_ids(["todo", "done"])

        assert store.load_visible_column_ids() == ["todo", "done"]

    def test_credentials(self, store: StateStore) -> None:
        store.save_credentials(Credentials(github_api_key="gh", gitlab_api_key="gl"))

        assert store.load_credentials() == Credentials(github_api_key="gh", gitlab_api_key="gl")


@pytest.mark.integration
class TestCorruptValues:
    """Tests for values that cannot be decoded."""

    def test_invalid_json_falls_back(self, store: StateStore) -> None:
        _write_raw(store, StateKey.COLUMNS, "{not json")

        assert store.load_columns() == []

    def test_wrong_shape_falls_back(self, store: StateStore) -> None:
        _write_raw(store, StateKey.SOURCES, '{"type": "github"}')

        assert store.load_sources() == []

    def test_bad_entries_skipped(self, store: StateStore) -> None:
        _write_raw(
            store,
            StateKey.COLUMNS,
            '[{"id": "todo", "name": "Todo", "issues": []}, {"name": "no id"}]',
        )

        assert store.load_columns() == [Column(id="todo", name="Todo")]

    def test_empty_visible_list_means_defaults(self, store: StateStore) -> None:
        store.save_visible_column_ids([])

        assert store.load_visible_column_ids() is None


@pytest.mark.integration
class TestFileDatabase:
    """Tests for an on-disk database."""

    def test_survives_reopen(self, tmp_path: Path) -> None:
        db_path = tmp_path / "data" / "zenager.db"
        first = StateStore(str(db_path))
        first.save_selected_source_ids(["github:octo/board"])
        first.close()

        second = StateStore(str(db_path))
        try:
            assert second.load_selected_source_ids() == ["github:octo/board"]
        finally:
            second.close()
