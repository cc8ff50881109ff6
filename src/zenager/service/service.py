"""BoardService - The operations a UI layer calls into."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import TYPE_CHECKING

from zenager.board import BoardStore, Column, column_id_from_name, new_manual_issue
from zenager.config import credentials_from_env
from zenager.providers import adapter_for
from zenager.registry import RepositoryRegistry
from zenager.state_store import Credentials
from zenager.sync import SyncService

if TYPE_CHECKING:
    from collections.abc import Sequence

    from zenager.config import Settings
    from zenager.providers import Issue, ProviderType, RemoteSource
    from zenager.state_store import StateStore
    from zenager.sync import SyncResult
    from zenager.sync.service import AdapterFactory

logger = logging.getLogger(__name__)


class BoardService:
    """Application state for one board: columns, sources, selection, credentials.

    Every mutation is written through to the StateStore when one is attached.
    Board writes share the sync lock: while a cycle is running they raise
    SyncInProgressError instead of being overwritten by its commit.
    """

    def __init__(
        self,
        board: BoardStore,
        registry: RepositoryRegistry,
        settings: Settings,
        credentials: Credentials | None = None,
        state_store: StateStore | None = None,
        adapter_factory: AdapterFactory | None = None,
    ) -> None:
        """Initialize the BoardService.

        Args:
            board: In-memory board.
            registry: Configured sources and selection.
            settings: Runtime settings.
            credentials: API keys for the trackers.
            state_store: Where mutations are persisted. None keeps everything in memory.
            adapter_factory: Builds provider adapters. Defaults to adapter_for.
        """
        self.board = board
        self.registry = registry
        self.settings = settings
        self.credentials = credentials or Credentials()
        self.state_store = state_store
        self.sync = SyncService(
            board, registry, settings, adapter_factory=adapter_factory or adapter_for
        )

    @classmethod
    def load(
        cls,
        state_store: StateStore,
        settings: Settings,
        adapter_factory: AdapterFactory | None = None,
    ) -> BoardService:
        """Rebuild the service from persisted state, creating default columns on first run.

        API keys missing from storage are taken from GITHUB_TOKEN / GITLAB_TOKEN.
        """
        state = state_store.load_state()
        board = BoardStore(state.columns, state.visible_column_ids)
        registry = RepositoryRegistry(state.sources, state.selected_source_ids)

        github_env, gitlab_env = credentials_from_env()
        credentials = Credentials(
            github_api_key=state.credentials.github_api_key or github_env,
            gitlab_api_key=state.credentials.gitlab_api_key or gitlab_env,
        )

        service = cls(
            board,
            registry,
            settings,
            credentials=credentials,
            state_store=state_store,
            adapter_factory=adapter_factory,
        )
        if board.initialize_defaults():
            service._persist_board()
        logger.info(
            "Loaded board: %d columns, %d sources (%d selected)",
            len(board.column_ids),
            len(registry.sources),
            len(registry.selected_ids),
        )
        return service

    # --- Persistence ---

    def _persist_board(self) -> None:
        if self.state_store is not None:
            self.state_store.save_columns(self.board.get_columns())
            self.state_store.save_visible_column_ids(self.board.visible_column_ids)

    def _persist_sources(self) -> None:
        if self.state_store is not None:
            self.state_store.save_sources(self.registry.sources)
            self.state_store.save_selected_source_ids(self.registry.selected_ids)

    # --- Reads ---

    def get_columns(self) -> list[Column]:
        return self.board.get_columns()

    def visible_columns(self) -> list[str]:
        return self.board.visible_column_ids

    def list_sources(self) -> list[tuple[RemoteSource, bool]]:
        """Configured sources with their selection state."""
        return [(s, self.registry.is_selected(s.source_id)) for s in self.registry.sources]

    # --- Sync ---

    def run_sync_cycle(self) -> SyncResult:
        """Fetch all selected sources, reconcile and commit.

        Raises:
            SyncInProgressError: If a cycle is already running.
        """
        result = self.sync.run_cycle(self.credentials)
        if result.committed:
            self._persist_board()
        return result

    # --- Sources ---

    def add_source(self, source: RemoteSource) -> RemoteSource:
        """Register a source and select it.

        Raises:
            ConfigurationError: If the descriptor is invalid.
            SourceExistsError: If the source is already configured.
        """
        added = self.registry.add(source)
        self._persist_sources()
        return added

    def add_source_url(self, url: str, provider: ProviderType | str | None = None) -> RemoteSource:
        """Register a source from its issues page URL.

        Raises:
            ConfigurationError: If the URL cannot be parsed.
            SourceExistsError: If the source is already configured.
        """
        added = self.registry.add_url(url, provider)
        self._persist_sources()
        return added

    def remove_source(self, source_id: str, clear_issues: bool = False) -> RemoteSource:
        """Remove a source. Its issues stay on the board unless clear_issues is set.

        Raises:
            SourceNotFoundError: If the source is not configured.
            SyncInProgressError: If clear_issues is set while a cycle is running.
        """
        with self.sync.exclusive() if clear_issues else nullcontext():
            removed = self.registry.remove(source_id)
            self._persist_sources()
            if clear_issues:
                self.board.clear_tracker_issues()
                self._persist_board()
        return removed

    def set_source_selected(self, source_id: str, selected: bool) -> None:
        """Raises:
        SourceNotFoundError: If the source is not configured.
        """
        self.registry.set_selected(source_id, selected)
        self._persist_sources()

    def select_all_sources(self) -> None:
        self.registry.select_all()
        self._persist_sources()

    def select_none_sources(self, clear_issues: bool = True) -> None:
        """Deselect everything; by default tracker issues are cleared from the board too.

        Raises:
            SyncInProgressError: If clear_issues is set while a cycle is running.
        """
        with self.sync.exclusive() if clear_issues else nullcontext():
            self.registry.select_none()
            self._persist_sources()
            if clear_issues:
                self.board.clear_tracker_issues()
                self._persist_board()

    def toggle_source(self, source_id: str) -> SyncResult | None:
        """Flip a source's selection and refresh the board.

        Selecting re-syncs with the new selection. Deselecting clears tracker
        issues and re-syncs the remaining selection, if any.

        Returns:
            The resulting sync, or None when nothing remained to sync.

        Raises:
            SourceNotFoundError: If the source is not configured.
            SyncInProgressError: If a cycle is already running.
        """
        selected = not self.registry.is_selected(source_id)
        with self.sync.exclusive():
            self.set_source_selected(source_id, selected)
            if not selected:
                self.board.clear_tracker_issues()
                self._persist_board()
        if not selected and not self.registry.selected_ids:
            return None
        return self.run_sync_cycle()

    # --- Columns ---

    def add_column(self, column: Column | str) -> Column:
        """Add a custom column, given as a Column or a display name.

        Raises:
            ColumnExistsError: If the column id is taken.
            SyncInProgressError: If a cycle is running.
        """
        if isinstance(column, str):
            column = Column(id=column_id_from_name(column), name=column.strip())
        with self.sync.exclusive():
            added = self.board.add_column(column)
            self._persist_board()
        return added

    def remove_column(self, column_id: str) -> None:
        """Raises:
        ColumnNotFoundError: If the column doesn't exist.
        SyncInProgressError: If a cycle is running.
        """
        with self.sync.exclusive():
            self.board.remove_column(column_id)
            self._persist_board()

    def reorder_columns(self, new_order: Sequence[str]) -> None:
        """Raises:
        InvalidColumnOrderError: If new_order is not a permutation of the columns.
        SyncInProgressError: If a cycle is running.
        """
        with self.sync.exclusive():
            self.board.reorder_columns(new_order)
            self._persist_board()

    def set_column_visible(self, column_id: str, visible: bool) -> None:
        with self.sync.exclusive():
            self.board.set_column_visible(column_id, visible)
            self._persist_board()

    # --- Issues ---

    def add_manual_issue(self, column_id: str, issue: Issue) -> Issue:
        """Raises:
        ColumnNotFoundError: If the column doesn't exist.
        SyncInProgressError: If a cycle is running.
        """
        with self.sync.exclusive():
            added = self.board.add_manual_issue(column_id, issue)
            self._persist_board()
        return added

    def create_manual_issue(self, column_id: str, title: str, body: str = "") -> Issue:
        return self.add_manual_issue(column_id, new_manual_issue(title, body))

    def delete_manual_issue(self, column_id: str, issue_id: int) -> Issue:
        """Raises:
        ColumnNotFoundError: If the column doesn't exist.
        IssueNotFoundError: If no manual item with this id is in the column.
        SyncInProgressError: If a cycle is running.
        """
        with self.sync.exclusive():
            removed = self.board.remove_manual_issue(column_id, issue_id)
            self._persist_board()
        return removed

    def move_issue(
        self,
        issue_id: int,
        from_column_id: str,
        to_column_id: str,
        target_index: int | None = None,
        source_id: str | None = None,
    ) -> None:
        """Raises:
        ColumnNotFoundError: If either column doesn't exist.
        IssueNotFoundError: If the issue is not in the source column.
        SyncInProgressError: If a cycle is running.
        """
        with self.sync.exclusive():
            self.board.move_issue(issue_id, from_column_id, to_column_id, target_index, source_id)
            self._persist_board()

    # --- Credentials ---

    def set_credentials(
        self, github_api_key: str | None = None, gitlab_api_key: str | None = None
    ) -> None:
        """Update API keys. None leaves a key unchanged, "" clears it."""
        if github_api_key is not None:
            self.credentials.github_api_key = github_api_key
        if gitlab_api_key is not None:
            self.credentials.gitlab_api_key = gitlab_api_key
        if self.state_store is not None:
            self.state_store.save_credentials(self.credentials)
        logger.info("Credentials updated: %r", self.credentials)

    def close(self) -> None:
        if self.state_store is not None:
            self.state_store.close()
