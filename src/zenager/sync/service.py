"""SyncService - One fetch, reconcile and commit cycle over the selected sources."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from zenager.providers import IssueState, ProviderError, adapter_for
from zenager.providers.exceptions import FetchError
from zenager.reconcile import (
    build_legacy_index,
    build_placement_index,
    known_column,
    merge_with_manual,
    reconcile,
)
from zenager.sync.exceptions import SyncInProgressError
from zenager.sync.models import SourceFailure, SyncResult

if TYPE_CHECKING:
    from zenager.board import BoardStore
    from zenager.config import Settings
    from zenager.providers import Issue, ProviderAdapter, RemoteSource
    from zenager.registry import RepositoryRegistry
    from zenager.state_store import Credentials

logger = logging.getLogger(__name__)

AdapterFactory = Callable[["RemoteSource", "Settings", str, str], "ProviderAdapter"]


class SyncService:
    """Runs sync cycles against the board.

    Sources are fetched one after another. The board snapshot used for
    placement is taken once before the first fetch, and reconciliation sees
    the union of every source's issues in a single pass.
    """

    def __init__(
        self,
        board: BoardStore,
        registry: RepositoryRegistry,
        settings: Settings,
        adapter_factory: AdapterFactory = adapter_for,
    ) -> None:
        """Initialize the SyncService.

        Args:
            board: Board to reconcile into.
            registry: Source of the active selection.
            settings: Paging and HTTP options for adapters.
            adapter_factory: Builds an adapter for a source (injectable for tests).
        """
        self.board = board
        self.registry = registry
        self.settings = settings
        self.adapter_factory = adapter_factory
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the cycle lock for the duration of a board write.

        Raises:
            SyncInProgressError: If a cycle is running.
        """
        if not self._lock.acquire(blocking=False):
            raise SyncInProgressError("A sync cycle is already running")
        try:
            yield
        finally:
            self._lock.release()

    def run_cycle(self, credentials: Credentials) -> SyncResult:
        """Fetch every selected source, reconcile, and commit to the board.

        A failing source is logged and recorded; the remaining sources are
        still fetched. The failing source's issues keep their previous
        placement instead of disappearing from the board.

        Raises:
            SyncInProgressError: If another cycle is running.
        """
        with self.exclusive():
            return self._run(credentials)

    def _run(self, credentials: Credentials) -> SyncResult:
        result = SyncResult()
        sources = self.registry.active_sources()
        if not sources:
            logger.info("No sources selected, nothing to sync")
            return result

        snapshot = self.board.snapshot()
        fresh: list[Issue] = []
        failed_ids: set[str] = set()

        for source in sources:
            issues = self._fetch_source(source, credentials, result)
            if issues is None:
                failed_ids.add(source.source_id)
                continue
            fresh.extend(issues)
            result.synced_sources.append(source.source_id)
            result.issues_fetched += len(issues)

        if not result.synced_sources:
            logger.error("All %d selected sources failed, board left unchanged", len(sources))
            return result

        carried = [
            issue
            for column in snapshot
            for issue in column.issues
            if not issue.is_manual and issue.source_id in failed_ids
        ]
        if carried:
            logger.info("Keeping %d issues from failed sources in place", len(carried))

        placements = reconcile(fresh + carried, snapshot)
        self.board.replace_all_issues(merge_with_manual(placements, snapshot))
        result.committed = True

        index = build_placement_index(snapshot)
        legacy_index = build_legacy_index(snapshot)
        latest = {issue.key: issue for issue in fresh}
        for issue in latest.values():
            if issue.state == IssueState.CLOSED:
                result.closed_issues += 1
            elif known_column(issue, index, legacy_index) is None:
                result.new_issues += 1

        logger.info(
            "Sync complete: %d issues from %d sources (%d new, %d failed sources)",
            result.issues_fetched,
            len(result.synced_sources),
            result.new_issues,
            len(result.failures),
        )
        return result

    def _fetch_source(
        self, source: RemoteSource, credentials: Credentials, result: SyncResult
    ) -> list[Issue] | None:
        adapter = self.adapter_factory(
            source,
            self.settings,
            credentials.github_api_key,
            credentials.gitlab_api_key,
        )
        try:
            return adapter.fetch_issues()
        except FetchError as e:
            logger.error("Failed to fetch issues from %s: %s", source.source_id, e)
            result.failures.append(
                SourceFailure(
                    source_id=source.source_id,
                    provider=e.provider,
                    message=str(e),
                    status_code=e.status_code,
                    page=e.page,
                )
            )
        except ProviderError as e:
            logger.error("Failed to fetch issues from %s: %s", source.source_id, e)
            result.failures.append(
                SourceFailure(source_id=source.source_id, provider=adapter.provider, message=str(e))
            )
        finally:
            adapter.close()
        return None
