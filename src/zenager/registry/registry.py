"""RepositoryRegistry - Configured sources and which of them are selected."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from zenager.providers.models import ProviderType, RemoteSource
from zenager.registry.exceptions import SourceExistsError, SourceNotFoundError
from zenager.registry.parsing import parse_source_url, validate_source

logger = logging.getLogger(__name__)


class RepositoryRegistry:
    """Tracks configured remote sources and the selection set.

    Pure bookkeeping: no network access and no board access. Removing or
    deselecting a source leaves the board alone; clearing its issues is the
    caller's decision.
    """

    def __init__(
        self,
        sources: Iterable[RemoteSource] = (),
        selected_ids: Iterable[str] = (),
    ) -> None:
        """Initialize from persisted state.

        Selected ids that name no configured source are dropped.
        """
        self._sources: list[RemoteSource] = []
        for source in sources:
            if self._index_of(source.source_id) is not None:
                logger.warning("Ignoring duplicate persisted source %s", source.source_id)
                continue
            self._sources.append(source)
        known = {s.source_id for s in self._sources}
        self._selected: set[str] = {sid for sid in selected_ids if sid in known}

    @property
    def sources(self) -> list[RemoteSource]:
        return list(self._sources)

    @property
    def selected_ids(self) -> list[str]:
        """Selected source ids in configured order."""
        return [s.source_id for s in self._sources if s.source_id in self._selected]

    def _index_of(self, source_id: str) -> int | None:
        for i, source in enumerate(self._sources):
            if source.source_id == source_id:
                return i
        return None

    def get(self, source_id: str) -> RemoteSource:
        """Get a configured source.

        Raises:
            SourceNotFoundError: If no source has this id.
        """
        index = self._index_of(source_id)
        if index is None:
            raise SourceNotFoundError(f"Source '{source_id}' not found")
        return self._sources[index]

    def add(self, source: RemoteSource) -> RemoteSource:
        """Append a source and select it.

        Raises:
            ConfigurationError: If the descriptor is invalid.
            SourceExistsError: If a source with the same id is configured.
        """
        validate_source(source)
        if self._index_of(source.source_id) is not None:
            raise SourceExistsError(f"Source '{source.source_id}' already exists")
        self._sources.append(source)
        self._selected.add(source.source_id)
        logger.info("Added source %s", source.source_id)
        return source

    def add_url(self, url: str, provider: ProviderType | str | None = None) -> RemoteSource:
        """Parse an issues URL and add the resulting source.

        Raises:
            ConfigurationError: If the URL cannot be parsed. Nothing is added.
            SourceExistsError: If the source is already configured.
        """
        return self.add(parse_source_url(url, provider))

    def remove(self, source_id: str) -> RemoteSource:
        """Remove a source and deselect it.

        Raises:
            SourceNotFoundError: If no source has this id.
        """
        source = self.get(source_id)
        self._sources = [s for s in self._sources if s.source_id != source_id]
        self._selected.discard(source_id)
        logger.info("Removed source %s", source_id)
        return source

    def is_selected(self, source_id: str) -> bool:
        return source_id in self._selected

    def set_selected(self, source_id: str, selected: bool) -> None:
        """Include or exclude a source from the next fetch cycle.

        Raises:
            SourceNotFoundError: If no source has this id.
        """
        self.get(source_id)
        if selected:
            self._selected.add(source_id)
        else:
            self._selected.discard(source_id)

    def select_all(self) -> None:
        self._selected = {s.source_id for s in self._sources}

    def select_none(self) -> None:
        self._selected = set()

    def active_sources(self) -> list[RemoteSource]:
        """Selected sources, in configured order."""
        return [s for s in self._sources if s.source_id in self._selected]
