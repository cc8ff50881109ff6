"""StateStore - Durable copy of the board, sources, selection and credentials."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from zenager.board.models import Column
from zenager.providers.models import RemoteSource, source_from_dict
from zenager.state_store.database import Database
from zenager.state_store.exceptions import StateWriteError
from zenager.state_store.models import BoardState, Credentials, PersistedValue, StateKey

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes the six persisted values.

    Each value is stored independently. There is no schema versioning: a
    value that is missing or cannot be decoded loads as absent, and callers
    fall back to defaults.
    """

    def __init__(self, db_path: str = "zenager.db") -> None:
        """Initialize State Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Raw values ---

    def _read(self, key: StateKey) -> Any | None:
        with self._db.session() as session:
            row = session.get(PersistedValue, key.value)
            raw = row.value if row is not None else None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Persisted value %s is not valid JSON, using defaults", key.value)
            return None

    def _write(self, key: StateKey, value: Any) -> None:
        encoded = json.dumps(value)
        try:
            with self._db.session() as session:
                row = session.get(PersistedValue, key.value)
                if row is None:
                    session.add(PersistedValue(key=key.value, value=encoded))
                else:
                    row.value = encoded
        except SQLAlchemyError as e:
            raise StateWriteError(f"Failed to persist {key.value}") from e

    def _read_list(self, key: StateKey) -> list[Any] | None:
        value = self._read(key)
        if value is None:
            return None
        if not isinstance(value, list):
            logger.warning("Persisted value %s is not a list, using defaults", key.value)
            return None
        return value

    # --- Columns ---

    def load_columns(self) -> list[Column]:
        """Load columns in board order. Entries that cannot be decoded are skipped."""
        columns = []
        for item in self._read_list(StateKey.COLUMNS) or []:
            try:
                columns.append(Column.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable persisted column: %r", item)
        return columns

    def save_columns(self, columns: Iterable[Column]) -> None:
        self._write(StateKey.COLUMNS, [column.to_dict() for column in columns])

    # --- Sources and selection ---

    def load_sources(self) -> list[RemoteSource]:
        sources = []
        for item in self._read_list(StateKey.SOURCES) or []:
            try:
                sources.append(source_from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping unreadable persisted source: %r", item)
        return sources

    def save_sources(self, sources: Iterable[RemoteSource]) -> None:
        self._write(StateKey.SOURCES, [source.to_dict() for source in sources])

    def load_selected_source_ids(self) -> list[str]:
        return [str(item) for item in self._read_list(StateKey.SELECTED_SOURCES) or []]

    def save_selected_source_ids(self, source_ids: Iterable[str]) -> None:
        self._write(StateKey.SELECTED_SOURCES, list(source_ids))

    # --- Visible columns ---

    def load_visible_column_ids(self) -> list[str] | None:
        """Visible column ids, or None when absent or empty (callers use the defaults)."""
        value = self._read_list(StateKey.VISIBLE_COLUMNS)
        if not value:
            return None
        return [str(item) for item in value]

    def save_visible_column_ids(self, column_ids: Iterable[str]) -> None:
        self._write(StateKey.VISIBLE_COLUMNS, list(column_ids))

    # --- Credentials ---

    def load_credentials(self) -> Credentials:
        github = self._read(StateKey.GITHUB_API_KEY)
        gitlab = self._read(StateKey.GITLAB_API_KEY)
        return Credentials(
            github_api_key=github if isinstance(github, str) else "",
            gitlab_api_key=gitlab if isinstance(gitlab, str) else "",
        )

    def save_credentials(self, credentials: Credentials) -> None:
        self._write(StateKey.GITHUB_API_KEY, credentials.github_api_key)
        self._write(StateKey.GITLAB_API_KEY, credentials.gitlab_api_key)

    # --- Whole state ---

    def load_state(self) -> BoardState:
        """Load everything needed to rebuild the board service at startup."""
        return BoardState(
            columns=self.load_columns(),
            sources=self.load_sources(),
            selected_source_ids=self.load_selected_source_ids(),
            visible_column_ids=self.load_visible_column_ids(),
            credentials=self.load_credentials(),
        )
