"""Database connection manager for the persisted board state."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from zenager.state_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY_DB = ":memory:"


class Database:
    """SQLite connection manager.

    File databases run in WAL mode. ``":memory:"`` shares one connection
    across threads so the API test client sees the same data.
    """

    def __init__(self, db_path: str = "zenager.db") -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory DB.
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.db_path == MEMORY_DB:
                self._engine = create_engine(
                    "sqlite:///:memory:",
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
                self._engine = create_engine(f"sqlite:///{self.db_path}")

                @event.listens_for(self._engine, "connect")
                def set_sqlite_pragma(dbapi_connection: object, _connection_record: object) -> None:
                    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.close()

        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close the database connection."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
