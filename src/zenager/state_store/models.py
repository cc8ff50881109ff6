"""SQLAlchemy models for the persisted board state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from zenager.board.models import Column  # noqa: TC001
from zenager.providers.models import RemoteSource  # noqa: TC001


class StateKey(StrEnum):
    """Independently persisted values."""

    COLUMNS = "columns"
    SOURCES = "sources"
    SELECTED_SOURCES = "selected_sources"
    VISIBLE_COLUMNS = "visible_columns"
    GITHUB_API_KEY = "github_api_key"
    GITLAB_API_KEY = "gitlab_api_key"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class PersistedValue(Base):
    """One persisted value, stored as a JSON document."""

    __tablename__ = "persisted_values"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PersistedValue(key={self.key!r})>"


@dataclass
class Credentials:
    """Opaque API keys. Never logged, never returned by the API."""

    github_api_key: str = ""
    gitlab_api_key: str = ""

    def __repr__(self) -> str:
        return (
            f"Credentials(github_api_key={'set' if self.github_api_key else 'unset'}, "
            f"gitlab_api_key={'set' if self.gitlab_api_key else 'unset'})"
        )


@dataclass
class BoardState:
    """Everything loaded at startup. None means the value was absent or unusable."""

    columns: list[Column] = field(default_factory=list)
    sources: list[RemoteSource] = field(default_factory=list)
    selected_source_ids: list[str] = field(default_factory=list)
    visible_column_ids: list[str] | None = None
    credentials: Credentials = field(default_factory=Credentials)
