"""Data models for the Board State Store."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from zenager.providers.models import Issue, IssueState

BACKLOG_COLUMN_ID = "backlog"
DONE_COLUMN_ID = "done"

# (id, name) pairs, in board order
DEFAULT_COLUMNS: list[tuple[str, str]] = [
    (BACKLOG_COLUMN_ID, "Backlog"),
    ("todo", "Todo"),
    ("in-progress", "In Progress"),
    ("code-review", "Code Review"),
    ("blocked", "Blocked"),
    (DONE_COLUMN_ID, "Done"),
]

DEFAULT_COLUMN_IDS = [column_id for column_id, _ in DEFAULT_COLUMNS]


@dataclass
class Column:
    """A named bucket of issues, displayed in board order."""

    id: str
    name: str
    issues: list[Issue] = field(default_factory=list)

    @property
    def manual_issues(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.is_manual]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Column:
        """Deserialize a persisted column.

        Raises:
            KeyError: If ``id`` is missing.
        """
        column_id = str(data["id"])
        return cls(
            id=column_id,
            name=str(data.get("name") or column_id),
            issues=[Issue.from_dict(item) for item in data.get("issues") or []],
        )


def default_columns() -> list[Column]:
    """Fresh, empty default columns."""
    return [Column(id=column_id, name=name) for column_id, name in DEFAULT_COLUMNS]


def column_id_from_name(name: str) -> str:
    """Derive a column id from a display name ('Waiting On QA' -> 'waiting-on-qa')."""
    return re.sub(r"\s+", "-", name.strip().lower())


def new_manual_issue(title: str, body: str = "") -> Issue:
    """Build a manual board item, identified by the current time in milliseconds."""
    now = datetime.now(UTC).isoformat()
    return Issue(
        id=time.time_ns() // 1_000_000,
        title=title,
        body=body,
        state=IssueState.OPEN,
        created_at=now,
        updated_at=now,
        is_manual=True,
    )
