"""Data models for provider adapters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

DEFAULT_LABEL_COLOR = "428bca"


class IssueState(StrEnum):
    """Normalized issue state."""

    OPEN = "open"
    CLOSED = "closed"


class ProviderType(StrEnum):
    """Supported issue trackers."""

    GITHUB = "github"
    GITLAB = "gitlab"


@dataclass(frozen=True)
class Label:
    """An issue label. ``color`` is six hex digits without the leading '#'."""

    name: str
    color: str = DEFAULT_LABEL_COLOR

    @property
    def css_color(self) -> str:
        return f"#{self.color}"


@dataclass(frozen=True)
class Assignee:
    """The user an issue is assigned to."""

    login: str
    avatar_url: str = ""


@dataclass
class Issue:
    """Normalized unit of work shown on the board.

    ``id`` is only unique within one provider, so placements are keyed by
    ``(source_id, id)`` (see :attr:`key`). Manual issues have no source.
    """

    id: int
    title: str
    body: str = ""
    state: IssueState = IssueState.OPEN
    labels: list[Label] = field(default_factory=list)
    assignee: Assignee | None = None
    created_at: str = ""
    updated_at: str = ""
    source_url: str | None = None
    is_manual: bool = False
    source_id: str | None = None

    @property
    def key(self) -> tuple[str | None, int]:
        """Placement key: provider-local id qualified by its source."""
        return (self.source_id, self.id)

    @property
    def is_open(self) -> bool:
        return self.state == IssueState.OPEN

    def as_manual(self) -> Issue:
        """Return a copy marked as a manual item (no tracker provenance)."""
        return replace(self, is_manual=True, source_url=None, source_id=None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for persistence."""
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "state": self.state.value,
            "labels": [{"name": label.name, "color": label.color} for label in self.labels],
            "assignee": (
                {"login": self.assignee.login, "avatar_url": self.assignee.avatar_url}
                if self.assignee
                else None
            ),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "source_url": self.source_url,
            "is_manual": self.is_manual,
            "source_id": self.source_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Deserialize a persisted issue.

        Raises:
            KeyError: If ``id`` or ``title`` is missing.
            ValueError: If ``id`` is not an integer.
        """
        assignee_data = data.get("assignee")
        assignee = None
        if isinstance(assignee_data, dict) and assignee_data.get("login"):
            assignee = Assignee(
                login=str(assignee_data["login"]),
                avatar_url=str(assignee_data.get("avatar_url") or ""),
            )

        labels = [
            Label(name=str(item["name"]), color=str(item.get("color") or DEFAULT_LABEL_COLOR))
            for item in data.get("labels") or []
            if isinstance(item, dict) and "name" in item
        ]

        state = IssueState.OPEN if data.get("state") == IssueState.OPEN.value else IssueState.CLOSED
        is_manual = bool(data.get("is_manual", False))

        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            body=str(data.get("body") or ""),
            state=state,
            labels=labels,
            assignee=assignee,
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
            source_url=None if is_manual else data.get("source_url"),
            is_manual=is_manual,
            source_id=None if is_manual else data.get("source_id"),
        )


@dataclass(frozen=True)
class GitHubSource:
    """A GitHub repository, optionally filtered to one assignee."""

    owner: str
    repo_name: str
    assignee: str | None = None
    url: str | None = None

    type: ProviderType = field(default=ProviderType.GITHUB, init=False)

    @property
    def source_id(self) -> str:
        return f"github:{self.owner}/{self.repo_name}"

    @property
    def display_name(self) -> str:
        return f"{self.owner}/{self.repo_name}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "owner": self.owner,
            "repo_name": self.repo_name,
            "assignee": self.assignee,
            "url": self.url,
        }


@dataclass(frozen=True)
class GitLabSource:
    """A GitLab project on gitlab.com or a self-hosted instance."""

    domain: str  # scheme://host[:port]
    project_path: str
    url: str | None = None

    type: ProviderType = field(default=ProviderType.GITLAB, init=False)

    @property
    def source_id(self) -> str:
        return f"gitlab:{self.domain}/{self.project_path}"

    @property
    def display_name(self) -> str:
        host = self.domain.split("://", 1)[-1]
        return f"{host}/{self.project_path.rsplit('/', 1)[-1]}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "domain": self.domain,
            "project_path": self.project_path,
            "url": self.url,
        }


RemoteSource = GitHubSource | GitLabSource


def source_from_dict(data: dict[str, Any]) -> RemoteSource:
    """Deserialize a persisted source descriptor.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the source type is unknown.
    """
    source_type = ProviderType(data["type"])
    if source_type == ProviderType.GITHUB:
        return GitHubSource(
            owner=data["owner"],
            repo_name=data["repo_name"],
            assignee=data.get("assignee") or None,
            url=data.get("url") or None,
        )
    return GitLabSource(
        domain=data["domain"],
        project_path=data["project_path"],
        url=data.get("url") or None,
    )
