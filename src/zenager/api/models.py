"""Pydantic models for REST API."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from zenager.board import Column
from zenager.providers import GitHubSource, Issue, RemoteSource
from zenager.sync import SyncResult

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Issue models


class LabelResponse(BaseModel):
    """Response model for a label. ``color`` is rendered as ``#rrggbb``."""

    name: str
    color: str


class AssigneeResponse(BaseModel):
    login: str
    avatar_url: str


class IssueResponse(BaseModel):
    """Response model for an issue or manual item."""

    id: int
    title: str
    body: str
    state: str
    labels: list[LabelResponse]
    assignee: AssigneeResponse | None
    created_at: str
    updated_at: str
    source_url: str | None
    is_manual: bool
    source_id: str | None


def issue_to_response(issue: Issue) -> IssueResponse:
    """Convert an Issue to IssueResponse."""
    return IssueResponse(
        id=issue.id,
        title=issue.title,
        body=issue.body,
        state=issue.state.value,
        labels=[LabelResponse(name=label.name, color=label.css_color) for label in issue.labels],
        assignee=(
            AssigneeResponse(login=issue.assignee.login, avatar_url=issue.assignee.avatar_url)
            if issue.assignee
            else None
        ),
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        source_url=issue.source_url,
        is_manual=issue.is_manual,
        source_id=issue.source_id,
    )


class ManualIssueCreate(BaseModel):
    """Request model for creating a manual item."""

    title: str = Field(..., min_length=1, max_length=1024)
    body: str = Field(default="")


class IssueMove(BaseModel):
    """Request model for moving an issue between (or within) columns."""

    issue_id: int
    from_column_id: str = Field(..., min_length=1)
    to_column_id: str = Field(..., min_length=1)
    target_index: int | None = Field(default=None, ge=0)
    source_id: str | None = None


# Column models


class ColumnResponse(BaseModel):
    """Response model for a column."""

    id: str
    name: str
    visible: bool
    issues: list[IssueResponse]


def column_to_response(column: Column, visible: bool) -> ColumnResponse:
    """Convert a Column to ColumnResponse."""
    return ColumnResponse(
        id=column.id,
        name=column.name,
        visible=visible,
        issues=[issue_to_response(issue) for issue in column.issues],
    )


class ColumnCreate(BaseModel):
    """Request model for adding a custom column. The id is derived from the name."""

    name: str = Field(..., min_length=1, max_length=255, pattern=r"\S")


class ColumnOrderUpdate(BaseModel):
    order: list[str]


class ColumnVisibilityUpdate(BaseModel):
    visible: bool


# Source models


class SourceCreate(BaseModel):
    """Request model for adding a source from its issues page URL."""

    url: str = Field(..., min_length=1, max_length=2048)
    provider: Literal["github", "gitlab"] | None = None


class SourceResponse(BaseModel):
    """Response model for a configured source."""

    source_id: str
    type: str
    display_name: str
    url: str | None
    assignee: str | None = None
    selected: bool


def source_to_response(source: RemoteSource, selected: bool) -> SourceResponse:
    """Convert a source descriptor to SourceResponse."""
    return SourceResponse(
        source_id=source.source_id,
        type=source.type.value,
        display_name=source.display_name,
        url=source.url,
        assignee=source.assignee if isinstance(source, GitHubSource) else None,
        selected=selected,
    )


class SourceSelectionUpdate(BaseModel):
    selected: bool


# Credential models


class CredentialsUpdate(BaseModel):
    """Request model for API keys. Omitted keys are left unchanged."""

    github_api_key: str | None = None
    gitlab_api_key: str | None = None


class CredentialsStatusResponse(BaseModel):
    """Which API keys are configured. Key values are never returned."""

    github_configured: bool
    gitlab_configured: bool


# Sync models


class SourceFailureResponse(BaseModel):
    source_id: str
    provider: str
    message: str
    status_code: int | None
    page: int | None


class SyncResultResponse(BaseModel):
    """Response model for a sync cycle."""

    synced_sources: list[str]
    failures: list[SourceFailureResponse]
    issues_fetched: int
    new_issues: int
    closed_issues: int
    committed: bool
    success: bool


def sync_result_to_response(result: SyncResult) -> SyncResultResponse:
    """Convert a SyncResult to SyncResultResponse."""
    return SyncResultResponse(
        synced_sources=list(result.synced_sources),
        failures=[
            SourceFailureResponse(
                source_id=f.source_id,
                provider=f.provider,
                message=f.message,
                status_code=f.status_code,
                page=f.page,
            )
            for f in result.failures
        ],
        issues_fetched=result.issues_fetched,
        new_issues=result.new_issues,
        closed_issues=result.closed_issues,
        committed=result.committed,
        success=result.success,
    )
