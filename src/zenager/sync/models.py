"""Data models for the sync cycle."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SourceFailure:
    """One source that could not be fetched during a cycle.

    Attributes:
        source_id: The failing source.
        provider: "github" or "gitlab".
        message: Sanitized error description.
        status_code: HTTP status, if a response was received.
        page: Page being fetched when the failure happened.
    """

    source_id: str
    provider: str
    message: str
    status_code: int | None = None
    page: int | None = None


@dataclass
class SyncResult:
    """Result of a sync cycle.

    Attributes:
        synced_sources: Sources whose issues were fetched successfully.
        failures: Sources that failed; their issues kept their previous placement.
        issues_fetched: Total issues fetched across successful sources.
        new_issues: Open issues placed for the first time (landed in backlog).
        closed_issues: Fetched issues that are closed (carried issues are not counted).
        committed: Whether the board was updated.
    """

    synced_sources: list[str] = field(default_factory=list)
    failures: list[SourceFailure] = field(default_factory=list)
    issues_fetched: int = 0
    new_issues: int = 0
    closed_issues: int = 0
    committed: bool = False

    @property
    def success(self) -> bool:
        """True if no source failed."""
        return not self.failures
