"""Adapter selection by source type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zenager.providers.github import GitHubAdapter
from zenager.providers.gitlab import GitLabAdapter
from zenager.providers.models import GitHubSource, GitLabSource

if TYPE_CHECKING:
    from zenager.config import Settings
    from zenager.providers.base import ProviderAdapter
    from zenager.providers.models import RemoteSource


def adapter_for(
    source: RemoteSource,
    settings: Settings,
    github_api_key: str = "",
    gitlab_api_key: str = "",
) -> ProviderAdapter:
    """Build the adapter for a source, handing it only its own provider's credential.

    Raises:
        TypeError: If the source type is not supported.
    """
    options = {
        "page_size": settings.page_size,
        "max_pages": settings.max_pages,
        "timeout": settings.request_timeout,
        "user_agent": settings.user_agent,
    }
    if isinstance(source, GitHubSource):
        return GitHubAdapter(
            source, token=github_api_key, base_url=settings.github_api_url, **options
        )
    if isinstance(source, GitLabSource):
        return GitLabAdapter(source, token=gitlab_api_key, **options)
    raise TypeError(f"Unsupported source type: {type(source).__name__}")
