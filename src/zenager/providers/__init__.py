"""Provider adapters - Fetch and normalize issues from GitHub and GitLab."""

from zenager.providers.base import ProviderAdapter
from zenager.providers.colors import color_from_text, normalize_color
from zenager.providers.exceptions import FetchError, ParseError, ProviderError
from zenager.providers.factory import adapter_for
from zenager.providers.github import GitHubAdapter
from zenager.providers.gitlab import GitLabAdapter
from zenager.providers.models import (
    DEFAULT_LABEL_COLOR,
    Assignee,
    GitHubSource,
    GitLabSource,
    Issue,
    IssueState,
    Label,
    ProviderType,
    RemoteSource,
    source_from_dict,
)

__all__ = [
    "DEFAULT_LABEL_COLOR",
    "Assignee",
    "FetchError",
    "GitHubAdapter",
    "GitHubSource",
    "GitLabAdapter",
    "GitLabSource",
    "Issue",
    "IssueState",
    "Label",
    "ParseError",
    "ProviderAdapter",
    "ProviderError",
    "ProviderType",
    "RemoteSource",
    "adapter_for",
    "color_from_text",
    "normalize_color",
    "source_from_dict",
]
