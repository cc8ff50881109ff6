"""Repository Registry - Configured issue sources and the selection set."""

from zenager.registry.exceptions import (
    ConfigurationError,
    RegistryError,
    SourceExistsError,
    SourceNotFoundError,
)
from zenager.registry.parsing import (
    parse_github_url,
    parse_gitlab_url,
    parse_source_url,
    validate_source,
)
from zenager.registry.registry import RepositoryRegistry

__all__ = [
    "ConfigurationError",
    "RegistryError",
    "RepositoryRegistry",
    "SourceExistsError",
    "SourceNotFoundError",
    "parse_github_url",
    "parse_gitlab_url",
    "parse_source_url",
    "validate_source",
]
