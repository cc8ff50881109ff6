"""Parsing and validation of tracker issue-page URLs into source descriptors."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

from zenager.providers.models import GitHubSource, GitLabSource, ProviderType, RemoteSource
from zenager.registry.exceptions import ConfigurationError

GITHUB_HOST = "github.com"

_GITHUB_OWNER = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9]|-(?![.-])){0,38}$")
_GITHUB_REPO = re.compile(r"^[a-zA-Z0-9._-]+$")
_GITLAB_PROJECT_PATH = re.compile(r"^[a-zA-Z0-9._/-]+$")
_QUERY_ASSIGNEE = re.compile(r"assignee:([A-Za-z0-9-]+)")


def validate_github_repo(owner: str, repo_name: str) -> bool:
    return bool(_GITHUB_OWNER.match(owner)) and bool(_GITHUB_REPO.match(repo_name))


def validate_gitlab_project_path(project_path: str) -> bool:
    return bool(_GITLAB_PROJECT_PATH.match(project_path)) and len(project_path.split("/")) >= 2


def validate_gitlab_domain(domain: str) -> bool:
    parts = urlsplit(domain)
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def validate_source(source: RemoteSource) -> None:
    """Check a descriptor before it is registered.

    Raises:
        ConfigurationError: If the descriptor cannot identify a repository.
    """
    if isinstance(source, GitHubSource):
        if not validate_github_repo(source.owner, source.repo_name):
            raise ConfigurationError(
                f"Invalid GitHub repository: {source.owner!r}/{source.repo_name!r}"
            )
        return
    if isinstance(source, GitLabSource):
        if not validate_gitlab_domain(source.domain):
            raise ConfigurationError(f"Invalid GitLab domain: {source.domain!r}")
        if not validate_gitlab_project_path(source.project_path):
            raise ConfigurationError(f"Invalid GitLab project path: {source.project_path!r}")
        return
    raise ConfigurationError(f"Unsupported source type: {type(source).__name__}")


def _split_url(url: str) -> tuple[str, str, str, list[str]]:
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
        port = parts.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid URL: {url!r}") from e
    if parts.scheme not in ("http", "https") or not hostname:
        raise ConfigurationError(f"Invalid URL: {url!r}")
    host = f"{hostname}:{port}" if port else hostname
    segments = [segment for segment in parts.path.split("/") if segment]
    return parts.scheme, host, parts.query, segments


def parse_github_url(url: str) -> GitHubSource:
    """Parse ``https://github.com/<owner>/<repo>/issues[?...]``.

    An assignee filter is taken from the ``assignee`` or ``author`` query
    parameter, or from an ``assignee:<login>`` term inside ``q``.

    Raises:
        ConfigurationError: If the URL is not a GitHub issues page.
    """
    _scheme, host, query, segments = _split_url(url)
    if host != GITHUB_HOST:
        raise ConfigurationError("URL must be from GitHub.com")
    if len(segments) < 3 or segments[2] != "issues":
        raise ConfigurationError("URL must be a GitHub issues page (e.g., /owner/repo/issues)")

    owner, repo_name = segments[0], segments[1]
    if not validate_github_repo(owner, repo_name):
        raise ConfigurationError(f"Invalid GitHub repository: {owner}/{repo_name}")

    params = parse_qs(query)
    assignee = (params.get("assignee") or params.get("author") or [None])[0]
    if not assignee:
        for term in params.get("q", []):
            match = _QUERY_ASSIGNEE.search(term)
            if match:
                assignee = match.group(1)
                break

    return GitHubSource(owner=owner, repo_name=repo_name, assignee=assignee or None, url=url)


def parse_gitlab_url(url: str) -> GitLabSource:
    """Parse ``<scheme>://<host>/<namespace>/<project>[/-]/issues[...]``.

    The project path is everything before ``issues`` (the ``-`` separator is
    dropped); a URL without ``issues`` is taken as a project URL.

    Raises:
        ConfigurationError: If no project path can be derived.
    """
    scheme, host, _query, segments = _split_url(url)
    domain = f"{scheme}://{host}"

    if "issues" in segments:
        path_segments = segments[: segments.index("issues")]
    else:
        path_segments = segments
    path_segments = [segment for segment in path_segments if segment != "-"]

    project_path = "/".join(path_segments)
    if not validate_gitlab_project_path(project_path):
        raise ConfigurationError(
            "URL must be a GitLab issues page (e.g., /namespace/project/-/issues)"
        )

    return GitLabSource(domain=domain, project_path=project_path, url=url)


def parse_source_url(url: str, provider: ProviderType | str | None = None) -> RemoteSource:
    """Parse an issues URL for the given provider, or guess it from the host.

    Raises:
        ConfigurationError: If the URL cannot be parsed.
    """
    if provider is None:
        _scheme, host, _query, _segments = _split_url(url)
        provider = ProviderType.GITHUB if host == GITHUB_HOST else ProviderType.GITLAB
    try:
        provider = ProviderType(provider)
    except ValueError as e:
        raise ConfigurationError(f"Unsupported provider: {provider!r}") from e

    if provider == ProviderType.GITHUB:
        return parse_github_url(url)
    return parse_gitlab_url(url)
