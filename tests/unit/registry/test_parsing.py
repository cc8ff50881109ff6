"""Unit tests for source URL parsing."""

import pytest

from zenager.providers import GitHubSource, GitLabSource, ProviderType
from zenager.registry import (
    ConfigurationError,
    parse_github_url,
    parse_gitlab_url,
    parse_source_url,
    validate_source,
)


@pytest.mark.unit
class TestParseGitHubUrl:
    """Tests for GitHub issue page URLs."""

    def test_plain_issues_url(self) -> None:
        source = parse_github_url("https://github.com/octo/board/issues")

        assert source.owner == "octo"
        assert source.repo_name == "board"
        assert source.assignee is None
        assert source.url == "https://github.com/octo/board/issues"

    def test_assignee_query_param(self) -> None:
        source = parse_github_url("https://github.com/octo/board/issues?assignee=alice")

        assert source.assignee == "alice"

    def test_assignee_inside_search_query(self) -> None:
        source = parse_github_url(
            "https://github.com/octo/board/issues?q=is%3Aissue+is%3Aopen+assignee%3Abob-x"
        )

        assert source.assignee == "bob-x"

    @pytest.mark.parametrize(
        "url",
        [
            "https://gitlab.com/octo/board/issues",
            "https://github.com/octo/board",
            "https://github.com/octo/board/pulls",
            "ftp://github.com/octo/board/issues",
            "not a url",
        ],
    )
    def test_rejects_non_issue_pages(self, url: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_github_url(url)


@pytest.mark.unit
class TestParseGitLabUrl:
    """Tests for GitLab issue page URLs."""

    def test_gitlab_com(self) -> None:
        source = parse_gitlab_url("https://gitlab.com/group/project/-/issues")

        assert source.domain == "https://gitlab.com"
        assert source.project_path == "group/project"

    def test_self_hosted_with_port_and_subgroups(self) -> None:
        source = parse_gitlab_url("http://git.local:8080/team/sub/app/-/issues?label_name=bug")

        assert source.domain == "http://git.local:8080"
        assert source.project_path == "team/sub/app"
        assert source.source_id == "gitlab:http://git.local:8080/team/sub/app"

    def test_project_url_without_issues(self) -> None:
        source = parse_gitlab_url("https://gitlab.com/group/project")

        assert source.project_path == "group/project"

    def test_rejects_single_segment(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_gitlab_url("https://gitlab.com/project/-/issues")


@pytest.mark.unit
class TestParseSourceUrl:
    """Tests for provider detection."""

    def test_detects_github(self) -> None:
        assert isinstance(parse_source_url("https://github.com/o/r/issues"), GitHubSource)

    def test_other_hosts_are_gitlab(self) -> None:
        assert isinstance(parse_source_url("https://git.example.org/g/p/-/issues"), GitLabSource)

    def test_explicit_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="GitHub.com"):
            parse_source_url("https://git.example.org/g/p/issues", ProviderType.GITHUB)

    def test_unknown_provider(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported provider"):
            parse_source_url("https://github.com/o/r/issues", "bitbucket")


@pytest.mark.unit
class TestValidateSource:
    """Tests for descriptor validation."""

    def test_invalid_github_owner(self) -> None:
        with pytest.raises(ConfigurationError):
            validate_source(GitHubSource(owner="-bad-", repo_name="r"))

    def test_invalid_gitlab_domain(self) -> None:
        with pytest.raises(ConfigurationError):
            validate_source(GitLabSource(domain="gitlab.com", project_path="g/p"))
