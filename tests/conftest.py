"""Shared pytest fixtures and configuration."""

import pytest

from zenager.providers import GitHubSource, GitLabSource, Issue, IssueState, Label


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture(autouse=True)
def _no_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real tokens and overrides in the environment out of tests."""
    for name in ("GITHUB_TOKEN", "GITLAB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    for name in ("DB_PATH", "LOG_DIR", "LOG_LEVEL", "PAGE_SIZE", "MAX_PAGES"):
        monkeypatch.delenv(f"ZENAGER_{name}", raising=False)


@pytest.fixture
def github_source() -> GitHubSource:
    return GitHubSource(owner="octo", repo_name="board")


@pytest.fixture
def gitlab_source() -> GitLabSource:
    return GitLabSource(domain="https://gitlab.com", project_path="group/project")


def _make_issue(
    issue_id: int,
    source_id: str | None = "github:octo/board",
    state: IssueState = IssueState.OPEN,
    title: str | None = None,
    is_manual: bool = False,
) -> Issue:
    """Build an issue for board and reconciliation tests."""
    return Issue(
        id=issue_id,
        title=title or f"Issue {issue_id}",
        state=state,
        labels=[Label(name="bug", color="d73a4a")],
        source_url=None if is_manual else f"https://example.com/{issue_id}",
        is_manual=is_manual,
        source_id=None if is_manual else source_id,
    )


@pytest.fixture
def make_issue():
    """Factory for board and reconciliation test issues."""
    return _make_issue
