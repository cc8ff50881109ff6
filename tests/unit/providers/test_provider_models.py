"""Unit tests for provider data models."""

import pytest

from zenager.providers import (
    Assignee,
    GitHubSource,
    GitLabSource,
    Issue,
    IssueState,
    Label,
    source_from_dict,
)


@pytest.mark.unit
class TestIssue:
    """Tests for the Issue model."""

    def test_key_includes_source(self) -> None:
        issue = Issue(id=5, title="t", source_id="github:o/r")

        assert issue.key == ("github:o/r", 5)

    def test_as_manual_strips_provenance(self) -> None:
        issue = Issue(id=5, title="t", source_url="https://x", source_id="github:o/r")

        manual = issue.as_manual()

        assert manual.is_manual is True
        assert manual.source_url is None
        assert manual.source_id is None
        assert issue.is_manual is False

    def test_persisted_form_restores_issue(self) -> None:
        issue = Issue(
            id=12,
            title="Crash",
            body="Steps",
            state=IssueState.CLOSED,
            labels=[Label(name="bug", color="d73a4a")],
            assignee=Assignee(login="alice", avatar_url="https://a"),
            created_at="2024-01-01",
            updated_at="2024-01-02",
            source_url="https://github.com/o/r/issues/12",
            source_id="github:o/r",
        )

        assert Issue.from_dict(issue.to_dict()) == issue

    def test_from_dict_without_source_id(self) -> None:
        """Issues persisted before source ids existed load with source_id None."""
        issue = Issue.from_dict({"id": 3, "title": "old", "state": "open"})

        assert issue.source_id is None
        assert issue.is_open
        assert issue.labels == []

    def test_from_dict_manual_drops_source_url(self) -> None:
        issue = Issue.from_dict(
            {"id": 3, "title": "note", "is_manual": True, "source_url": "https://x"}
        )

        assert issue.is_manual
        assert issue.source_url is None

    def test_from_dict_requires_id(self) -> None:
        with pytest.raises(KeyError):
            Issue.from_dict({"title": "no id"})


@pytest.mark.unit
class TestSources:
    """Tests for source descriptors."""

    def test_github_identity(self) -> None:
        source = GitHubSource(owner="octo", repo_name="board", assignee="alice")

        assert source.source_id == "github:octo/board"
        assert source.display_name == "octo/board"

    def test_gitlab_identity(self) -> None:
        source = GitLabSource(domain="https://gitlab.com", project_path="group/sub/app")

        assert source.source_id == "gitlab:https://gitlab.com/group/sub/app"
        assert source.display_name == "gitlab.com/app"

    def test_source_from_dict(self) -> None:
        github = GitHubSource(owner="octo", repo_name="board", assignee="alice")
        gitlab = GitLabSource(domain="https://gitlab.com", project_path="g/p")

        assert source_from_dict(github.to_dict()) == github
        assert source_from_dict(gitlab.to_dict()) == gitlab

    def test_source_from_dict_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            source_from_dict({"type": "bitbucket"})
