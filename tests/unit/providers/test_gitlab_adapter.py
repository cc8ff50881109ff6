"""Unit tests for GitLabAdapter."""

from unittest.mock import MagicMock

import pytest

from zenager.providers import (
    FetchError,
    GitLabAdapter,
    GitLabSource,
    IssueState,
    color_from_text,
)
from zenager.providers.gitlab import api_base, encode_project_path


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock HTTP client."""
    return MagicMock()


@pytest.fixture
def source() -> GitLabSource:
    return GitLabSource(domain="https://gitlab.example.com", project_path="team/sub/app")


@pytest.fixture
def adapter(source: GitLabSource, mock_client: MagicMock) -> GitLabAdapter:
    """Create a GitLabAdapter instance with mocked client."""
    adapter = GitLabAdapter(source, token="gl-token")
    adapter._client = mock_client
    return adapter


def _mock_response(data: object, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.reason_phrase = "OK" if response.is_success else "Unauthorized"
    response.text = str(data)
    response.json.return_value = data
    return response


def _raw_issue(issue_id: int, **overrides: object) -> dict:
    raw = {
        "id": issue_id,
        "iid": 1,
        "title": f"GitLab {issue_id}",
        "description": "Details",
        "state": "opened",
        "labels": ["backend"],
        "assignee": {"username": "bob", "name": "Bob", "avatar_url": "https://a/bob"},
        "created_at": "2024-02-01T00:00:00Z",
        "updated_at": "2024-02-02T00:00:00Z",
        "web_url": f"https://gitlab.example.com/team/sub/app/-/issues/{issue_id}",
    }
    raw.update(overrides)
    return raw


@pytest.mark.unit
class TestPathHelpers:
    """Tests for URL building helpers."""

    def test_encode_project_path(self) -> None:
        assert encode_project_path("team/sub/app") == "team%2Fsub%2Fapp"

    def test_api_base_strips_trailing_slash(self) -> None:
        assert api_base("https://gitlab.com/") == "https://gitlab.com/api/v4"


@pytest.mark.unit
class TestFetchIssues:
    """Tests for project issue listing."""

    def test_requests_encoded_project_endpoint(
        self, adapter: GitLabAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response([])

        adapter.fetch_issues()

        url = mock_client.get.call_args.args[0]
        params = mock_client.get.call_args.kwargs["params"]
        assert url == "https://gitlab.example.com/api/v4/projects/team%2Fsub%2Fapp/issues"
        assert params["order_by"] == "created_at"
        assert params["sort"] == "desc"
        assert params["state"] == "all"

    def test_normalizes_issue(self, adapter: GitLabAdapter, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response([_raw_issue(77)])

        issue = adapter.fetch_issues()[0]

        assert issue.id == 77
        assert issue.body == "Details"
        assert issue.state == IssueState.OPEN
        assert issue.assignee is not None
        assert issue.assignee.login == "bob"
        assert issue.source_url == "https://gitlab.example.com/team/sub/app/-/issues/77"
        assert issue.source_id == "gitlab:https://gitlab.example.com/team/sub/app"

    def test_closed_state(self, adapter: GitLabAdapter, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response([_raw_issue(1, state="closed")])

        assert adapter.fetch_issues()[0].state == IssueState.CLOSED

    def test_assignee_falls_back_to_name(
        self, adapter: GitLabAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response(
            [_raw_issue(1, assignee={"name": "Carol", "avatar_url": None})]
        )

        assignee = adapter.fetch_issues()[0].assignee
        assert assignee is not None
        assert assignee.login == "Carol"
        assert assignee.avatar_url == ""

    def test_string_labels_get_derived_color(
        self, adapter: GitLabAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response([_raw_issue(1, labels=["backend", "ux"])])

        labels = adapter.fetch_issues()[0].labels

        assert [label.name for label in labels] == ["backend", "ux"]
        assert labels[0].color == color_from_text("backend")
        assert labels[1].color == color_from_text("ux")

    def test_detailed_labels_keep_their_color(
        self, adapter: GitLabAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response(
            [_raw_issue(1, labels=[{"name": "p1", "color": "#FF0000"}, {"name": "p2"}])]
        )

        labels = adapter.fetch_issues()[0].labels

        assert labels[0].color == "ff0000"
        assert labels[1].color == color_from_text("p2")

    def test_label_colors_stable_across_fetches(
        self, adapter: GitLabAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response([_raw_issue(1)])

        first = adapter.fetch_issues()[0].labels
        second = adapter.fetch_issues()[0].labels

        assert first == second


@pytest.mark.unit
class TestErrorsAndHeaders:
    """Tests for auth and failures."""

    def test_bearer_auth(self, source: GitLabSource) -> None:
        headers = GitLabAdapter(source, token="abc")._build_headers()

        assert headers["Authorization"] == "Bearer abc"

    def test_unauthorized(self, adapter: GitLabAdapter, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response({"message": "401"}, status_code=401)

        with pytest.raises(FetchError) as exc_info:
            adapter.fetch_issues()

        assert exc_info.value.status_code == 401
        assert exc_info.value.provider == "gitlab"
        assert "HTTP 401" in str(exc_info.value)
