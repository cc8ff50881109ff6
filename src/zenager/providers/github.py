"""GitHubAdapter - Reads repository issues from the GitHub REST API."""

from __future__ import annotations

import logging
from typing import Any

from zenager.config import DEFAULT_GITHUB_API_URL
from zenager.providers.base import ProviderAdapter
from zenager.providers.colors import normalize_color
from zenager.providers.exceptions import ParseError
from zenager.providers.models import (
    DEFAULT_LABEL_COLOR,
    GitHubSource,
    Issue,
    IssueState,
    Label,
)

logger = logging.getLogger(__name__)


class GitHubAdapter(ProviderAdapter):
    """Adapter for GitHub repository issues.

    Without an assignee filter the plain issue listing is used and pull
    requests are dropped from it. The listing endpoint cannot filter by
    assignee server-side, so a filtered source goes through the search API
    with ``is:issue`` instead.
    """

    provider = "github"
    accept = "application/vnd.github.v3+json"

    def __init__(
        self,
        source: GitHubSource,
        token: str | None = None,
        base_url: str = DEFAULT_GITHUB_API_URL,
        **kwargs: Any,
    ) -> None:
        """Initialize GitHub adapter.

        Args:
            source: Repository to read.
            token: GitHub API key, sent with the ``token`` scheme.
            base_url: GitHub REST API URL (for testing/enterprise).
            **kwargs: Paging and HTTP options passed to ProviderAdapter.
        """
        super().__init__(token=token, **kwargs)
        self.source = source
        self.base_url = base_url.rstrip("/")

    @property
    def source_id(self) -> str:
        return self.source.source_id

    def _auth_header(self) -> str | None:
        return f"token {self.token}" if self.token else None

    def fetch_issues(self) -> list[Issue]:
        if self.source.assignee:
            issues = self._fetch_with_search()
        else:
            issues = self._fetch_listing()
        logger.info("Fetched %d total issues from %s", len(issues), self.source.display_name)
        return issues

    def _fetch_listing(self) -> list[Issue]:
        url = f"{self.base_url}/repos/{self.source.owner}/{self.source.repo_name}/issues"
        params = {"state": "all", "sort": "created", "direction": "desc"}
        entries = self._paginate(url, params)
        issues_only = [e for e in entries if not (isinstance(e, dict) and "pull_request" in e)]
        skipped = len(entries) - len(issues_only)
        if skipped:
            logger.debug("Dropped %d pull requests from %s", skipped, self.source.display_name)
        return self._decode_all(issues_only)

    def _fetch_with_search(self) -> list[Issue]:
        query = (
            f"repo:{self.source.owner}/{self.source.repo_name} is:issue "
            f"assignee:{self.source.assignee}"
        )
        params = {"q": query, "sort": "created", "order": "desc"}
        entries = self._paginate(f"{self.base_url}/search/issues", params, items_key="items")
        return self._decode_all(entries)

    def _decode_issue(self, issue_id: int, raw: dict[str, Any]) -> Issue:
        state = IssueState.OPEN if raw.get("state") == "open" else IssueState.CLOSED
        return self._make_issue(
            issue_id,
            raw,
            body_key="body",
            url_key="html_url",
            state=state,
            login_keys=("login",),
        )

    def _decode_label(self, item: Any) -> Label | None:
        if isinstance(item, str):
            return Label(name=item)
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            self._log_parse_error(ParseError(f"unusable label: {item!r}"))
            return None
        color = DEFAULT_LABEL_COLOR
        if item.get("color"):
            try:
                color = normalize_color(item["color"])
            except ParseError as e:
                self._log_parse_error(e)
        return Label(name=item["name"], color=color)
