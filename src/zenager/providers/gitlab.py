"""GitLabAdapter - Reads project issues from the GitLab v4 REST API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from zenager.providers.base import ProviderAdapter
from zenager.providers.colors import color_from_text, normalize_color
from zenager.providers.exceptions import ParseError
from zenager.providers.models import GitLabSource, Issue, IssueState, Label

logger = logging.getLogger(__name__)


def encode_project_path(project_path: str) -> str:
    """Percent-encode a project path as one URL segment (``group/proj`` -> ``group%2Fproj``)."""
    return quote(project_path, safe="")


def api_base(domain: str) -> str:
    return f"{domain.rstrip('/')}/api/v4"


class GitLabAdapter(ProviderAdapter):
    """Adapter for GitLab project issues, on gitlab.com or self-hosted.

    The API key is sent as a bearer token to whatever domain the source names.
    """

    provider = "gitlab"

    def __init__(self, source: GitLabSource, token: str | None = None, **kwargs: Any) -> None:
        super().__init__(token=token, **kwargs)
        self.source = source

    @property
    def source_id(self) -> str:
        return self.source.source_id

    def _auth_header(self) -> str | None:
        return f"Bearer {self.token}" if self.token else None

    def fetch_issues(self) -> list[Issue]:
        url = (
            f"{api_base(self.source.domain)}/projects/"
            f"{encode_project_path(self.source.project_path)}/issues"
        )
        params = {"order_by": "created_at", "sort": "desc", "state": "all"}
        issues = self._decode_all(self._paginate(url, params))
        logger.info(
            "Fetched %d total issues from %s/%s",
            len(issues),
            self.source.domain,
            self.source.project_path,
        )
        return issues

    def _decode_issue(self, issue_id: int, raw: dict[str, Any]) -> Issue:
        state = IssueState.OPEN if raw.get("state") == "opened" else IssueState.CLOSED
        return self._make_issue(
            issue_id,
            raw,
            body_key="description",
            url_key="web_url",
            state=state,
            login_keys=("username", "name"),
        )

    def _decode_label(self, item: Any) -> Label | None:
        # Labels arrive as plain strings unless the request asked for details.
        if isinstance(item, str):
            return Label(name=item, color=color_from_text(item))
        if not isinstance(item, dict):
            self._log_parse_error(ParseError(f"unusable label: {item!r}"))
            return None

        name = item.get("name")
        if not isinstance(name, str):
            self._log_parse_error(ParseError(f"label without a name: {item!r}"))
            name = str(name) if name is not None else str(item)

        raw_color = item.get("color")
        if raw_color:
            try:
                return Label(name=name, color=normalize_color(raw_color))
            except ParseError as e:
                self._log_parse_error(e)
        return Label(name=name, color=color_from_text(name))
