"""Shared HTTP and pagination handling for provider adapters."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

import httpx

from zenager.config import (
    DEFAULT_MAX_PAGES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from zenager.logging import sanitize_for_log, truncate_output
from zenager.providers.exceptions import FetchError, ParseError
from zenager.providers.models import Assignee, Issue, IssueState, Label

logger = logging.getLogger(__name__)


class ProviderAdapter:
    """Base class for issue tracker adapters.

    Subclasses describe one provider: its auth header, its list endpoint(s)
    and how one raw issue decodes into an :class:`Issue`. Paging, error
    wrapping and per-field fallbacks live here.
    """

    provider: ClassVar[str] = ""
    accept: ClassVar[str] = "application/json"

    def __init__(
        self,
        token: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.token = token or None
        self.page_size = page_size
        self.max_pages = max_pages
        self.timeout = timeout
        self.user_agent = user_agent
        self._client: httpx.Client | None = None

    @property
    def source_id(self) -> str:
        raise NotImplementedError

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(headers=self._build_headers(), timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ProviderAdapter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": self.accept, "User-Agent": self.user_agent}
        auth = self._auth_header()
        if auth:
            headers["Authorization"] = auth
        return headers

    def _auth_header(self) -> str | None:
        raise NotImplementedError

    def fetch_issues(self) -> list[Issue]:
        """Fetch every issue of the source, newest first.

        Raises:
            FetchError: If any page fails. Issues from earlier pages are discarded.
        """
        raise NotImplementedError

    def _get_page(self, url: str, params: dict[str, Any], page: int) -> Any:
        """GET one page and return its decoded JSON body.

        Raises:
            FetchError: On transport failure, non-2xx status or a non-JSON body.
        """
        query = {**params, "per_page": self.page_size, "page": page}
        logger.debug("GET %s page=%d", url, page)
        try:
            response = self.client.get(url, params=query)
        except httpx.HTTPError as e:
            raise FetchError(self.provider, sanitize_for_log(str(e)), page=page) from e

        if not response.is_success:
            body = truncate_output(sanitize_for_log(response.text))
            raise FetchError(
                self.provider,
                f"{response.reason_phrase} - {body}",
                status_code=response.status_code,
                page=page,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(
                self.provider,
                "response body is not JSON",
                status_code=response.status_code,
                page=page,
            ) from e

    def _paginate(self, url: str, params: dict[str, Any], items_key: str | None = None) -> list[Any]:
        """Collect raw entries page by page.

        Stops after a short page or after ``max_pages`` pages, whichever comes first.
        """
        entries: list[Any] = []
        page = 1
        while True:
            payload = self._get_page(url, params, page)
            if items_key is not None:
                payload = payload.get(items_key) if isinstance(payload, dict) else None
            if not isinstance(payload, list):
                raise FetchError(
                    self.provider, "unexpected response shape, expected a list", page=page
                )

            entries.extend(payload)
            if len(payload) < self.page_size:
                break
            if page >= self.max_pages:
                logger.warning(
                    "Reached page limit (%d) for %s. There might be more issues.",
                    self.max_pages,
                    self.source_id,
                )
                break
            page += 1

        return entries

    def _decode_all(self, entries: list[Any]) -> list[Issue]:
        issues = []
        for entry in entries:
            issue = self._decode_entry(entry)
            if issue is not None:
                issues.append(issue)
        return issues

    def _decode_entry(self, entry: Any) -> Issue | None:
        if not isinstance(entry, dict):
            logger.warning("Skipping %s entry that is not an object", self.provider)
            return None
        try:
            issue_id = int(entry["id"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping %s entry without a usable id", self.provider)
            return None
        return self._decode_issue(issue_id, entry)

    def _decode_issue(self, issue_id: int, raw: dict[str, Any]) -> Issue:
        raise NotImplementedError

    # Per-field decoding helpers: a malformed field falls back, the issue survives.

    def _text(self, raw: dict[str, Any], key: str) -> str:
        value = raw.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            self._log_parse_error(ParseError(f"field {key!r} is not a string"))
            return str(value)
        return value

    def _optional_text(self, raw: dict[str, Any], key: str) -> str | None:
        value = raw.get(key)
        return value if isinstance(value, str) and value else None

    def _assignee(self, raw: dict[str, Any], login_keys: tuple[str, ...]) -> Assignee | None:
        value = raw.get("assignee")
        if value is None:
            return None
        if not isinstance(value, dict):
            self._log_parse_error(ParseError("assignee is not an object"))
            return None
        login = next((value[k] for k in login_keys if isinstance(value.get(k), str) and value[k]), None)
        if login is None:
            self._log_parse_error(ParseError("assignee has no login"))
            return None
        avatar = value.get("avatar_url")
        return Assignee(login=login, avatar_url=avatar if isinstance(avatar, str) else "")

    def _labels(self, raw: dict[str, Any]) -> list[Label]:
        value = raw.get("labels")
        if value is None:
            return []
        if not isinstance(value, list):
            self._log_parse_error(ParseError("labels is not a list"))
            return []
        labels = []
        for item in value:
            label = self._decode_label(item)
            if label is not None:
                labels.append(label)
        return labels

    def _decode_label(self, item: Any) -> Label | None:
        raise NotImplementedError

    def _make_issue(
        self,
        issue_id: int,
        raw: dict[str, Any],
        *,
        body_key: str,
        url_key: str,
        state: IssueState,
        login_keys: tuple[str, ...],
    ) -> Issue:
        return Issue(
            id=issue_id,
            title=self._text(raw, "title"),
            body=self._text(raw, body_key),
            state=state,
            labels=self._labels(raw),
            assignee=self._assignee(raw, login_keys),
            created_at=self._text(raw, "created_at"),
            updated_at=self._text(raw, "updated_at"),
            source_url=self._optional_text(raw, url_key),
            is_manual=False,
            source_id=self.source_id,
        )

    def _log_parse_error(self, error: ParseError) -> None:
        logger.debug("%s payload for %s: %s", self.provider, self.source_id, error)
