"""Custom exceptions for provider adapters."""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for provider adapter errors."""


class FetchError(ProviderError):
    """An issue page could not be fetched (non-2xx response or transport failure)."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        page: int | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.page = page
        self.message = message
        detail = f"{provider} fetch failed"
        if page is not None:
            detail += f" on page {page}"
        if status_code is not None:
            detail += f" (HTTP {status_code})"
        super().__init__(f"{detail}: {message}")


class ParseError(ProviderError):
    """A field in a provider payload has an unexpected shape."""
