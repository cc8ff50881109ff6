"""REST API for Zenager."""

from zenager.api.app import app, create_app, register_exception_handlers
from zenager.api.models import (
    APIResponse,
    ColumnResponse,
    IssueResponse,
    SourceResponse,
    SyncResultResponse,
)

__all__ = [
    "APIResponse",
    "ColumnResponse",
    "IssueResponse",
    "SourceResponse",
    "SyncResultResponse",
    "app",
    "create_app",
    "register_exception_handlers",
]
