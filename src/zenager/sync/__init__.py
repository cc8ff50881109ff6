"""Sync - Fetch, reconcile and commit cycles."""

from zenager.sync.exceptions import SyncError, SyncInProgressError
from zenager.sync.models import SourceFailure, SyncResult
from zenager.sync.service import SyncService

__all__ = [
    "SourceFailure",
    "SyncError",
    "SyncInProgressError",
    "SyncResult",
    "SyncService",
]
