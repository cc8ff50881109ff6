"""Exceptions for the sync cycle."""


class SyncError(Exception):
    """Base exception for sync errors."""


class SyncInProgressError(SyncError):
    """A sync cycle is already running."""
