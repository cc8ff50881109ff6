"""Custom exceptions for State Store."""


class StateStoreError(Exception):
    """Base exception for State Store errors."""


class StateWriteError(StateStoreError):
    """A value could not be written to the database."""
