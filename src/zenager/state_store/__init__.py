"""State Store - Persistent storage for the board, its sources and credentials."""

from zenager.state_store.exceptions import StateStoreError, StateWriteError
from zenager.state_store.models import BoardState, Credentials, StateKey
from zenager.state_store.store import StateStore

__all__ = [
    "BoardState",
    "Credentials",
    "StateKey",
    "StateStore",
    "StateStoreError",
    "StateWriteError",
]
