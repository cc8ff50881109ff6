"""Board service - the operations exposed to the UI layer."""

from zenager.service.service import BoardService

__all__ = ["BoardService"]
