"""Board State Store - Ordered columns and their issues."""

from zenager.board.exceptions import (
    BoardError,
    ColumnExistsError,
    ColumnNotFoundError,
    InvalidColumnOrderError,
    IssueNotFoundError,
)
from zenager.board.models import (
    BACKLOG_COLUMN_ID,
    DEFAULT_COLUMN_IDS,
    DEFAULT_COLUMNS,
    DONE_COLUMN_ID,
    Column,
    column_id_from_name,
    default_columns,
    new_manual_issue,
)
from zenager.board.store import BoardStore

__all__ = [
    "BACKLOG_COLUMN_ID",
    "DEFAULT_COLUMNS",
    "DEFAULT_COLUMN_IDS",
    "DONE_COLUMN_ID",
    "BoardError",
    "BoardStore",
    "Column",
    "ColumnExistsError",
    "ColumnNotFoundError",
    "InvalidColumnOrderError",
    "IssueNotFoundError",
    "column_id_from_name",
    "default_columns",
    "new_manual_issue",
]
