"""Custom exceptions for the Board State Store."""


class BoardError(Exception):
    """Base exception for Board State Store errors."""


class ColumnNotFoundError(BoardError):
    """Column with given ID does not exist."""


class ColumnExistsError(BoardError):
    """Column with given ID already exists."""


class IssueNotFoundError(BoardError):
    """Issue is not in the given column."""


class InvalidColumnOrderError(BoardError):
    """A column ordering is not a permutation of the current columns."""
