"""BoardStore - In-memory authoritative copy of the board."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping, Sequence

from zenager.board.exceptions import (
    ColumnExistsError,
    ColumnNotFoundError,
    InvalidColumnOrderError,
    IssueNotFoundError,
)
from zenager.board.models import DEFAULT_COLUMN_IDS, Column, default_columns
from zenager.providers.models import Issue

logger = logging.getLogger(__name__)


class BoardStore:
    """Ordered columns and their issue lists, plus which columns are visible.

    Mutated by reconciliation commits and by direct user actions. Reads hand
    out copies so callers cannot change the board behind the store's back.
    Persisting each mutation is the caller's job.
    """

    def __init__(
        self,
        columns: Iterable[Column] = (),
        visible_column_ids: Iterable[str] | None = None,
    ) -> None:
        self._columns: list[Column] = []
        for column in columns:
            if self._find(column.id) is not None:
                logger.warning("Ignoring duplicate persisted column %s", column.id)
                continue
            self._columns.append(column)

        if visible_column_ids is None:
            visible_column_ids = DEFAULT_COLUMN_IDS
        self._visible: list[str] = list(dict.fromkeys(visible_column_ids))

    # --- Reads ---

    def get_columns(self) -> list[Column]:
        """Columns in board order (copies)."""
        return copy.deepcopy(self._columns)

    def snapshot(self) -> list[Column]:
        """Consistent copy of the board taken before a sync cycle."""
        return self.get_columns()

    @property
    def column_ids(self) -> list[str]:
        return [column.id for column in self._columns]

    def get_column(self, column_id: str) -> Column:
        """Get one column (copy).

        Raises:
            ColumnNotFoundError: If column doesn't exist.
        """
        return copy.deepcopy(self._require(column_id))

    @property
    def visible_column_ids(self) -> list[str]:
        known = set(self.column_ids)
        return [column_id for column_id in self._visible if column_id in known]

    def is_empty(self) -> bool:
        return not self._columns

    def _find(self, column_id: str) -> Column | None:
        for column in self._columns:
            if column.id == column_id:
                return column
        return None

    def _require(self, column_id: str) -> Column:
        column = self._find(column_id)
        if column is None:
            raise ColumnNotFoundError(f"Column '{column_id}' not found")
        return column

    # --- Column lifecycle ---

    def initialize_defaults(self) -> bool:
        """Create the six default columns if the board has no columns at all.

        Returns:
            True if defaults were created, False if the board already had columns.
        """
        if self._columns:
            return False
        self._columns = default_columns()
        for column in self._columns:
            if column.id not in self._visible:
                self._visible.append(column.id)
        logger.info("Initialized default columns")
        return True

    def add_column(self, column: Column) -> Column:
        """Append a column and make it visible.

        Raises:
            ColumnExistsError: If a column with the same id exists.
        """
        if self._find(column.id) is not None:
            raise ColumnExistsError(f"Column '{column.id}' already exists")
        column = copy.deepcopy(column)
        self._columns.append(column)
        if column.id not in self._visible:
            self._visible.append(column.id)
        logger.info("Added column %s", column.id)
        return copy.deepcopy(column)

    def remove_column(self, column_id: str) -> None:
        """Remove a column. Its issues are dropped with it.

        Raises:
            ColumnNotFoundError: If column doesn't exist.
        """
        column = self._require(column_id)
        self._columns.remove(column)
        self._visible = [cid for cid in self._visible if cid != column_id]
        logger.info("Removed column %s (dropped %d issues)", column_id, len(column.issues))

    def reorder_columns(self, new_order: Sequence[str]) -> None:
        """Reorder columns.

        Raises:
            InvalidColumnOrderError: If new_order is not a permutation of the column ids.
        """
        if len(new_order) != len(self._columns) or set(new_order) != set(self.column_ids):
            raise InvalidColumnOrderError(
                f"Column order {list(new_order)} does not match columns {self.column_ids}"
            )
        by_id = {column.id: column for column in self._columns}
        self._columns = [by_id[column_id] for column_id in new_order]

    def set_column_visible(self, column_id: str, visible: bool) -> None:
        """Show or hide a column.

        Raises:
            ColumnNotFoundError: If column doesn't exist.
        """
        self._require(column_id)
        if visible and column_id not in self._visible:
            self._visible.append(column_id)
        elif not visible:
            self._visible = [cid for cid in self._visible if cid != column_id]

    # --- Issue mutations ---

    def replace_column_issues(self, column_id: str, issues: Sequence[Issue]) -> None:
        """Replace a column's issue list.

        Raises:
            ColumnNotFoundError: If column doesn't exist.
        """
        self._require(column_id).issues = copy.deepcopy(list(issues))

    def replace_all_issues(self, placements: Mapping[str, Sequence[Issue]]) -> None:
        """Replace every column's issues; columns missing from placements are emptied."""
        for column in self._columns:
            column.issues = copy.deepcopy(list(placements.get(column.id, [])))
        unknown = set(placements) - set(self.column_ids)
        if unknown:
            logger.warning("Dropping placements for unknown columns: %s", sorted(unknown))

    def move_issue(
        self,
        issue_id: int,
        from_column_id: str,
        to_column_id: str,
        target_index: int | None = None,
        source_id: str | None = None,
    ) -> None:
        """Move an issue to a position in another (or the same) column.

        ``target_index`` is clamped into range; None appends.

        Raises:
            ColumnNotFoundError: If either column doesn't exist.
            IssueNotFoundError: If the issue is not in the source column.
        """
        source = self._require(from_column_id)
        target = self._require(to_column_id)
        index = self._issue_index(source, issue_id, source_id)
        issue = source.issues.pop(index)

        if target_index is None:
            target_index = len(target.issues)
        target_index = max(0, min(target_index, len(target.issues)))
        target.issues.insert(target_index, issue)
        logger.debug(
            "Moved issue %s from %s to %s[%d]", issue_id, from_column_id, to_column_id, target_index
        )

    def add_manual_issue(self, column_id: str, issue: Issue) -> Issue:
        """Append a manual item to a column.

        The issue is stored as manual regardless of its flags; its id is bumped
        if another manual item already uses it.

        Raises:
            ColumnNotFoundError: If column doesn't exist.
        """
        column = self._require(column_id)
        issue = issue.as_manual()
        taken = {i.id for c in self._columns for i in c.issues if i.is_manual}
        while issue.id in taken:
            issue.id += 1
        column.issues.append(issue)
        return copy.deepcopy(issue)

    def remove_manual_issue(self, column_id: str, issue_id: int) -> Issue:
        """Delete a manual item from a column. Tracker issues are never removed this way.

        Raises:
            ColumnNotFoundError: If column doesn't exist.
            IssueNotFoundError: If no manual item with this id is in the column.
        """
        column = self._require(column_id)
        for i, issue in enumerate(column.issues):
            if issue.is_manual and issue.id == issue_id:
                return column.issues.pop(i)
        raise IssueNotFoundError(f"Manual item {issue_id} not found in column '{column.id}'")

    def clear_tracker_issues(self) -> int:
        """Remove every tracker-sourced issue; manual items stay.

        Returns:
            Number of issues removed.
        """
        removed = 0
        for column in self._columns:
            kept = column.manual_issues
            removed += len(column.issues) - len(kept)
            column.issues = kept
        logger.info("Cleared %d tracker issues from the board", removed)
        return removed

    @staticmethod
    def _issue_index(column: Column, issue_id: int, source_id: str | None) -> int:
        for i, issue in enumerate(column.issues):
            if issue.id == issue_id and issue.source_id == source_id:
                return i
        raise IssueNotFoundError(f"Issue {issue_id} not found in column '{column.id}'")
