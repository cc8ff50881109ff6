"""Reconciliation - Merge freshly fetched issues into the existing board layout.

Placement rules, applied to each fetched issue in order:

1. Closed issues go to ``done``, whatever column held them before.
2. Open issues already on the board stay in the column they occupy, so a
   manual drag into ``in-progress`` or ``blocked`` survives repeated syncs.
3. Open issues never seen before land in ``backlog``.

Placements are keyed by ``(source_id, id)`` because issue ids are only unique
within one provider. Issues persisted before sources were recorded on them
(``source_id`` is None) are matched by bare id as a fallback.

:func:`reconcile` only deals with tracker issues. :func:`merge_with_manual`
is the store-level step that puts manual items back before a commit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from zenager.board.models import BACKLOG_COLUMN_ID, DONE_COLUMN_ID, Column
from zenager.providers.models import Issue, IssueState

logger = logging.getLogger(__name__)

PlacementKey = tuple[str | None, int]


def build_placement_index(columns: Sequence[Column]) -> dict[PlacementKey, str]:
    """Map every tracker issue on the board to the column holding it."""
    index: dict[PlacementKey, str] = {}
    for column in columns:
        for issue in column.issues:
            if not issue.is_manual:
                index[issue.key] = column.id
    return index


def build_legacy_index(columns: Sequence[Column]) -> dict[int, str]:
    """Map tracker issues persisted without a source id to their column, by bare id."""
    index: dict[int, str] = {}
    for column in columns:
        for issue in column.issues:
            if not issue.is_manual and issue.source_id is None:
                index[issue.id] = column.id
    return index


def known_column(
    issue: Issue, index: dict[PlacementKey, str], legacy_index: dict[int, str]
) -> str | None:
    """Column currently holding a fetched issue, or None when it is new to the board."""
    if issue.key in index:
        return index[issue.key]
    if issue.source_id is not None:
        return legacy_index.get(issue.id)
    return None


def _resolve_column(target: str, column_ids: Sequence[str]) -> str:
    """Fall back to backlog, then the first column, when a target column is gone."""
    if target in column_ids or not column_ids:
        return target
    if BACKLOG_COLUMN_ID in column_ids:
        return BACKLOG_COLUMN_ID
    return column_ids[0]


def reconcile(
    fresh_issues: Sequence[Issue], current_columns: Sequence[Column]
) -> dict[str, list[Issue]]:
    """Compute the column of every fetched issue.

    Args:
        fresh_issues: Union of all issues fetched in this cycle, from every
            active source. Manual items must not be included.
        current_columns: Board snapshot taken once, before fetching started.

    Returns:
        Mapping from every known column id to its tracker issues. Columns that
        receive nothing map to an empty list. This fully replaces the tracker
        content of the board for the cycle.
    """
    column_ids = [column.id for column in current_columns]
    index = build_placement_index(current_columns)
    legacy_index = build_legacy_index(current_columns)

    placed: dict[PlacementKey, tuple[str, Issue]] = {}
    for issue in fresh_issues:
        if issue.is_manual:
            logger.warning("Ignoring manual issue %s passed to reconcile", issue.id)
            continue

        if issue.state == IssueState.CLOSED:
            target = DONE_COLUMN_ID
        else:
            target = known_column(issue, index, legacy_index) or BACKLOG_COLUMN_ID

        # Last occurrence of a duplicated key wins.
        placed.pop(issue.key, None)
        placed[issue.key] = (_resolve_column(target, column_ids), issue)

    result: dict[str, list[Issue]] = {column_id: [] for column_id in column_ids}
    for column_id, issue in placed.values():
        result.setdefault(column_id, []).append(issue)
    return result


def merge_with_manual(
    placements: dict[str, list[Issue]], current_columns: Sequence[Column]
) -> dict[str, list[Issue]]:
    """Combine reconciled tracker issues with the manual items already on the board.

    Within each column the prior order is kept: manual items stay where they
    were and tracker issues that remain in the column take their old slot
    (with fresh data). Issues newly arriving in a column are appended in
    fetch order.
    """
    merged: dict[str, list[Issue]] = {}
    for column in current_columns:
        incoming = placements.get(column.id, [])
        by_key = {issue.key: issue for issue in incoming}
        by_legacy_id = {issue.id: issue for issue in incoming}
        used: set[PlacementKey] = set()

        issues: list[Issue] = []
        for prior in column.issues:
            if prior.is_manual:
                issues.append(prior)
                continue
            fresh = by_key.get(prior.key)
            if fresh is None and prior.source_id is None:
                fresh = by_legacy_id.get(prior.id)
            if fresh is not None and fresh.key not in used:
                issues.append(fresh)
                used.add(fresh.key)

        issues.extend(issue for issue in incoming if issue.key not in used)
        merged[column.id] = issues

    for column_id, incoming in placements.items():
        if column_id not in merged:
            merged[column_id] = list(incoming)
    return merged


def reconcile_board(
    fresh_issues: Sequence[Issue], current_columns: Sequence[Column]
) -> dict[str, list[Issue]]:
    """Reconcile and merge manual items back in: the full commit payload for a cycle."""
    return merge_with_manual(reconcile(fresh_issues, current_columns), current_columns)
