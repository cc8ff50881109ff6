"""Reconciliation Engine - Place fetched issues onto the board."""

from zenager.reconcile.engine import (
    PlacementKey,
    build_legacy_index,
    build_placement_index,
    known_column,
    merge_with_manual,
    reconcile,
    reconcile_board,
)

__all__ = [
    "PlacementKey",
    "build_legacy_index",
    "build_placement_index",
    "known_column",
    "merge_with_manual",
    "reconcile",
    "reconcile_board",
]
