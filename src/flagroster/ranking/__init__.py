"""Leaderboard filtering and sorting."""

from .engine import (
    Leaderboard,
    RankedEntry,
    SortDirection,
    SortState,
    build_leaderboard,
    default_sort,
    eligible,
    rank,
    ranking_columns,
)

__all__ = [
    "Leaderboard",
    "RankedEntry",
    "SortDirection",
    "SortState",
    "build_leaderboard",
    "default_sort",
    "eligible",
    "rank",
    "ranking_columns",
]
