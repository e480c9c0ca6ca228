"""Canonical roster models shared by the store, API and CLI."""

from .player import (
    MAX_ROLES,
    MIN_ROLES,
    Player,
    RoleLimitError,
    new_player,
)
from .stats import (
    MAX_STAT_VALUE,
    CoverageStats,
    PasserStats,
    SkillStats,
    StatLine,
    StatShape,
    coerce_stat_value,
    initial_stats,
    stats_from_mapping,
    stats_model_for,
)
from .training import TrainingFile, TrainingSession, classify_file_kind, new_session, size_label

__all__ = [
    "MAX_ROLES",
    "MIN_ROLES",
    "Player",
    "RoleLimitError",
    "new_player",
    "MAX_STAT_VALUE",
    "CoverageStats",
    "PasserStats",
    "SkillStats",
    "StatLine",
    "StatShape",
    "coerce_stat_value",
    "initial_stats",
    "stats_from_mapping",
    "stats_model_for",
    "TrainingFile",
    "TrainingSession",
    "classify_file_kind",
    "new_session",
    "size_label",
]
