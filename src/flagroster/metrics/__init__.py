"""Derived metrics for display and radar comparison."""

from .derived import (
    RADAR_AXES,
    RADAR_MAX,
    RadarAxis,
    StatTile,
    catch_rate,
    completion_rate,
    format_rate,
    highlight_tiles,
    primary_rate,
    pull_rate,
    radar_profile,
    stat_summary_line,
    total_tds,
    total_yards,
)

__all__ = [
    "RADAR_AXES",
    "RADAR_MAX",
    "RadarAxis",
    "StatTile",
    "catch_rate",
    "completion_rate",
    "format_rate",
    "highlight_tiles",
    "primary_rate",
    "pull_rate",
    "radar_profile",
    "stat_summary_line",
    "total_tds",
    "total_yards",
]
