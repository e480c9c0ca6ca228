"""Rates, composites and 0-100 radar values computed from stat shapes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from flagroster.config import Role, StatCategory, classify
from flagroster.models.stats import CoverageStats, PasserStats, SkillStats, StatLine


RADAR_MAX = 100.0

RADAR_AXES: Mapping[StatCategory, Tuple[str, ...]] = {
    StatCategory.PASSER: ("Accuracy", "Scoring", "Drive", "Composure", "Ball Security"),
    StatCategory.SKILL: ("Catch Efficiency", "Drive", "Scoring", "Usage", "Rush Power"),
    StatCategory.COVERAGE: ("Pull Efficiency", "Disruption", "Turnovers", "Pressure", "Scoring"),
}


@dataclass(frozen=True)
class RadarAxis:
    label: str
    value: float
    full_mark: float = RADAR_MAX


@dataclass(frozen=True)
class StatTile:
    label: str
    value: str
    sub_label: Optional[str] = None


def _rate(successes: int, attempts: int) -> float:
    """Percentage of attempts that succeeded; successes beyond attempts count as 100."""

    if attempts <= 0:
        return 0.0
    # int / int keeps arbitrarily large counts exact until the final rounding.
    return min(successes, attempts) * 100 / attempts


def _capped(value: float) -> float:
    return float(min(max(value, 0), RADAR_MAX))


def _scaled(raw: int, factor: int) -> float:
    return _capped(raw * factor)


def _divided(raw: int, divisor: int) -> float:
    if raw >= RADAR_MAX * divisor:
        return RADAR_MAX
    return _capped(raw / divisor)


def _penalised(raw: int, penalty: int) -> float:
    if raw * penalty >= RADAR_MAX:
        return 0.0
    return _capped(RADAR_MAX - raw * penalty)


def completion_rate(stats: PasserStats) -> float:
    return _rate(stats.pass_completions, stats.pass_attempts)


def catch_rate(stats: SkillStats) -> float:
    return _rate(stats.catches, stats.targets)


def pull_rate(stats: CoverageStats) -> float:
    return _rate(stats.flag_pull_successes, stats.flag_pull_attempts)


def total_yards(stats: SkillStats) -> int:
    return stats.receiving_yards + stats.rushing_yards


def total_tds(stats: SkillStats) -> int:
    return stats.receiving_tds + stats.rushing_tds


def format_rate(value: float) -> str:
    """Percentage text with exactly one decimal digit, e.g. ``"75.0"``."""

    return f"{value:.1f}"


def primary_rate(stats: StatLine) -> float:
    if isinstance(stats, PasserStats):
        return completion_rate(stats)
    if isinstance(stats, SkillStats):
        return catch_rate(stats)
    if isinstance(stats, CoverageStats):
        return pull_rate(stats)
    raise TypeError(f"Unsupported stat shape {type(stats).__name__}")


def _radar_values(stats: StatLine) -> Tuple[float, ...]:
    if isinstance(stats, PasserStats):
        return (
            _capped(completion_rate(stats)),
            _scaled(stats.pass_tds, 20),
            _divided(stats.pass_yards, 3),
            _penalised(stats.sacks_taken, 10),
            _penalised(stats.interceptions_thrown, 15),
        )
    if isinstance(stats, SkillStats):
        return (
            _capped(catch_rate(stats)),
            _divided(total_yards(stats), 2),
            _scaled(total_tds(stats), 20),
            _scaled(stats.targets, 10),
            _scaled(stats.rushing_yards, 2),
        )
    if isinstance(stats, CoverageStats):
        return (
            _capped(pull_rate(stats)),
            _scaled(stats.pass_deflections, 20),
            _scaled(stats.interceptions_caught, 25),
            _scaled(stats.sacks_made, 20),
            _scaled(stats.defensive_tds, 30),
        )
    raise TypeError(f"Unsupported stat shape {type(stats).__name__}")


def radar_profile(stats: StatLine) -> Tuple[RadarAxis, ...]:
    """Five normalized axes for the radar chart, in fixed per-category order."""

    labels = RADAR_AXES[stats.stat_category]
    return tuple(RadarAxis(label=label, value=value) for label, value in zip(labels, _radar_values(stats)))


def highlight_tiles(stats: StatLine) -> Tuple[StatTile, ...]:
    """Headline numbers shown on a player's detail view."""

    if isinstance(stats, PasserStats):
        return (
            StatTile("Passing Yards", str(stats.pass_yards)),
            StatTile("Passing TDs", str(stats.pass_tds)),
            StatTile(
                "Completion %",
                f"{format_rate(completion_rate(stats))}%",
                f"{stats.pass_completions}/{stats.pass_attempts}",
            ),
            StatTile("Interceptions Thrown", str(stats.interceptions_thrown)),
            StatTile("Sacks Taken", str(stats.sacks_taken)),
        )
    if isinstance(stats, SkillStats):
        return (
            StatTile("Total Yards", str(total_yards(stats))),
            StatTile("Total TDs", str(total_tds(stats))),
            StatTile("Catch %", f"{format_rate(catch_rate(stats))}%", f"{stats.catches}/{stats.targets}"),
            StatTile("Receiving Yards", str(stats.receiving_yards)),
            StatTile("Rushing Yards", str(stats.rushing_yards)),
        )
    if isinstance(stats, CoverageStats):
        return (
            StatTile("Flag Pulls", str(stats.flag_pull_successes)),
            StatTile(
                "Pull %",
                f"{format_rate(pull_rate(stats))}%",
                f"{stats.flag_pull_successes}/{stats.flag_pull_attempts}",
            ),
            StatTile("Interceptions", str(stats.interceptions_caught)),
            StatTile("Pass Deflections", str(stats.pass_deflections)),
            StatTile("Sacks", str(stats.sacks_made)),
        )
    raise TypeError(f"Unsupported stat shape {type(stats).__name__}")


def stat_summary_line(role: Role, stats: StatLine) -> str:
    """Single-line summary of one role's numbers, used in commentary prompts."""

    if stats.stat_category is not classify(role):
        raise ValueError(f"{role.value} stats must be {classify(role).value}, got {stats.stat_category.value}")
    if isinstance(stats, PasserStats):
        return (
            f"[{role.value}] passing {stats.pass_completions}/{stats.pass_attempts} "
            f"({format_rate(completion_rate(stats))}%), yards {stats.pass_yards}, TDs {stats.pass_tds}, "
            f"interceptions thrown {stats.interceptions_thrown}, sacks taken {stats.sacks_taken}"
        )
    if isinstance(stats, SkillStats):
        return (
            f"[{role.value}] catches {stats.catches}/{stats.targets} "
            f"({format_rate(catch_rate(stats))}%), receiving yards {stats.receiving_yards}, "
            f"receiving TDs {stats.receiving_tds}, rushing yards {stats.rushing_yards}, "
            f"rushing TDs {stats.rushing_tds}"
        )
    if isinstance(stats, CoverageStats):
        return (
            f"[{role.value}] flag pulls {stats.flag_pull_successes}/{stats.flag_pull_attempts} "
            f"({format_rate(pull_rate(stats))}%), interceptions {stats.interceptions_caught}, "
            f"deflections {stats.pass_deflections}, sacks {stats.sacks_made}, "
            f"defensive TDs {stats.defensive_tds}"
        )
    raise TypeError(f"Unsupported stat shape {type(stats).__name__}")
