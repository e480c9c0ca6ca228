"""Role-scoped leaderboards over the roster."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Tuple

from flagroster.config import Role, StatField, fields_for_role, parse_role
from flagroster.models import Player, StatLine


SortDirection = Literal["asc", "desc"]
DEFAULT_DIRECTION: SortDirection = "desc"


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction for one leaderboard."""

    key: str
    direction: SortDirection = DEFAULT_DIRECTION

    def toggle(self, key: str) -> "SortState":
        """Clicking the active column flips direction; a new column starts at desc."""

        if key == self.key:
            return SortState(key=key, direction="asc" if self.direction == "desc" else "desc")
        return SortState(key=key, direction=DEFAULT_DIRECTION)


@dataclass(frozen=True)
class RankedEntry:
    player: Player
    stats: StatLine


@dataclass(frozen=True)
class Leaderboard:
    role: Role
    columns: Tuple[StatField, ...]
    sort: SortState
    entries: Tuple[RankedEntry, ...]


def ranking_columns(role: Role) -> Tuple[StatField, ...]:
    return fields_for_role(parse_role(role))


def default_sort(role: Role) -> SortState:
    return SortState(key=ranking_columns(role)[0].key)


def _sort_value(stats: StatLine, key: str) -> float:
    value = stats.get(key, 0)
    return value if isinstance(value, (int, float)) else 0


def eligible(players: Iterable[Player], role: Role) -> list[RankedEntry]:
    """Players that list ``role`` and carry stats for it, in roster order."""

    role = parse_role(role)
    return [
        RankedEntry(player=player, stats=player.stats[role])
        for player in players
        if role in player.roles and role in player.stats
    ]


def rank(
    players: Iterable[Player],
    role: Role,
    sort_key: str,
    direction: SortDirection = DEFAULT_DIRECTION,
) -> list[RankedEntry]:
    """Sort eligible players by one stat column.

    Ordering is the literal numeric value of ``sort_key``; unknown keys read as
    zero. The sort is stable, so ties keep roster order.
    """

    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")
    entries = eligible(players, role)
    entries.sort(key=lambda entry: _sort_value(entry.stats, sort_key), reverse=direction == "desc")
    return entries


def build_leaderboard(
    players: Iterable[Player],
    role: Role,
    sort: Optional[SortState] = None,
) -> Leaderboard:
    role = parse_role(role)
    sort = sort or default_sort(role)
    entries = rank(players, role, sort.key, sort.direction)
    return Leaderboard(role=role, columns=ranking_columns(role), sort=sort, entries=tuple(entries))
