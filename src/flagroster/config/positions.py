"""Role classification and per-category stat field definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Tuple, Union


class Role(str, Enum):
    QB = "QB"
    WR = "WR"
    RB = "RB"
    CB = "CB"
    LB = "LB"
    S = "S"
    RUSH = "RUSH"


class StatCategory(str, Enum):
    PASSER = "passer"
    SKILL = "skill"
    COVERAGE = "coverage"


class AgeGroup(str, Enum):
    U6 = "U6"
    U8 = "U8"
    U10 = "U10"
    U12 = "U12"


@dataclass(frozen=True)
class StatField:
    key: str
    label: str


ROLE_ORDER: Tuple[Role, ...] = tuple(Role)

ROLE_LABELS: Mapping[Role, str] = {
    Role.QB: "Quarterback",
    Role.WR: "Wide Receiver",
    Role.RB: "Running Back",
    Role.CB: "Cornerback",
    Role.LB: "Linebacker",
    Role.S: "Safety",
    Role.RUSH: "Rusher",
}

_ROLE_CATEGORIES: Dict[Role, StatCategory] = {
    Role.QB: StatCategory.PASSER,
    Role.WR: StatCategory.SKILL,
    Role.RB: StatCategory.SKILL,
    Role.CB: StatCategory.COVERAGE,
    Role.LB: StatCategory.COVERAGE,
    Role.S: StatCategory.COVERAGE,
    Role.RUSH: StatCategory.COVERAGE,
}

# Field order is shared by the edit form, ranking columns, CLI tables and prompts.
STAT_FIELDS: Mapping[StatCategory, Tuple[StatField, ...]] = {
    StatCategory.PASSER: (
        StatField("pass_attempts", "Pass Attempts"),
        StatField("pass_completions", "Completions"),
        StatField("pass_yards", "Passing Yards"),
        StatField("pass_tds", "Passing TDs"),
        StatField("interceptions_thrown", "Interceptions Thrown"),
        StatField("sacks_taken", "Sacks Taken"),
    ),
    StatCategory.SKILL: (
        StatField("targets", "Targets"),
        StatField("catches", "Catches"),
        StatField("receiving_yards", "Receiving Yards"),
        StatField("receiving_tds", "Receiving TDs"),
        StatField("rushing_yards", "Rushing Yards"),
        StatField("rushing_tds", "Rushing TDs"),
    ),
    StatCategory.COVERAGE: (
        StatField("flag_pull_attempts", "Flag Pull Attempts"),
        StatField("flag_pull_successes", "Flag Pulls"),
        StatField("interceptions_caught", "Interceptions"),
        StatField("pass_deflections", "Pass Deflections"),
        StatField("sacks_made", "Sacks"),
        StatField("defensive_tds", "Defensive TDs"),
    ),
}


def classify(role: Role) -> StatCategory:
    """Return the stat category a role records its numbers under."""

    return _ROLE_CATEGORIES[Role(role)]


def is_passer(role: Role) -> bool:
    return classify(role) is StatCategory.PASSER


def is_skill(role: Role) -> bool:
    return classify(role) is StatCategory.SKILL


def is_coverage(role: Role) -> bool:
    return classify(role) is StatCategory.COVERAGE


def parse_role(value: Union[str, Role]) -> Role:
    """Resolve a role tag case-insensitively, raising ValueError if unknown."""

    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        raise TypeError("role must be a str or Role")
    key = value.strip().upper()
    try:
        return Role(key)
    except ValueError:
        raise ValueError(f"Unknown role {value!r}; expected one of {', '.join(r.value for r in Role)}") from None


def roles_in(category: StatCategory) -> Tuple[Role, ...]:
    return tuple(role for role in ROLE_ORDER if classify(role) is category)


def fields_for(category: StatCategory) -> Tuple[StatField, ...]:
    return STAT_FIELDS[StatCategory(category)]


def fields_for_role(role: Role) -> Tuple[StatField, ...]:
    return fields_for(classify(role))


def iter_fields() -> Iterable[Tuple[StatCategory, Tuple[StatField, ...]]]:
    """Return (category, fields) pairs in category declaration order."""

    return ((category, STAT_FIELDS[category]) for category in StatCategory)
