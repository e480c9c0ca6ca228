"""Stat shapes: one fixed record per stat category."""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Tuple, Type, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from flagroster.config import Role, StatCategory, StatField, classify, fields_for


_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")

MAX_STAT_VALUE = 999_999_999
_MAX_DIGITS = len(str(MAX_STAT_VALUE))


def coerce_stat_value(raw: Any) -> int:
    """Turn free-form numeric input into an integer in ``[0, MAX_STAT_VALUE]``.

    Mirrors how a browser ``parseInt`` reads an input box: the leading integer
    wins (``"12 yds"`` -> 12, ``"7.9"`` -> 7), anything unreadable becomes 0,
    negative numbers are floored at 0 and oversized counts saturate.
    """

    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        return min(max(raw, 0), MAX_STAT_VALUE)
    if isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")):
            return 0
        return min(max(int(raw), 0), MAX_STAT_VALUE)
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0
    sign, digits = match.groups()
    if sign == "-":
        return 0
    # Length check first: int() refuses very long digit strings.
    if len(digits) > _MAX_DIGITS:
        return MAX_STAT_VALUE
    return min(int(digits), MAX_STAT_VALUE)


class _StatLine(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def stat_category(self) -> StatCategory:
        return StatCategory(getattr(self, "category"))

    @classmethod
    def stat_fields(cls) -> Tuple[StatField, ...]:
        return fields_for(cls.model_fields["category"].default)

    def values(self) -> Tuple[int, ...]:
        return tuple(getattr(self, field.key) for field in self.stat_fields())

    def get(self, key: str, default: int = 0) -> int:
        if key not in {field.key for field in self.stat_fields()}:
            return default
        value = getattr(self, key, None)
        return default if value is None else value

    def with_value(self, key: str, raw: Any) -> "_StatLine":
        """Return a copy with one counting field replaced by coerced input."""

        if key not in {field.key for field in self.stat_fields()}:
            raise KeyError(f"{key!r} is not a {self.stat_category.value} stat")
        payload = self.model_dump()
        payload[key] = coerce_stat_value(raw)
        return type(self).model_validate(payload)


class PasserStats(_StatLine):
    category: Literal["passer"] = "passer"
    pass_attempts: int = Field(default=0, ge=0)
    pass_completions: int = Field(default=0, ge=0)
    pass_yards: int = Field(default=0, ge=0)
    pass_tds: int = Field(default=0, ge=0)
    interceptions_thrown: int = Field(default=0, ge=0)
    sacks_taken: int = Field(default=0, ge=0)


class SkillStats(_StatLine):
    category: Literal["skill"] = "skill"
    targets: int = Field(default=0, ge=0)
    catches: int = Field(default=0, ge=0)
    receiving_yards: int = Field(default=0, ge=0)
    receiving_tds: int = Field(default=0, ge=0)
    rushing_yards: int = Field(default=0, ge=0)
    rushing_tds: int = Field(default=0, ge=0)


class CoverageStats(_StatLine):
    category: Literal["coverage"] = "coverage"
    flag_pull_attempts: int = Field(default=0, ge=0)
    flag_pull_successes: int = Field(default=0, ge=0)
    interceptions_caught: int = Field(default=0, ge=0)
    pass_deflections: int = Field(default=0, ge=0)
    sacks_made: int = Field(default=0, ge=0)
    defensive_tds: int = Field(default=0, ge=0)


StatLine = Union[PasserStats, SkillStats, CoverageStats]
StatShape = Annotated[StatLine, Field(discriminator="category")]

_MODELS: dict[StatCategory, Type[_StatLine]] = {
    StatCategory.PASSER: PasserStats,
    StatCategory.SKILL: SkillStats,
    StatCategory.COVERAGE: CoverageStats,
}


def stats_model_for(category: StatCategory) -> Type[_StatLine]:
    return _MODELS[StatCategory(category)]


def initial_stats(role: Role) -> StatLine:
    """Zeroed stat shape for the category a role belongs to."""

    return stats_model_for(classify(role))()  # type: ignore[return-value]


def stats_from_mapping(role: Role, payload: dict[str, Any]) -> StatLine:
    """Build the shape for ``role`` from loose input, coercing every value."""

    model = stats_model_for(classify(role))
    values = {
        field.key: coerce_stat_value(payload.get(field.key, 0))
        for field in model.stat_fields()
    }
    return model.model_validate(values)  # type: ignore[return-value]
