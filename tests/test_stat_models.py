import pytest
from pydantic import TypeAdapter, ValidationError

from flagroster.config import Role, StatCategory
from flagroster.models import (
    MAX_STAT_VALUE,
    CoverageStats,
    PasserStats,
    SkillStats,
    StatShape,
    coerce_stat_value,
    initial_stats,
    stats_from_mapping,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("12 yds", 12),
        ("7.9", 7),
        ("", 0),
        ("abc", 0),
        (None, 0),
        (-5, 0),
        ("-3", 0),
        (3.6, 3),
        (float("nan"), 0),
        (True, 0),
        ("9" * 5000, MAX_STAT_VALUE),
        ("0" * 5000 + "7", 7),
        ("-" + "9" * 5000, 0),
        ("1000000000", MAX_STAT_VALUE),
        (10**400, MAX_STAT_VALUE),
        (1e300, MAX_STAT_VALUE),
        (float("inf"), 0),
    ],
)
def test_coerce_stat_value(raw, expected):
    assert coerce_stat_value(raw) == expected


def test_initial_stats_follow_role_category():
    assert isinstance(initial_stats(Role.QB), PasserStats)
    assert isinstance(initial_stats(Role.RB), SkillStats)
    assert isinstance(initial_stats(Role.RUSH), CoverageStats)
    for role in Role:
        assert set(initial_stats(role).values()) == {0}


def test_with_value_coerces_and_returns_copy():
    stats = initial_stats(Role.WR)
    updated = stats.with_value("targets", "15")

    assert updated.targets == 15
    assert stats.targets == 0


def test_with_value_rejects_field_from_other_category():
    with pytest.raises(KeyError):
        initial_stats(Role.WR).with_value("pass_yards", 10)


def test_get_defaults_unknown_keys_to_zero():
    stats = PasserStats(pass_yards=300)
    assert stats.get("pass_yards") == 300
    assert stats.get("catches") == 0


def test_discriminated_union_picks_shape_by_tag():
    adapter = TypeAdapter(StatShape)
    shape = adapter.validate_python({"category": "coverage", "sacks_made": 3})

    assert isinstance(shape, CoverageStats)
    assert shape.stat_category is StatCategory.COVERAGE


def test_negative_counts_rejected_on_construction():
    with pytest.raises(ValidationError):
        SkillStats(targets=-1)


def test_stats_from_mapping_ignores_unknown_keys():
    stats = stats_from_mapping(Role.CB, {"flag_pull_attempts": "9", "pass_yards": 500})
    assert isinstance(stats, CoverageStats)
    assert stats.flag_pull_attempts == 9
    assert stats.values() == (9, 0, 0, 0, 0, 0)
