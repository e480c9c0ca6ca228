import pytest

from flagroster.config import (
    ROLE_ORDER,
    STAT_FIELDS,
    Role,
    StatCategory,
    classify,
    fields_for_role,
    is_coverage,
    is_passer,
    is_skill,
    parse_role,
    roles_in,
)


def test_classify_partitions_all_seven_roles():
    assert len(ROLE_ORDER) == 7
    groups = {category: set(roles_in(category)) for category in StatCategory}

    assert groups[StatCategory.PASSER] == {Role.QB}
    assert groups[StatCategory.SKILL] == {Role.WR, Role.RB}
    assert groups[StatCategory.COVERAGE] == {Role.CB, Role.LB, Role.S, Role.RUSH}

    union = set().union(*groups.values())
    assert union == set(Role)
    assert sum(len(roles) for roles in groups.values()) == len(Role)


def test_classify_is_deterministic():
    for role in Role:
        assert classify(role) is classify(role)
        assert classify(role.value) is classify(role)


def test_predicates_agree_with_classify():
    for role in Role:
        flags = (is_passer(role), is_skill(role), is_coverage(role))
        assert sum(flags) == 1


def test_parse_role_is_case_insensitive():
    assert parse_role("qb") is Role.QB
    assert parse_role(" rush ") is Role.RUSH
    assert parse_role(Role.S) is Role.S


def test_parse_role_unknown_raises():
    with pytest.raises(ValueError):
        parse_role("kicker")


def test_each_category_has_six_distinct_fields():
    for category, fields in STAT_FIELDS.items():
        keys = [field.key for field in fields]
        assert len(keys) == 6
        assert len(set(keys)) == 6
    assert [f.key for f in fields_for_role(Role.QB)][:3] == ["pass_attempts", "pass_completions", "pass_yards"]
