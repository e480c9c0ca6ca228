"""Role, category and stat field configuration."""

from .positions import (
    AgeGroup,
    ROLE_LABELS,
    ROLE_ORDER,
    Role,
    STAT_FIELDS,
    StatCategory,
    StatField,
    classify,
    fields_for,
    fields_for_role,
    is_coverage,
    is_passer,
    is_skill,
    iter_fields,
    parse_role,
    roles_in,
)

__all__ = [
    "AgeGroup",
    "ROLE_LABELS",
    "ROLE_ORDER",
    "Role",
    "STAT_FIELDS",
    "StatCategory",
    "StatField",
    "classify",
    "fields_for",
    "fields_for_role",
    "is_coverage",
    "is_passer",
    "is_skill",
    "iter_fields",
    "parse_role",
    "roles_in",
]
