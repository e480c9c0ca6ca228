"""Player aggregate: identity, one or two roles and a stat shape per role."""

from __future__ import annotations

from typing import Annotated, Any, Dict, Mapping, NoReturn, Optional, Sequence, Tuple
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from flagroster.config import AgeGroup, Role, classify, parse_role

from .stats import StatLine, StatShape, coerce_stat_value, initial_stats, stats_from_mapping


MIN_ROLES = 1
MAX_ROLES = 2
DEFAULT_ROLE = Role.WR

ROLE_MINIMUM_NOTICE = "A player must keep at least one role."
ROLE_MAXIMUM_NOTICE = "A player can hold at most two roles."


class RoleLimitError(ValueError):
    """Raised when a role change would leave a player with too few or too many roles."""

    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


class RoleStats(dict):
    """Read-only role -> stat shape mapping held by a ``Player``."""

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError("player stats are read-only; use Player.with_stats")

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __reduce__(self) -> Tuple[Any, ...]:
        return (type(self), (dict(self),))


class Player(BaseModel):
    """Roster entry. Immutable; every change goes through a ``with_*`` method."""

    player_id: str = Field(..., min_length=1)
    name: str
    number: int = Field(default=0, ge=0)
    age_group: AgeGroup = AgeGroup.U10
    avatar: str = ""
    roles: Tuple[Role, ...]
    stats: Annotated[Dict[Role, StatShape], AfterValidator(RoleStats)]
    commentary: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _tag_stat_payloads(cls, data: Any) -> Any:
        # Plain stat dicts may omit the category tag; the role decides it.
        if not isinstance(data, dict) or not isinstance(data.get("stats"), Mapping):
            return data
        tagged: Dict[Any, Any] = {}
        for role, payload in data["stats"].items():
            if isinstance(payload, Mapping) and "category" not in payload:
                payload = {**payload, "category": classify(parse_role(role)).value}
            tagged[role] = payload
        return {**data, "stats": tagged}

    @model_validator(mode="after")
    def _check_roles_match_stats(self) -> "Player":
        if not MIN_ROLES <= len(self.roles) <= MAX_ROLES:
            raise ValueError(f"a player holds between {MIN_ROLES} and {MAX_ROLES} roles, got {len(self.roles)}")
        if len(set(self.roles)) != len(self.roles):
            raise ValueError("roles must not repeat")
        if set(self.roles) != set(self.stats):
            missing = sorted(r.value for r in set(self.roles) - set(self.stats))
            extra = sorted(r.value for r in set(self.stats) - set(self.roles))
            raise ValueError(f"roles and stats disagree (missing stats: {missing}, stats without role: {extra})")
        for role, line in self.stats.items():
            if line.stat_category is not classify(role):
                raise ValueError(f"{role.value} expects {classify(role).value} stats, got {line.stat_category.value}")
        return self

    @property
    def primary_role(self) -> Role:
        return self.roles[0]

    def stats_for(self, role: Role) -> StatLine:
        role = parse_role(role)
        if role not in self.stats:
            raise KeyError(f"{self.name or self.player_id} does not play {role.value}")
        return self.stats[role]

    def _replace(self, **changes: Any) -> "Player":
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self)(**data)

    def with_role_added(self, role: Role) -> "Player":
        role = parse_role(role)
        if role in self.roles:
            return self
        if len(self.roles) >= MAX_ROLES:
            raise RoleLimitError(ROLE_MAXIMUM_NOTICE)
        roles = (*self.roles, role)
        stats = {**self.stats, role: initial_stats(role)}
        return self._replace(roles=roles, stats=stats)

    def with_role_removed(self, role: Role) -> "Player":
        role = parse_role(role)
        if role not in self.roles:
            return self
        if len(self.roles) <= MIN_ROLES:
            raise RoleLimitError(ROLE_MINIMUM_NOTICE)
        roles = tuple(r for r in self.roles if r is not role)
        stats = {r: self.stats[r] for r in roles}
        return self._replace(roles=roles, stats=stats)

    def with_roles(self, roles: Sequence[Role]) -> "Player":
        """Set the full role list at once, keeping stats for roles already held."""

        wanted = tuple(dict.fromkeys(parse_role(role) for role in roles))
        if len(wanted) < MIN_ROLES:
            raise RoleLimitError(ROLE_MINIMUM_NOTICE)
        if len(wanted) > MAX_ROLES:
            raise RoleLimitError(ROLE_MAXIMUM_NOTICE)
        stats = {role: self.stats[role] if role in self.stats else initial_stats(role) for role in wanted}
        return self._replace(roles=wanted, stats=stats)

    def with_role_toggled(self, role: Role) -> "Player":
        role = parse_role(role)
        if role in self.roles:
            return self.with_role_removed(role)
        return self.with_role_added(role)

    def with_stat(self, role: Role, key: str, raw: Any) -> "Player":
        role = parse_role(role)
        line = self.stats_for(role).with_value(key, raw)
        return self._replace(stats={**self.stats, role: line})

    def with_stats(self, role: Role, values: Mapping[str, Any]) -> "Player":
        """Overwrite several fields of one role's stats; unknown keys are ignored."""

        role = parse_role(role)
        current = self.stats_for(role).model_dump()
        merged = {**current, **{key: coerce_stat_value(value) for key, value in values.items()}}
        return self._replace(stats={**self.stats, role: stats_from_mapping(role, merged)})

    def with_profile(
        self,
        *,
        name: Optional[str] = None,
        number: Optional[int] = None,
        age_group: Optional[AgeGroup] = None,
        avatar: Optional[str] = None,
    ) -> "Player":
        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if number is not None:
            changes["number"] = coerce_stat_value(number)
        if age_group is not None:
            changes["age_group"] = age_group
        if avatar is not None:
            changes["avatar"] = avatar
        return self._replace(**changes) if changes else self

    def with_commentary(self, text: Optional[str]) -> "Player":
        return self._replace(commentary=text)


def new_player(
    *,
    name: str = "",
    number: int = 0,
    age_group: AgeGroup = AgeGroup.U10,
    avatar: str = "",
    player_id: Optional[str] = None,
) -> Player:
    """Fresh roster entry holding the default skill role with zeroed stats."""

    return Player(
        player_id=player_id or uuid4().hex,
        name=name,
        number=number,
        age_group=age_group,
        avatar=avatar,
        roles=(DEFAULT_ROLE,),
        stats={DEFAULT_ROLE: initial_stats(DEFAULT_ROLE)},
    )
