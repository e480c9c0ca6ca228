from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field

from flagroster.config import AgeGroup, Role, StatCategory
from flagroster.models import Player


class PlayerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    number: int = Field(default=0, ge=0)
    age_group: AgeGroup = AgeGroup.U10
    avatar: str = ""
    roles: List[Role] | None = None


class PlayerProfileUpdate(BaseModel):
    name: str | None = None
    number: int | None = Field(default=None, ge=0)
    age_group: AgeGroup | None = None
    avatar: str | None = None


class StatUpdateRequest(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


class StatTileResponse(BaseModel):
    label: str
    value: str
    sub_label: str | None = None


class RadarAxisResponse(BaseModel):
    label: str
    value: float
    full_mark: float


class RoleProfileResponse(BaseModel):
    role: Role
    category: StatCategory
    stats: dict[str, int]
    tiles: List[StatTileResponse]
    radar: List[RadarAxisResponse]


class PlayerProfileResponse(BaseModel):
    player: Player
    roles: List[RoleProfileResponse]


class CommentaryStatusResponse(BaseModel):
    player_id: str
    status: str
    commentary: str | None = None


class DashboardResponse(BaseModel):
    players: int
    training_sessions: int
