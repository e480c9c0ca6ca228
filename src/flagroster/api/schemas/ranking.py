from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

from flagroster.config import AgeGroup, Role, StatCategory


class RankingColumnResponse(BaseModel):
    key: str
    label: str


class RankingRowResponse(BaseModel):
    rank: int
    player_id: str
    name: str
    number: int
    age_group: AgeGroup
    values: dict[str, int]


class RankingResponse(BaseModel):
    role: Role
    category: StatCategory
    sort_key: str
    direction: Literal["asc", "desc"]
    columns: List[RankingColumnResponse]
    rows: List[RankingRowResponse]
