"""Pydantic models for API I/O."""

from .ranking import RankingColumnResponse, RankingResponse, RankingRowResponse
from .roster import (
    CommentaryStatusResponse,
    DashboardResponse,
    PlayerCreateRequest,
    PlayerProfileResponse,
    PlayerProfileUpdate,
    RadarAxisResponse,
    RoleProfileResponse,
    StatTileResponse,
    StatUpdateRequest,
)
from .training import TrainingSessionRequest

__all__ = [
    "CommentaryStatusResponse",
    "DashboardResponse",
    "PlayerCreateRequest",
    "PlayerProfileResponse",
    "PlayerProfileUpdate",
    "RadarAxisResponse",
    "RankingColumnResponse",
    "RankingResponse",
    "RankingRowResponse",
    "RoleProfileResponse",
    "StatTileResponse",
    "StatUpdateRequest",
    "TrainingSessionRequest",
]
