from __future__ import annotations

from pydantic import BaseModel, Field


class TrainingSessionRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
