from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .common import CamelModel, to_naive_utc

GoalCategory = Literal["career", "leadership", "communication", "technical", "personal"]
GoalPriority = Literal["low", "medium", "high"]
GoalStatus = Literal["not-started", "in-progress", "completed", "paused"]


class GoalCreate(CamelModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[GoalCategory] = None
    priority: Optional[GoalPriority] = None
    progress: Optional[int] = None
    target_date: Optional[datetime] = None

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value):
        return to_naive_utc(value)


class GoalUpdate(GoalCreate):
    status: Optional[GoalStatus] = None


class GoalResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    category: str
    priority: str
    status: str
    progress: int
    target_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
