from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import ConfigDict, Field, StringConstraints, field_validator

from .common import CamelModel, HttpUrlStr, StringList, to_naive_utc
from .mentor import MentorSummary

SessionStatus = Literal["scheduled", "in-progress", "completed", "cancelled", "upcoming", "live"]
ListItem = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]

# ======================
# SESSION REQUEST MODELS
# ======================


class SessionCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    mentor_id: str
    mentee_id: Optional[str] = None
    title: str = Field(..., min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    topic: Optional[str] = Field(None, max_length=100)
    scheduled_at: datetime
    duration: int = Field(..., ge=15, le=480, description="Minutes")
    max_participants: Optional[int] = Field(None, ge=1, le=1000)
    meeting_link: Optional[HttpUrlStr] = None
    requirements: List[ListItem] = Field(default_factory=list, max_length=10)
    objectives: List[ListItem] = Field(default_factory=list, max_length=10)

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class SessionUpdate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    topic: Optional[str] = Field(None, max_length=100)
    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=15, le=480)
    status: Optional[SessionStatus] = None
    max_participants: Optional[int] = Field(None, ge=1, le=1000)
    meeting_link: Optional[HttpUrlStr] = None
    notes: Optional[str] = Field(None, max_length=2000)
    requirements: Optional[List[ListItem]] = Field(None, max_length=10)
    objectives: Optional[List[ListItem]] = Field(None, max_length=10)

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


# ======================
# SESSION RESPONSE MODELS
# ======================

class SessionResponse(CamelModel):
    id: str
    mentor_id: str
    mentee_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    topic: Optional[str] = None
    scheduled_at: datetime
    duration: int
    max_participants: Optional[int] = None
    current_participants: int = 0
    status: str
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    rating: Optional[float] = None
    feedback: Optional[str] = None
    has_documents: bool = False
    requirements: StringList = []
    objectives: StringList = []
    is_enrolled: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SessionDetail(SessionResponse):
    documents: StringList = []
    mentor: Optional[MentorSummary] = None


class EnrollmentResponse(CamelModel):
    session_id: str
    current_participants: int
    max_participants: Optional[int] = None
    is_enrolled: bool
