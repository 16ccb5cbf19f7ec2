from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import EmailStr, Field, StringConstraints

from .common import CamelModel, HttpUrlStr, StringList

Specialty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
Language = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
Certification = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=200)]
TimeOfDay = Annotated[str, StringConstraints(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]


# ======================
# AVAILABILITY
# ======================

class AvailabilityWindow(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    start_time: TimeOfDay
    end_time: TimeOfDay
    timezone: str = "America/Sao_Paulo"


class AvailabilityResponse(AvailabilityWindow):
    id: str


# ======================
# MENTOR REQUEST MODELS
# ======================

class MentorCreate(CamelModel):
    """Admins may create unlinked profiles (no userId)."""
    user_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(None, max_length=1000)
    experience: Optional[int] = Field(None, ge=0, le=100)
    hourly_rate: Optional[float] = Field(None, ge=0, le=10000)
    specialties: Optional[List[Specialty]] = Field(None, max_length=20)
    languages: Optional[List[Language]] = Field(None, max_length=10)
    certifications: Optional[List[Certification]] = Field(None, max_length=50)
    availability: Optional[List[AvailabilityWindow]] = Field(None, max_length=50)
    avatar: Optional[str] = Field(None, max_length=10)
    profile_image_url: Optional[HttpUrlStr] = None


class MentorUpdate(CamelModel):
    bio: Optional[str] = Field(None, max_length=1000)
    experience: Optional[int] = Field(None, ge=0, le=100)
    hourly_rate: Optional[float] = Field(None, ge=0, le=10000)
    specialties: Optional[List[Specialty]] = Field(None, max_length=20)
    languages: Optional[List[Language]] = Field(None, max_length=10)
    certifications: Optional[List[Certification]] = Field(None, max_length=50)
    availability: Optional[List[AvailabilityWindow]] = Field(None, max_length=50)
    avatar: Optional[str] = Field(None, max_length=10)
    profile_image_url: Optional[HttpUrlStr] = None


# ======================
# MENTOR RESPONSE MODELS
# ======================

class MentorSummary(CamelModel):
    """Compact mentor card embedded in session details."""
    id: str
    name: str
    avatar: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None


class MentorResponse(MentorSummary):
    user_id: Optional[str] = None
    email: str
    experience: int = 0
    rating: float = 0.0
    total_sessions: int = 0
    hourly_rate: float = 0.0
    specialties: StringList = []
    languages: StringList = []
    certifications: StringList = []
    availability: List[AvailabilityResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
