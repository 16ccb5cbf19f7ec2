from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import Field, StringConstraints

from .common import CamelModel, HttpUrlStr, StringList

ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=200)]


class MenteeUpdate(CamelModel):
    bio: Optional[str] = Field(None, max_length=1000)
    current_level: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    goals: Optional[List[ShortText]] = Field(None, max_length=20)
    interests: Optional[List[ShortText]] = Field(None, max_length=20)
    preferred_languages: Optional[List[ShortText]] = Field(None, max_length=10)
    avatar: Optional[str] = Field(None, max_length=10)
    profile_image_url: Optional[HttpUrlStr] = None


class MenteeResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    name: str
    email: str
    avatar: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    current_level: str
    goals: StringList = []
    interests: StringList = []
    preferred_languages: StringList = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
