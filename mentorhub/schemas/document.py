from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import Field, StringConstraints

from .common import CamelModel, HttpUrlStr, StringList

FileType = Literal["pdf", "pptx", "docx", "xlsx", "zip", "code", "image", "video", "other"]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class DocumentCreate(CamelModel):
    """Required: sessionId, mentorId, title, fileUrl, fileName, fileType (checked by the handler)."""
    session_id: Optional[str] = None
    mentor_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    file_url: Optional[str] = Field(None, max_length=1000)
    file_name: Optional[str] = Field(None, max_length=255)
    file_type: Optional[FileType] = None
    file_size: Optional[int] = Field(None, ge=0)
    tags: List[Tag] = Field(default_factory=list, max_length=20)
    is_public: bool = True
    language: Optional[str] = Field(None, max_length=50)
    thumbnail_url: Optional[HttpUrlStr] = None


class DocumentUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    is_public: Optional[bool] = None


class DocumentResponse(CamelModel):
    id: str
    session_id: str
    mentor_id: str
    title: str
    description: Optional[str] = None
    file_url: str
    file_name: str
    file_type: str
    file_size: int = 0
    download_count: int = 0
    view_count: int = 0
    uploaded_at: Optional[datetime] = None
    is_public: bool = True
    language: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tags: StringList = []
