# mentorhub/schemas/review.py
"""
Review Pydantic Schemas
Request/response models for session reviews
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel


# ======================
# REVIEW SCHEMAS
# ======================

class ReviewCreate(CamelModel):
    """Schema for creating a review"""
    session_id: str = Field(..., description="Session identifier")
    reviewee_id: str = Field(..., description="User being reviewed")
    rating: int = Field(..., ge=1, le=5, description="Overall rating from 1 to 5")
    comment: Optional[str] = Field(None, max_length=1000, description="Review comment (max 1000 chars)")
    communication: Optional[int] = Field(None, ge=1, le=5)
    expertise: Optional[int] = Field(None, ge=1, le=5)
    helpfulness: Optional[int] = Field(None, ge=1, le=5)
    punctuality: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v):
        """Validate comment is not just whitespace"""
        if v is not None and v.strip() == "":
            raise ValueError("Comment cannot be empty or just whitespace")
        return v.strip() if v else None


class ReviewResponse(CamelModel):
    """Review response for API"""
    id: str
    session_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int
    comment: Optional[str] = None
    communication: Optional[int] = None
    expertise: Optional[int] = None
    helpfulness: Optional[int] = None
    punctuality: Optional[int] = None
    created_at: Optional[datetime] = None
