# mentorhub/schemas/__init__.py

# User / auth schemas
from .user import UserResponse, AuthResponse
from .auth import RegisterRequest, LoginRequest, ProfileUpdate, TokenData

# Mentor / mentee schemas
from .mentor import (
    AvailabilityWindow,
    AvailabilityResponse,
    MentorCreate,
    MentorUpdate,
    MentorSummary,
    MentorResponse,
)
from .mentee import MenteeUpdate, MenteeResponse

# Session schemas
from .session import (
    SessionCreate,
    SessionUpdate,
    SessionResponse,
    SessionDetail,
    EnrollmentResponse,
)

# Document / goal / review schemas
from .document import DocumentCreate, DocumentUpdate, DocumentResponse
from .goal import GoalCreate, GoalUpdate, GoalResponse
from .review import ReviewCreate, ReviewResponse

__all__ = [
    "UserResponse",
    "AuthResponse",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdate",
    "TokenData",
    "AvailabilityWindow",
    "AvailabilityResponse",
    "MentorCreate",
    "MentorUpdate",
    "MentorSummary",
    "MentorResponse",
    "MenteeUpdate",
    "MenteeResponse",
    "SessionCreate",
    "SessionUpdate",
    "SessionResponse",
    "SessionDetail",
    "EnrollmentResponse",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    "ReviewCreate",
    "ReviewResponse",
]
