# mentorhub/models/__init__.py
# Import models in dependency order
from .user import User
from .mentor import Mentor, MentorSpecialty, MentorLanguage, MentorCertification, MentorAvailability
from .mentee import Mentee, MenteeGoal, MenteeInterest, MenteeLanguage
from .session import Session, SessionRequirement, SessionObjective, SessionParticipant
from .document import Document, DocumentTag
from .goal import Goal
from .review import Review

__all__ = [
    "User",
    "Mentor",
    "MentorSpecialty",
    "MentorLanguage",
    "MentorCertification",
    "MentorAvailability",
    "Mentee",
    "MenteeGoal",
    "MenteeInterest",
    "MenteeLanguage",
    "Session",
    "SessionRequirement",
    "SessionObjective",
    "SessionParticipant",
    "Document",
    "DocumentTag",
    "Goal",
    "Review",
]
