# mentorhub/crud/mentor.py
"""
Mentor CRUD Operations
Flat rows in ``mentors`` plus the specialty, language, certification and
availability child tables.
"""

from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from mentorhub.models.mentor import (
    DEFAULT_LANGUAGES,
    Mentor,
    MentorAvailability,
    MentorSpecialty,
)
from mentorhub.models.session import ACTIVE_STATUSES, Session as SessionModel


# ======================
# LOOKUPS
# ======================

def get_mentor(db: Session, mentor_id: str) -> Optional[Mentor]:
    return db.query(Mentor).filter(Mentor.id == mentor_id).first()


def get_mentor_by_user(db: Session, user_id: str) -> Optional[Mentor]:
    return db.query(Mentor).filter(Mentor.user_id == user_id).first()


def list_mentors(
    db: Session,
    *,
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    min_rating: Optional[float] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Mentor]:
    """
    List mentors with optional filters.

    Args:
        db: Database session
        search: Case-insensitive substring matched against name and bio
        specialty: Exact specialty; requires a join on mentor_specialties
        min_rating: Rating floor (inclusive)
        limit: Maximum mentors to return
        offset: Number of mentors to skip

    Returns:
        Mentors ordered by rating, then total sessions, both descending
    """
    query = db.query(Mentor)

    if specialty:
        query = (
            query.join(MentorSpecialty, MentorSpecialty.mentor_id == Mentor.id)
            .filter(MentorSpecialty.specialty == specialty)
            .distinct()
        )

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Mentor.name.ilike(pattern), Mentor.bio.ilike(pattern)))

    if min_rating is not None:
        query = query.filter(Mentor.rating >= min_rating)

    return (
        query.order_by(Mentor.rating.desc(), Mentor.total_sessions.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def list_specialties(db: Session) -> List[str]:
    rows = (
        db.query(MentorSpecialty.specialty)
        .distinct()
        .order_by(MentorSpecialty.specialty)
        .all()
    )
    return [row.specialty for row in rows]


def count_active_sessions(db: Session, mentor_id: str) -> int:
    return db.query(SessionModel).filter(
        SessionModel.mentor_id == mentor_id,
        SessionModel.status.in_(ACTIVE_STATUSES),
    ).count()


# ======================
# WRITES
# ======================

def _availability_rows(windows: Iterable) -> List[MentorAvailability]:
    return [
        MentorAvailability(
            day_of_week=window.day_of_week,
            start_time=window.start_time,
            end_time=window.end_time,
            timezone=window.timezone,
        )
        for window in windows
    ]


def create_mentor(
    db: Session,
    *,
    name: str,
    email: str,
    user_id: Optional[str] = None,
    avatar: Optional[str] = None,
    profile_image_url: Optional[str] = None,
    bio: Optional[str] = None,
    experience: Optional[int] = None,
    rating: Optional[float] = None,
    total_sessions: Optional[int] = None,
    hourly_rate: Optional[float] = None,
    specialties: Optional[Iterable[str]] = None,
    languages: Optional[Iterable[str]] = None,
    certifications: Optional[Iterable[str]] = None,
    availability: Optional[Iterable] = None,
) -> Mentor:
    mentor = Mentor(
        user_id=user_id,
        name=name,
        email=email,
        avatar=avatar,
        profile_image_url=profile_image_url,
        bio=bio or "",
        experience=experience or 0,
        rating=rating or 0.0,
        total_sessions=total_sessions or 0,
        hourly_rate=hourly_rate or 0.0,
    )
    mentor.specialties = list(specialties or [])
    mentor.languages = list(languages) if languages is not None else list(DEFAULT_LANGUAGES)
    mentor.certifications = list(certifications or [])
    mentor.availability = _availability_rows(availability or [])

    db.add(mentor)
    db.flush()
    return mentor


def update_mentor(
    db: Session,
    mentor: Mentor,
    *,
    bio: str,
    experience: int,
    hourly_rate: float,
    avatar: Optional[str],
    profile_image_url: Optional[str],
    languages: Iterable[str],
    certifications: Iterable[str],
    specialties: Optional[Iterable[str]] = None,
    availability: Optional[Iterable] = None,
) -> Mentor:
    """
    Overwrite every scalar field; the caller merges omitted fields beforehand.

    ``specialties`` and ``availability`` are replaced wholesale (every old row
    is deleted, the new ones inserted) when given, and left alone when None.
    """
    mentor.bio = bio
    mentor.experience = experience
    mentor.hourly_rate = hourly_rate
    mentor.avatar = avatar
    mentor.profile_image_url = profile_image_url
    mentor.languages = list(languages)
    mentor.certifications = list(certifications)

    if specialties is not None:
        mentor.specialties = list(specialties)
    if availability is not None:
        mentor.availability = _availability_rows(availability)

    db.flush()
    return mentor


def delete_mentor(db: Session, mentor: Mentor) -> None:
    db.delete(mentor)
    db.flush()


def increment_total_sessions(db: Session, mentor_id: str) -> None:
    db.query(Mentor).filter(Mentor.id == mentor_id).update(
        {Mentor.total_sessions: Mentor.total_sessions + 1},
        synchronize_session=False,
    )
