from typing import Iterable, Optional

from sqlalchemy.orm import Session

from mentorhub.models.mentee import Mentee
from mentorhub.models.session import ACTIVE_STATUSES, Session as SessionModel


def get_mentee(db: Session, mentee_id: str) -> Optional[Mentee]:
    return db.query(Mentee).filter(Mentee.id == mentee_id).first()


def get_mentee_by_user(db: Session, user_id: str) -> Optional[Mentee]:
    return db.query(Mentee).filter(Mentee.user_id == user_id).first()


def create_mentee(
    db: Session,
    *,
    user_id: Optional[str],
    name: str,
    email: str,
    avatar: Optional[str] = None,
    profile_image_url: Optional[str] = None,
    bio: Optional[str] = None,
    current_level: Optional[str] = None,
    goals: Optional[Iterable[str]] = None,
    interests: Optional[Iterable[str]] = None,
    preferred_languages: Optional[Iterable[str]] = None,
) -> Mentee:
    mentee = Mentee(
        user_id=user_id,
        name=name,
        email=email,
        avatar=avatar,
        profile_image_url=profile_image_url,
        bio=bio or "",
        current_level=current_level or "beginner",
    )
    mentee.goals = list(goals or [])
    mentee.interests = list(interests or [])
    mentee.preferred_languages = list(preferred_languages or [])

    db.add(mentee)
    db.flush()
    return mentee


def update_mentee(db: Session, mentee: Mentee, **fields) -> Mentee:
    """Apply the given fields; list fields replace every existing row."""
    for key, value in fields.items():
        if key in ("goals", "interests", "preferred_languages"):
            setattr(mentee, key, list(value or []))
        else:
            setattr(mentee, key, value)
    db.flush()
    return mentee


def delete_mentee(db: Session, mentee: Mentee) -> None:
    db.delete(mentee)
    db.flush()


def count_active_sessions(db: Session, mentee_id: str) -> int:
    return db.query(SessionModel).filter(
        SessionModel.mentee_id == mentee_id,
        SessionModel.status.in_(ACTIVE_STATUSES),
    ).count()
