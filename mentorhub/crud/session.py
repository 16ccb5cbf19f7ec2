# mentorhub/crud/session.py
"""
Session CRUD Operations
Session rows, their requirement/objective lists and the enrollment ledger
(session_participants + the current_participants counter).
"""

from typing import Iterable, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session

from mentorhub.models.session import (
    ENROLLABLE_STATUSES,
    equivalent_statuses,
    Session as SessionModel,
    SessionParticipant,
)


# ======================
# SESSION CRUD
# ======================

def get_session(db: Session, session_id: str) -> Optional[SessionModel]:
    return db.query(SessionModel).filter(SessionModel.id == session_id).first()


def list_sessions(
    db: Session,
    *,
    mentor_id: Optional[str] = None,
    mentee_id: Optional[str] = None,
    status: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[SessionModel]:
    query = db.query(SessionModel)

    if mentor_id:
        query = query.filter(SessionModel.mentor_id == mentor_id)
    if mentee_id:
        query = query.filter(SessionModel.mentee_id == mentee_id)
    if status:
        query = query.filter(SessionModel.status.in_(equivalent_statuses(status)))

    return (
        query.order_by(SessionModel.scheduled_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def create_session(
    db: Session,
    *,
    mentor_id: str,
    title: str,
    scheduled_at,
    duration: int,
    mentee_id: Optional[str] = None,
    description: Optional[str] = None,
    topic: Optional[str] = None,
    max_participants: Optional[int] = None,
    meeting_link: Optional[str] = None,
    requirements: Optional[Iterable[str]] = None,
    objectives: Optional[Iterable[str]] = None,
    status: str = "scheduled",
) -> SessionModel:
    session = SessionModel(
        mentor_id=mentor_id,
        mentee_id=mentee_id,
        title=title,
        description=description or "",
        topic=topic or "",
        scheduled_at=scheduled_at,
        duration=duration,
        max_participants=max_participants,
        current_participants=0,
        status=status,
        meeting_link=meeting_link,
        has_documents=False,
    )
    session.requirements = list(requirements or [])
    session.objectives = list(objectives or [])

    db.add(session)
    db.flush()
    return session


def update_session(db: Session, session: SessionModel, **fields) -> SessionModel:
    """Apply the given fields; requirements/objectives replace every existing row."""
    for key, value in fields.items():
        if key in ("requirements", "objectives"):
            setattr(session, key, list(value or []))
        else:
            setattr(session, key, value)
    db.flush()
    return session


def delete_session(db: Session, session: SessionModel) -> None:
    db.delete(session)
    db.flush()


def set_has_documents(db: Session, session_id: str, value: bool) -> None:
    db.query(SessionModel).filter(SessionModel.id == session_id).update(
        {SessionModel.has_documents: value},
        synchronize_session=False,
    )


# ======================
# ENROLLMENT LEDGER
# ======================

def is_user_enrolled(db: Session, session_id: str, user_id: str) -> bool:
    return db.query(SessionParticipant.id).filter(
        SessionParticipant.session_id == session_id,
        SessionParticipant.user_id == user_id,
    ).first() is not None


def enrolled_session_ids(db: Session, user_id: str, session_ids: Iterable[str]) -> Set[str]:
    """Subset of ``session_ids`` the user is enrolled in, resolved in one query."""
    session_ids = list(session_ids)
    if not session_ids:
        return set()
    rows = db.query(SessionParticipant.session_id).filter(
        SessionParticipant.user_id == user_id,
        SessionParticipant.session_id.in_(session_ids),
    ).all()
    return {row.session_id for row in rows}


def list_enrolled_sessions(
    db: Session,
    user_id: str,
    *,
    limit: int = 50,
    offset: int = 0,
) -> List[SessionModel]:
    return (
        db.query(SessionModel)
        .join(SessionParticipant, SessionParticipant.session_id == SessionModel.id)
        .filter(SessionParticipant.user_id == user_id)
        .order_by(SessionModel.scheduled_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def claim_seat(db: Session, session_id: str) -> bool:
    """
    Atomically take one seat.

    The counter only moves while it is below max_participants and the
    session is still enrollable, so concurrent joins can never overshoot.

    Args:
        db: Database session
        session_id: Session identifier

    Returns:
        True if a seat was taken, False if the session is full
    """
    claimed = db.query(SessionModel).filter(
        SessionModel.id == session_id,
        SessionModel.max_participants.isnot(None),
        SessionModel.current_participants < SessionModel.max_participants,
        SessionModel.status.in_(ENROLLABLE_STATUSES),
    ).update(
        {SessionModel.current_participants: SessionModel.current_participants + 1},
        synchronize_session=False,
    )
    return claimed == 1


def release_seat(db: Session, session_id: str) -> None:
    # Floor at zero.
    db.query(SessionModel).filter(
        SessionModel.id == session_id,
        SessionModel.current_participants > 0,
    ).update(
        {SessionModel.current_participants: SessionModel.current_participants - 1},
        synchronize_session=False,
    )


def release_seats_for_user(db: Session, user_id: str) -> int:
    """Give back every seat the user holds. Participant rows are left to the caller."""
    joined = db.query(SessionParticipant.session_id).filter(
        SessionParticipant.user_id == user_id
    ).scalar_subquery()
    return db.query(SessionModel).filter(
        SessionModel.id.in_(joined),
        SessionModel.current_participants > 0,
    ).update(
        {SessionModel.current_participants: SessionModel.current_participants - 1},
        synchronize_session=False,
    )


def add_participant(db: Session, session_id: str, user_id: str) -> SessionParticipant:
    """Raises IntegrityError when the user already holds a seat."""
    participant = SessionParticipant(session_id=session_id, user_id=user_id)
    db.add(participant)
    db.flush()
    return participant


def remove_participant(db: Session, session_id: str, user_id: str) -> int:
    return db.query(SessionParticipant).filter(
        SessionParticipant.session_id == session_id,
        SessionParticipant.user_id == user_id,
    ).delete(synchronize_session=False)


def count_participants(db: Session, session_id: str) -> int:
    return db.query(func.count(SessionParticipant.id)).filter(
        SessionParticipant.session_id == session_id
    ).scalar() or 0
