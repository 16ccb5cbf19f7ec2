# mentorhub/services/enrollment_service.py
"""
Enrollment Service Layer
Joining and leaving open sessions
"""

import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mentorhub import models
from mentorhub.crud import session as session_crud
from mentorhub.exceptions import ConflictError, InternalError, NotFoundError
from mentorhub.models.session import ENROLLABLE_STATUSES

logger = logging.getLogger(__name__)

SESSION_FULL = "Sessão cheia. Não há vagas disponíveis."
ALREADY_ENROLLED = "Você já está inscrito nesta sessão"


def _enrollment_state(session: models.Session, is_enrolled: bool) -> Dict[str, Any]:
    return {
        "session_id": session.id,
        "current_participants": session.current_participants,
        "max_participants": session.max_participants,
        "is_enrolled": is_enrolled,
    }


# ======================
# JOIN
# ======================

def join_session(db: Session, session_id: str, user: models.User) -> Dict[str, Any]:
    """
    Enroll a user in a session.

    The seat is taken with a conditional counter update and the participant
    row is inserted in the same transaction, so capacity cannot be exceeded
    and the counter always matches the participant rows.

    Args:
        db: Database session
        session_id: Session identifier
        user: Authenticated user

    Returns:
        Enrollment state (session id, counters, is_enrolled)

    Raises:
        NotFoundError: Session does not exist
        ConflictError: Session closed, full, already joined or owned by the caller
    """
    session = session_crud.get_session(db, session_id)
    if session is None:
        raise NotFoundError("Sessão não encontrada")

    if session.status not in ENROLLABLE_STATUSES:
        raise ConflictError(
            f'Não é possível se inscrever em uma sessão com status "{session.status}". '
            "Apenas sessões agendadas ou próximas aceitam inscrições."
        )

    if not session.max_participants:
        raise ConflictError("Esta sessão não aceita inscrições")

    if session.current_participants >= session.max_participants:
        raise ConflictError(SESSION_FULL)

    if session_crud.is_user_enrolled(db, session.id, user.id):
        raise ConflictError(ALREADY_ENROLLED)

    if session.mentor is not None and session.mentor.user_id == user.id:
        raise ConflictError("O mentor não pode se inscrever em sua própria sessão")

    try:
        claimed = session_crud.claim_seat(db, session.id)
        if claimed:
            session_crud.add_participant(db, session.id, user.id)
            db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ALREADY_ENROLLED)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Join failed (session_id=%s, user_id=%s)", session_id, user.id)
        raise InternalError("Erro ao se inscrever na sessão")

    if not claimed:
        # Another request took the last seat after the checks above.
        db.rollback()
        raise ConflictError(SESSION_FULL)

    db.refresh(session)
    logger.info(
        "User %s joined session %s (%s/%s)",
        user.id,
        session.id,
        session.current_participants,
        session.max_participants,
    )
    return _enrollment_state(session, True)


# ======================
# LEAVE
# ======================

def leave_session(db: Session, session_id: str, user: models.User) -> Dict[str, Any]:
    session = session_crud.get_session(db, session_id)
    if session is None:
        raise NotFoundError("Sessão não encontrada")

    try:
        removed = session_crud.remove_participant(db, session.id, user.id)
        if removed:
            session_crud.release_seat(db, session.id)
            db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Leave failed (session_id=%s, user_id=%s)", session_id, user.id)
        raise InternalError("Erro ao cancelar inscrição")

    if not removed:
        db.rollback()
        raise ConflictError("Você não está inscrito nesta sessão")

    db.refresh(session)
    logger.info("User %s left session %s", user.id, session.id)
    return _enrollment_state(session, False)
