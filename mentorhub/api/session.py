# mentorhub/api/session.py
"""
Session Management API
Mentor-hosted sessions with open enrollment

Endpoints:
- GET /api/sessions - List sessions (optional auth adds isEnrolled)
- GET /api/sessions/my/enrolled - Sessions the caller joined
- GET /api/sessions/{session_id} - Session detail with mentor card and documents
- POST /api/sessions - Create a session (mentors and admins)
- PUT /api/sessions/{session_id} - Update a session (owner or admin)
- DELETE /api/sessions/{session_id} - Delete a session (owner or admin)
- POST /api/sessions/{session_id}/join - Enroll the caller
- POST /api/sessions/{session_id}/leave - Cancel the caller's enrollment
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mentorhub.crud import mentee as mentee_crud
from mentorhub.crud import mentor as mentor_crud
from mentorhub.crud import session as session_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from mentorhub.models.session import Session as SessionModel, UNDELETABLE_STATUSES
from mentorhub.models.user import User
from mentorhub.schemas import (
    EnrollmentResponse,
    SessionCreate,
    SessionDetail,
    SessionResponse,
    SessionUpdate,
)
from mentorhub.services import enrollment_service
from mentorhub.utils.pagination import clamp_pagination
from mentorhub.utils.response import success_response
from mentorhub.utils.security import (
    get_current_user,
    get_optional_user,
    is_owner_or_admin,
    require_mentor,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

MIN_NOTICE = timedelta(hours=6)


# ======================
# HELPER FUNCTIONS
# ======================
def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ensure_min_notice(scheduled_at: datetime) -> None:
    """Sessions must be scheduled at least six hours ahead."""
    if scheduled_at < _utcnow() + MIN_NOTICE:
        raise ValidationError("A sessão deve ser agendada com no mínimo 6 horas de antecedência")


def _get_session_or_404(db: Session, session_id: str) -> SessionModel:
    session = session_crud.get_session(db, session_id)
    if session is None:
        raise NotFoundError("Sessão não encontrada")
    return session


def _ensure_session_owner(session: SessionModel, current_user: User, action: str) -> None:
    if session.mentor is None:
        raise NotFoundError("Mentor não encontrado")
    if not is_owner_or_admin(current_user, session.mentor.user_id):
        raise AuthorizationError(f"Você não tem permissão para {action} esta sessão")


def _to_responses(
    db: Session,
    sessions: List[SessionModel],
    viewer: Optional[User],
) -> List[SessionResponse]:
    enrolled = set()
    if viewer is not None:
        enrolled = session_crud.enrolled_session_ids(db, viewer.id, [s.id for s in sessions])

    responses = []
    for s in sessions:
        item = SessionResponse.model_validate(s)
        item.is_enrolled = s.id in enrolled
        responses.append(item)
    return responses


def _to_detail(db: Session, session: SessionModel, viewer: Optional[User]) -> SessionDetail:
    detail = SessionDetail.model_validate(session)
    if viewer is not None:
        detail.is_enrolled = session_crud.is_user_enrolled(db, session.id, viewer.id)
    return detail


# ======================
# SESSION LISTING
# ======================
@router.get("")
def list_sessions(
    status: Optional[str] = None,
    mentor_id: Annotated[Optional[str], Query(alias="mentorId")] = None,
    mentee_id: Annotated[Optional[str], Query(alias="menteeId")] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """List sessions, most recently scheduled first"""
    limit, offset = clamp_pagination(limit, offset)
    sessions = session_crud.list_sessions(
        db,
        mentor_id=mentor_id,
        mentee_id=mentee_id,
        status=status,
        limit=limit,
        offset=offset,
    )
    data = _to_responses(db, sessions, current_user)
    return success_response(
        data,
        count=len(data),
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/my/enrolled")
def my_enrolled_sessions(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    limit, offset = clamp_pagination(limit, offset)
    sessions = session_crud.list_enrolled_sessions(db, current_user.id, limit=limit, offset=offset)

    data = []
    for s in sessions:
        item = SessionResponse.model_validate(s)
        item.is_enrolled = True
        data.append(item)
    return success_response(data, count=len(data))


@router.get("/{session_id}")
def get_session(
    session_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    session = _get_session_or_404(db, session_id)
    return success_response(_to_detail(db, session, current_user))


# ======================
# CREATE / UPDATE / DELETE
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def create_session(
    payload: SessionCreate,
    current_user: User = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    mentor = mentor_crud.get_mentor(db, payload.mentor_id)
    if mentor is None:
        raise NotFoundError("Mentor não encontrado")

    if not is_owner_or_admin(current_user, mentor.user_id):
        raise AuthorizationError("Você não tem permissão para criar sessões para este mentor")

    _ensure_min_notice(payload.scheduled_at)

    if payload.mentee_id and mentee_crud.get_mentee(db, payload.mentee_id) is None:
        raise NotFoundError("Mentorado não encontrado")

    session = session_crud.create_session(
        db,
        mentor_id=mentor.id,
        mentee_id=payload.mentee_id,
        title=payload.title,
        description=payload.description,
        topic=payload.topic,
        scheduled_at=payload.scheduled_at,
        duration=payload.duration,
        max_participants=payload.max_participants,
        meeting_link=payload.meeting_link,
        requirements=payload.requirements,
        objectives=payload.objectives,
    )
    db.commit()
    db.refresh(session)

    logger.info("Session %s created for mentor %s", session.id, mentor.id)
    return success_response(_to_detail(db, session, current_user), message="Sessão criada com sucesso")


@router.put("/{session_id}")
def update_session(
    session_id: str,
    payload: SessionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Merge update: omitted fields keep their stored value"""
    session = _get_session_or_404(db, session_id)
    _ensure_session_owner(session, current_user, "atualizar")

    fields = payload.model_dump(exclude_unset=True)
    for key in ("title", "scheduled_at", "duration", "status"):
        if fields.get(key) is None:
            fields.pop(key, None)

    if "scheduled_at" in fields:
        _ensure_min_notice(fields["scheduled_at"])

    new_max = fields.get("max_participants")
    if new_max is not None and new_max < session.current_participants:
        raise ConflictError(
            "O número máximo de participantes não pode ser menor que o número de inscritos"
        )

    new_status = fields.get("status")
    if session.status == "completed" and new_status not in (None, "completed"):
        # A completed session has already been counted for its mentor.
        raise ConflictError("Não é possível alterar o status de uma sessão completada")

    completes = new_status == "completed" and session.status != "completed"

    session_crud.update_session(db, session, **fields)
    if completes:
        mentor_crud.increment_total_sessions(db, session.mentor_id)
    db.commit()
    db.refresh(session)

    return success_response(_to_detail(db, session, current_user), message="Sessão atualizada com sucesso")


@router.delete("/{session_id}")
def delete_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    session = _get_session_or_404(db, session_id)
    _ensure_session_owner(session, current_user, "deletar")

    if session.status in UNDELETABLE_STATUSES:
        raise ConflictError("Não é possível deletar uma sessão que já foi iniciada ou completada")

    session_crud.delete_session(db, session)
    db.commit()

    logger.info("Session %s deleted by %s", session_id, current_user.id)
    return success_response({"sessionId": session_id}, message="Sessão deletada com sucesso")


# ======================
# ENROLLMENT
# ======================
@router.post("/{session_id}/join")
def join_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    state = enrollment_service.join_session(db, session_id, current_user)
    return success_response(
        EnrollmentResponse(**state),
        message="Inscrição realizada com sucesso",
    )


@router.post("/{session_id}/leave")
def leave_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    state = enrollment_service.leave_session(db, session_id, current_user)
    return success_response(
        EnrollmentResponse(**state),
        message="Inscrição cancelada com sucesso",
    )
