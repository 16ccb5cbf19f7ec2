# mentorhub/api/mentor.py
"""
Mentor Profile API Router

Endpoints:
- GET /api/mentors - Search mentors (search, specialty, minRating, limit, offset)
- GET /api/mentors/specialties - Distinct specialties, sorted
- GET /api/mentors/{mentor_id} - Mentor profile
- POST /api/mentors - Create a mentor profile
- PUT /api/mentors/{mentor_id} - Update a profile (owner or admin)
- DELETE /api/mentors/{mentor_id} - Delete a profile (owner or admin)
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mentorhub.crud import mentor as mentor_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from mentorhub.models.user import User
from mentorhub.schemas import MentorCreate, MentorResponse, MentorUpdate
from mentorhub.utils.pagination import clamp_pagination
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user, is_owner_or_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mentors", tags=["mentors"])


def _get_mentor_or_404(db: Session, mentor_id: str):
    mentor = mentor_crud.get_mentor(db, mentor_id)
    if mentor is None:
        raise NotFoundError("Mentor não encontrado")
    return mentor


# ======================
# LISTING
# ======================
@router.get("")
def list_mentors(
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    min_rating: Annotated[Optional[float], Query(alias="minRating")] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    db: Session = Depends(get_db),
):
    limit, offset = clamp_pagination(limit, offset)
    mentors = mentor_crud.list_mentors(
        db,
        search=search,
        specialty=specialty,
        min_rating=min_rating,
        limit=limit,
        offset=offset,
    )
    data = [MentorResponse.model_validate(m) for m in mentors]
    return success_response(data, count=len(data))


@router.get("/specialties")
def list_specialties(db: Session = Depends(get_db)):
    return success_response(mentor_crud.list_specialties(db))


@router.get("/{mentor_id}")
def get_mentor(mentor_id: str, db: Session = Depends(get_db)):
    mentor = _get_mentor_or_404(db, mentor_id)
    return success_response(MentorResponse.model_validate(mentor))


# ======================
# CREATE / UPDATE / DELETE
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def create_mentor(
    payload: MentorCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a mentor profile.

    Regular users always create their own profile; admins may link any user
    or leave the profile unlinked.
    """
    if current_user.is_admin:
        user_id = payload.user_id
    else:
        if payload.user_id and payload.user_id != current_user.id:
            raise AuthorizationError("Sem permissão")
        user_id = current_user.id

    if user_id and mentor_crud.get_mentor_by_user(db, user_id):
        raise ConflictError("Usuário já possui um perfil de mentor")

    name = payload.name or (current_user.name if user_id == current_user.id else None)
    email = payload.email or (current_user.email if user_id == current_user.id else None)
    if not name or not email:
        raise ValidationError("Campos obrigatórios faltando")

    mentor = mentor_crud.create_mentor(
        db,
        user_id=user_id,
        name=name,
        email=str(email),
        avatar=payload.avatar or (current_user.avatar if user_id == current_user.id else None),
        profile_image_url=payload.profile_image_url,
        bio=payload.bio,
        experience=payload.experience,
        hourly_rate=payload.hourly_rate,
        specialties=payload.specialties,
        languages=payload.languages,
        certifications=payload.certifications,
        availability=payload.availability,
    )
    db.commit()
    db.refresh(mentor)

    logger.info("Mentor profile %s created by %s", mentor.id, current_user.id)
    return success_response(MentorResponse.model_validate(mentor), message="Mentor criado com sucesso")


@router.put("/{mentor_id}")
def update_mentor(
    mentor_id: str,
    payload: MentorUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Omitted fields keep their stored value; supplied lists replace the stored ones."""
    mentor = _get_mentor_or_404(db, mentor_id)
    if not is_owner_or_admin(current_user, mentor.user_id):
        raise AuthorizationError("Sem permissão")

    mentor_crud.update_mentor(
        db,
        mentor,
        bio=payload.bio if payload.bio else mentor.bio,
        experience=payload.experience if payload.experience is not None else mentor.experience,
        hourly_rate=payload.hourly_rate if payload.hourly_rate is not None else mentor.hourly_rate,
        avatar=payload.avatar if payload.avatar is not None else mentor.avatar,
        profile_image_url=(
            payload.profile_image_url
            if payload.profile_image_url is not None
            else mentor.profile_image_url
        ),
        languages=payload.languages if payload.languages is not None else list(mentor.languages),
        certifications=(
            payload.certifications
            if payload.certifications is not None
            else list(mentor.certifications)
        ),
        specialties=payload.specialties,
        availability=payload.availability,
    )
    db.commit()
    db.refresh(mentor)

    return success_response(MentorResponse.model_validate(mentor), message="Mentor atualizado")


@router.delete("/{mentor_id}")
def delete_mentor(
    mentor_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    mentor = _get_mentor_or_404(db, mentor_id)
    if not is_owner_or_admin(current_user, mentor.user_id):
        raise AuthorizationError("Sem permissão")

    if mentor_crud.count_active_sessions(db, mentor.id) > 0:
        raise ConflictError(
            "Não é possível deletar um mentor com sessões agendadas ou ao vivo"
        )

    mentor_crud.delete_mentor(db, mentor)
    db.commit()

    logger.info("Mentor profile %s deleted by %s", mentor_id, current_user.id)
    return success_response({"mentorId": mentor_id}, message="Mentor deletado com sucesso")
