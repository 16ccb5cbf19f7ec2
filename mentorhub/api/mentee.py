# mentorhub/api/mentee.py
"""
Mentee Profile API Router

Endpoints:
- GET /api/mentees/me - Caller's mentee profile
- PUT /api/mentees/me - Create or update the caller's mentee profile
- GET /api/mentees/{mentee_id} - Mentee profile
- DELETE /api/mentees/{mentee_id} - Delete a profile (owner or admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mentorhub.crud import mentee as mentee_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, ConflictError, NotFoundError
from mentorhub.models.user import User
from mentorhub.schemas import MenteeResponse, MenteeUpdate
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user, is_owner_or_admin

router = APIRouter(prefix="/mentees", tags=["mentees"])

PROFILE_NOT_FOUND = "Perfil de mentorado não encontrado"


@router.get("/me")
def get_my_profile(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    mentee = mentee_crud.get_mentee_by_user(db, current_user.id)
    if mentee is None:
        raise NotFoundError(PROFILE_NOT_FOUND)
    return success_response(MenteeResponse.model_validate(mentee))


@router.put("/me")
def upsert_my_profile(
    payload: MenteeUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """First call creates the profile from the account's name and email."""
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)

    mentee = mentee_crud.get_mentee_by_user(db, current_user.id)
    if mentee is None:
        fields.setdefault("avatar", current_user.avatar)
        mentee = mentee_crud.create_mentee(
            db,
            user_id=current_user.id,
            name=current_user.name,
            email=current_user.email,
            **fields,
        )
        message = "Perfil criado com sucesso"
    else:
        mentee_crud.update_mentee(db, mentee, **fields)
        message = "Perfil atualizado com sucesso"

    db.commit()
    db.refresh(mentee)
    return success_response(MenteeResponse.model_validate(mentee), message=message)


@router.get("/{mentee_id}")
def get_mentee(mentee_id: str, db: Session = Depends(get_db)):
    mentee = mentee_crud.get_mentee(db, mentee_id)
    if mentee is None:
        raise NotFoundError(PROFILE_NOT_FOUND)
    return success_response(MenteeResponse.model_validate(mentee))


@router.delete("/{mentee_id}")
def delete_mentee(
    mentee_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    mentee = mentee_crud.get_mentee(db, mentee_id)
    if mentee is None:
        raise NotFoundError(PROFILE_NOT_FOUND)
    if not is_owner_or_admin(current_user, mentee.user_id):
        raise AuthorizationError("Sem permissão")

    if mentee_crud.count_active_sessions(db, mentee.id) > 0:
        raise ConflictError("Não é possível deletar um mentorado com sessões agendadas ou ao vivo")

    mentee_crud.delete_mentee(db, mentee)
    db.commit()
    return success_response({"menteeId": mentee_id}, message="Perfil deletado com sucesso")
