# mentorhub/services/account_service.py
"""
Account Service Layer
Registration, login and account removal
"""

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mentorhub import models, schemas
from mentorhub.crud import mentor as mentor_crud
from mentorhub.crud import session as session_crud
from mentorhub.crud import user as user_crud
from mentorhub.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from mentorhub.models.user import USER_TYPES
from mentorhub.utils.security import (
    authenticate_user,
    create_user_token,
    get_password_hash,
)

logger = logging.getLogger(__name__)


def build_avatar(name: str) -> str:
    """Initials of the first two words, upper-cased ("ana maria souza" -> "AM")."""
    initials = "".join(word[0] for word in name.split() if word)
    return initials[:2].upper()


# ======================
# REGISTRATION / LOGIN
# ======================

def register_user(db: Session, payload: schemas.RegisterRequest) -> Tuple[models.User, str]:
    """
    Create a user and, for mentors, the linked mentor profile.

    Both rows are committed in a single transaction.

    Args:
        db: Database session
        payload: Registration request

    Returns:
        Tuple of (created user, signed access token)

    Raises:
        ValidationError: Missing fields or unknown user type
        ConflictError: Email already registered
    """
    name = (payload.name or "").strip()
    if not name or not payload.email or not payload.password or not payload.user_type:
        raise ValidationError("Campos obrigatórios faltando")

    if payload.user_type not in USER_TYPES:
        raise ValidationError("Tipo de usuário inválido")

    email = str(payload.email)
    if user_crud.get_user_by_email(db, email):
        raise ConflictError("Email já cadastrado")

    avatar = build_avatar(name)
    is_mentor = payload.user_type == "mentor"

    try:
        user = user_crud.create_user(
            db,
            name=name,
            email=email,
            password_hash=get_password_hash(payload.password),
            role="mentor" if is_mentor else "user",
            user_type=payload.user_type,
            avatar=avatar,
        )
        if is_mentor:
            mentor_crud.create_mentor(
                db,
                user_id=user.id,
                name=name,
                email=email,
                avatar=avatar,
            )
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email.
        db.rollback()
        raise ConflictError("Email já cadastrado")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for %s", email)
        raise InternalError("Erro ao registrar usuário")

    db.refresh(user)
    logger.info("Registered user %s (type=%s)", user.id, user.user_type)
    return user, create_user_token(user)


def login_user(db: Session, email: str, password: str) -> Tuple[models.User, str]:
    if not email or not password:
        raise ValidationError("Email e senha são obrigatórios")

    user = authenticate_user(db, email, password)
    if user is None:
        # Same message for unknown email and wrong password.
        raise AuthenticationError("Credenciais inválidas")

    return user, create_user_token(user)


# ======================
# PROFILE
# ======================

def update_profile(db: Session, user: models.User, payload: schemas.ProfileUpdate) -> models.User:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)

    new_email = fields.get("email")
    if new_email is not None:
        new_email = str(new_email)
        fields["email"] = new_email
        if new_email != user.email and user_crud.get_user_by_email(db, new_email):
            raise ConflictError("Email já está em uso")

    try:
        user_crud.update_user(db, user, **fields)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email já está em uso")

    db.refresh(user)
    return user


def delete_account(db: Session, user_id: str) -> None:
    """
    Remove a user; profiles, goals, enrollments and reviews cascade.

    Mentors with sessions still scheduled, upcoming or live are refused.
    """
    user = user_crud.get_user(db, user_id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")

    if user.user_type == "mentor":
        mentor = mentor_crud.get_mentor_by_user(db, user.id)
        if mentor and mentor_crud.count_active_sessions(db, mentor.id) > 0:
            raise ConflictError(
                "Não é possível deletar a conta com sessões futuras agendadas. "
                "Cancele ou conclua as sessões primeiro."
            )

    # Enrollment rows go with the cascade; their seats must go in the same transaction.
    freed = session_crud.release_seats_for_user(db, user.id)
    user_crud.delete_user(db, user)
    db.commit()
    logger.info("Deleted account %s (released %d seats)", user_id, freed)
