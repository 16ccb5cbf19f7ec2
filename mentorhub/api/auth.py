# mentorhub/api/auth.py
"""
Authentication API Router

Endpoints:
- POST /api/auth/register - Create an account (mentors also get a mentor profile)
- POST /api/auth/login - Exchange credentials for a token
- GET /api/auth/me - Current user
- PUT /api/auth/profile - Update name, email or profile image
- DELETE /api/auth/account - Delete the current account
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorhub.crud import user as user_crud
from mentorhub.database import get_db
from mentorhub.exceptions import NotFoundError
from mentorhub.models.user import User
from mentorhub.schemas import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from mentorhub.services import account_service
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ===== REGISTER / LOGIN =====

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and return it with a signed token"""
    user, token = account_service.register_user(db, payload)
    return success_response(
        AuthResponse(user=UserResponse.model_validate(user), token=token),
        message="Usuário registrado com sucesso",
    )


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = account_service.login_user(db, payload.email, payload.password)
    return success_response(
        AuthResponse(user=UserResponse.model_validate(user), token=token),
        message="Login realizado com sucesso",
    )


# ===== CURRENT USER =====

@router.get("/me")
def me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user = user_crud.get_user(db, current_user.id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    return success_response(UserResponse.model_validate(user))


@router.put("/profile")
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partial update; the email is re-checked for uniqueness only when it changes"""
    user = account_service.update_profile(db, current_user, payload)
    return success_response(
        UserResponse.model_validate(user),
        message="Perfil atualizado com sucesso",
    )


@router.delete("/account")
def delete_account(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_id = current_user.id
    account_service.delete_account(db, user_id)
    return success_response({"userId": user_id}, message="Conta deletada com sucesso")
