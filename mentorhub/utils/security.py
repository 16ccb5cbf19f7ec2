from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from mentorhub import models, schemas
from mentorhub.config import settings
from mentorhub.database import get_db
from mentorhub.exceptions import AuthenticationError, AuthorizationError


# ==========================
# AUTH CONFIG
# ==========================

# auto_error is off so missing tokens go through our own 401 envelope and
# the optional variant can fall through to anonymous access.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto"
)


# ==========================
# PASSWORD UTILS
# ==========================

def _bcrypt_safe(password: str) -> str:
    """Bcrypt max input length = 72 bytes"""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        password = password_bytes[:72].decode("utf-8", errors="ignore")
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_bcrypt_safe(password))


# ==========================
# JWT TOKEN
# ==========================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_user_token(user: models.User) -> str:
    return create_access_token(
        data={
            "sub": user.id,
            "email": user.email,
            "role": user.role,
            "userType": user.user_type,
        }
    )


def decode_access_token(token: str) -> schemas.TokenData:
    """Raises JWTError on a bad signature, malformed token or expiry."""
    payload = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM]
    )
    return schemas.TokenData(**payload)


# ==========================
# AUTH HELPERS
# ==========================

def authenticate_user(db: Session, email: str, password: str) -> Optional[models.User]:
    user = db.query(models.User).filter(
        models.User.email == email
    ).first()

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


def _user_from_token(db: Session, token: str) -> Optional[models.User]:
    token_data = decode_access_token(token)
    if token_data.sub is None:
        raise JWTError("Token has no subject")
    return db.query(models.User).filter(
        models.User.id == token_data.sub
    ).first()


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> models.User:
    if not token:
        raise AuthenticationError("Token de autenticação não fornecido")

    try:
        user = _user_from_token(db, token)
    except JWTError:
        raise AuthenticationError("Token inválido ou expirado")

    if user is None:
        raise AuthenticationError("Usuário não encontrado")

    return user


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[models.User]:
    """Same lookup as get_current_user, but anonymous callers get None."""
    if not token:
        return None
    try:
        return _user_from_token(db, token)
    except JWTError:
        return None


def require_roles(*roles: str) -> Callable[..., models.User]:
    def dependency(current_user: models.User = Depends(get_current_user)) -> models.User:
        if current_user.role not in roles:
            raise AuthorizationError("Acesso negado")
        return current_user

    return dependency


def require_mentor(current_user: models.User = Depends(get_current_user)) -> models.User:
    if current_user.user_type != "mentor" and not current_user.is_admin:
        raise AuthorizationError(
            "Acesso negado. Apenas mentores podem acessar este recurso."
        )
    return current_user


def is_owner_or_admin(current_user: models.User, owner_user_id: Optional[str]) -> bool:
    return current_user.is_admin or (
        owner_user_id is not None and owner_user_id == current_user.id
    )
