from typing import Optional

from sqlalchemy.orm import Session

from mentorhub import models


def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    # Exact, case-sensitive match.
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(
    db: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    role: str,
    user_type: str,
    avatar: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> models.User:
    db_user = models.User(
        name=name,
        email=email,
        password_hash=password_hash,
        role=role,
        user_type=user_type,
        avatar=avatar,
        profile_image_url=profile_image_url,
    )
    db.add(db_user)
    db.flush()
    return db_user


def update_user(db: Session, user: models.User, **fields) -> models.User:
    for key, value in fields.items():
        setattr(user, key, value)
    db.flush()
    return user


def delete_user(db: Session, user: models.User) -> None:
    db.delete(user)
    db.flush()
