"""Pytest bootstrap for project imports."""

import os
from pathlib import Path
import sys

# Settings are read at import time; SECRET_KEY has no default.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")

# Ensure project root is on sys.path so `import mentorhub` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from mentorhub import models  # noqa: E402,F401
from mentorhub.database import Base  # noqa: E402
from mentorhub.models.mentor import Mentor  # noqa: E402
from mentorhub.models.user import User  # noqa: E402


# ======================
# TEST DATABASE SETUP
# ======================

@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def make_user(db_session):
    """Insert a user without going through bcrypt"""
    def _make_user(name="Test User", email=None, user_type="aprendiz", role="user"):
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@test.com",
            password_hash="hash",
            role=role,
            user_type=user_type,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_mentor(db_session, make_user):
    """Insert a mentor-type user with its linked mentor profile"""
    def _make_mentor(name="Test Mentor", email=None, **fields):
        user = make_user(name=name, email=email, user_type="mentor", role="mentor")
        mentor = Mentor(user_id=user.id, name=user.name, email=user.email, **fields)
        db_session.add(mentor)
        db_session.commit()
        return user, mentor

    return _make_mentor
