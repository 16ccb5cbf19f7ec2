# tests/test_bootstrap_admin.py
"""Admin bootstrap script tests"""

import pytest
from sqlalchemy.orm import sessionmaker

from mentorhub.models.user import User
from mentorhub.scripts.bootstrap_admin import CONFIRM_PHRASE, bootstrap_admin


@pytest.fixture
def admin_env(monkeypatch):
    monkeypatch.setenv("ENABLE_ADMIN_BOOTSTRAP", "true")
    monkeypatch.setenv("ADMIN_BOOTSTRAP_CONFIRM", CONFIRM_PHRASE)
    monkeypatch.setenv("ADMIN_NAME", "Equipe MentorHub")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@mentorhub.dev")
    monkeypatch.setenv("ADMIN_PASSWORD", "Str0ngPass")
    return monkeypatch


@pytest.fixture
def session_factory(db_session):
    return sessionmaker(bind=db_session.get_bind())


def test_creates_first_admin_once(db_session, admin_env, session_factory, capsys):
    assert bootstrap_admin(session_factory) == 0
    assert "admin@mentorhub.dev" in capsys.readouterr().out

    admin = db_session.query(User).filter(User.email == "admin@mentorhub.dev").one()
    assert admin.role == "admin"
    assert admin.avatar == "EM"
    assert admin.password_hash != "Str0ngPass"

    assert bootstrap_admin(session_factory) == 1
    assert "already exists" in capsys.readouterr().err
    assert db_session.query(User).count() == 1


def test_disabled_without_flag(db_session, admin_env, session_factory):
    admin_env.delenv("ENABLE_ADMIN_BOOTSTRAP")
    assert bootstrap_admin(session_factory) == 1
    assert db_session.query(User).count() == 0


@pytest.mark.parametrize(
    "key, value",
    [
        ("ADMIN_BOOTSTRAP_CONFIRM", "yes please"),
        ("ADMIN_EMAIL", "not-an-email"),
        ("ADMIN_PASSWORD", "short"),
        ("ADMIN_PASSWORD", "alllowercase1"),
    ],
)
def test_rejects_bad_input(db_session, admin_env, session_factory, key, value):
    admin_env.setenv(key, value)
    assert bootstrap_admin(session_factory) == 1
    assert db_session.query(User).count() == 0
