# tests/test_mentee_api.py
"""
Mentee profile tests
Upsert on /me, list replacement and guarded deletion
"""

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")

from fastapi import HTTPException  # noqa: E402

from mentorhub.api import mentee as mentee_api  # noqa: E402
from mentorhub.models.mentee import MenteeInterest  # noqa: E402
from mentorhub.models.session import Session as SessionModel  # noqa: E402
from mentorhub.schemas import MenteeUpdate  # noqa: E402


def _upsert(db_session, user, **fields):
    return mentee_api.upsert_my_profile(payload=MenteeUpdate(**fields), current_user=user, db=db_session)


def test_me_without_profile_is_404(db_session, make_user):
    with pytest.raises(HTTPException) as exc:
        mentee_api.get_my_profile(current_user=make_user(), db=db_session)
    assert exc.value.status_code == 404
    assert exc.value.detail == "Perfil de mentorado não encontrado"


def test_upsert_creates_then_updates(db_session, make_user):
    user = make_user(name="Lia Costa", email="lia@test.com")

    created = _upsert(db_session, user, interests=["Go", "SQL"], currentLevel="intermediate")
    assert created["message"] == "Perfil criado com sucesso"
    data = created["data"]
    assert data["userId"] == user.id
    assert data["name"] == "Lia Costa"
    assert data["email"] == "lia@test.com"
    assert data["currentLevel"] == "intermediate"
    assert data["interests"] == ["Go", "SQL"]
    assert data["goals"] == []

    updated = _upsert(db_session, user, interests=["Kubernetes"], bio="Quero migrar para backend")
    assert updated["message"] == "Perfil atualizado com sucesso"
    assert updated["data"]["id"] == data["id"]
    assert updated["data"]["interests"] == ["Kubernetes"]
    assert updated["data"]["currentLevel"] == "intermediate"
    assert db_session.query(MenteeInterest).count() == 1

    me = mentee_api.get_my_profile(current_user=user, db=db_session)
    assert me["data"]["bio"] == "Quero migrar para backend"


def test_new_profile_defaults_to_beginner(db_session, make_user):
    data = _upsert(db_session, make_user())["data"]
    assert data["currentLevel"] == "beginner"


def test_delete_requires_owner_or_admin(db_session, make_user):
    owner = make_user(name="Owner")
    mentee_id = _upsert(db_session, owner)["data"]["id"]

    with pytest.raises(HTTPException) as exc:
        mentee_api.delete_mentee(mentee_id=mentee_id, current_user=make_user(name="Stranger"), db=db_session)
    assert exc.value.status_code == 403

    admin = make_user(name="Admin", role="admin")
    body = mentee_api.delete_mentee(mentee_id=mentee_id, current_user=admin, db=db_session)
    assert body["data"] == {"menteeId": mentee_id}

    with pytest.raises(HTTPException) as exc:
        mentee_api.get_mentee(mentee_id=mentee_id, db=db_session)
    assert exc.value.status_code == 404


def test_delete_blocked_by_active_session(db_session, make_user, make_mentor):
    owner = make_user(name="Owner")
    mentee_id = _upsert(db_session, owner)["data"]["id"]
    _, mentor = make_mentor()
    db_session.add(SessionModel(
        mentor_id=mentor.id,
        mentee_id=mentee_id,
        title="Mentoria individual",
        scheduled_at=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=1),
        duration=45,
        status="scheduled",
    ))
    db_session.commit()

    with pytest.raises(HTTPException) as exc:
        mentee_api.delete_mentee(mentee_id=mentee_id, current_user=owner, db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Não é possível deletar um mentorado com sessões agendadas ou ao vivo"
