# tests/test_session_enrollment.py
"""
Enrollment tests
Capacity, duplicate joins, leaving, counters and per-viewer isEnrolled
"""

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")

from fastapi import HTTPException  # noqa: E402

from mentorhub.api import session as session_api  # noqa: E402
from mentorhub.crud import session as session_crud  # noqa: E402
from mentorhub.models.session import Session as SessionModel, SessionParticipant  # noqa: E402
from mentorhub.schemas import MentorCreate, SessionCreate  # noqa: E402
from mentorhub.api import mentor as mentor_api  # noqa: E402


def _open_session(db_session, mentor, max_participants=3, status="scheduled"):
    session = SessionModel(
        mentor_id=mentor.id,
        title="Sessão aberta",
        scheduled_at=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=2),
        duration=60,
        max_participants=max_participants,
        status=status,
    )
    db_session.add(session)
    db_session.commit()
    return session


def _join(db_session, session_id, user):
    return session_api.join_session(session_id=session_id, current_user=user, db=db_session)


def _leave(db_session, session_id, user):
    return session_api.leave_session(session_id=session_id, current_user=user, db=db_session)


# ======================
# CAPACITY
# ======================

@pytest.mark.parametrize("capacity", [1, 3])
def test_capacity_n_then_full(db_session, make_mentor, make_user, capacity):
    _, mentor = make_mentor()
    session = _open_session(db_session, mentor, max_participants=capacity)
    session_id = session.id
    users = [make_user(name=f"Aluno {i}") for i in range(capacity + 1)]

    for user in users[:capacity]:
        body = _join(db_session, session_id, user)
        assert body["data"]["isEnrolled"] is True

    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, users[-1])
    assert exc.value.status_code == 400
    assert exc.value.detail == "Sessão cheia. Não há vagas disponíveis."

    _leave(db_session, session_id, users[0])
    body = _join(db_session, session_id, users[-1])
    assert body["data"]["currentParticipants"] == capacity
    assert session_crud.count_participants(db_session, session_id) == capacity


def test_duplicate_join_rejected(db_session, make_mentor, make_user):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor).id
    user = make_user(name="Aluno")

    _join(db_session, session_id, user)
    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, user)
    assert exc.value.detail == "Você já está inscrito nesta sessão"

    assert session_crud.count_participants(db_session, session_id) == 1
    assert session_crud.get_session(db_session, session_id).current_participants == 1


def test_participant_insert_conflict_rolls_back_seat(db_session, make_mentor, make_user, monkeypatch):
    """A duplicate that slips past the pre-check must not leave the counter bumped."""
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor).id
    user = make_user(name="Aluno")
    db_session.add(SessionParticipant(session_id=session_id, user_id=user.id))
    db_session.commit()

    monkeypatch.setattr(session_crud, "is_user_enrolled", lambda *args, **kwargs: False)
    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, user)

    assert exc.value.detail == "Você já está inscrito nesta sessão"
    assert session_crud.get_session(db_session, session_id).current_participants == 0


def test_claim_seat_never_exceeds_capacity(db_session, make_mentor):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor, max_participants=2).id

    results = [session_crud.claim_seat(db_session, session_id) for _ in range(4)]
    db_session.commit()

    assert results == [True, True, False, False]
    db_session.expire_all()
    assert session_crud.get_session(db_session, session_id).current_participants == 2


# ======================
# PRECONDITIONS
# ======================

def test_join_requires_open_enrollment(db_session, make_mentor, make_user):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor, max_participants=None).id

    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, make_user(name="Aluno"))
    assert exc.value.detail == "Esta sessão não aceita inscrições"


@pytest.mark.parametrize("status", ["in-progress", "live", "completed", "cancelled"])
def test_join_requires_enrollable_status(db_session, make_mentor, make_user, status):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor, status=status).id

    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, make_user(name="Aluno"))
    assert exc.value.status_code == 400


def test_upcoming_sessions_accept_enrollment(db_session, make_mentor, make_user):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor, status="upcoming").id
    assert _join(db_session, session_id, make_user(name="Aluno"))["success"] is True


def test_mentor_cannot_join_own_session(db_session, make_mentor):
    user, mentor = make_mentor()
    session_id = _open_session(db_session, mentor).id

    with pytest.raises(HTTPException) as exc:
        _join(db_session, session_id, user)
    assert exc.value.detail == "O mentor não pode se inscrever em sua própria sessão"


def test_join_unknown_session(db_session, make_user):
    with pytest.raises(HTTPException) as exc:
        _join(db_session, "missing", make_user(name="Aluno"))
    assert exc.value.status_code == 404


# ======================
# LEAVE
# ======================

def test_leave_when_not_enrolled_keeps_counter(db_session, make_mentor, make_user):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor).id

    with pytest.raises(HTTPException) as exc:
        _leave(db_session, session_id, make_user(name="Aluno"))
    assert exc.value.detail == "Você não está inscrito nesta sessão"
    assert session_crud.get_session(db_session, session_id).current_participants == 0


def test_release_seat_floors_at_zero(db_session, make_mentor):
    _, mentor = make_mentor()
    session_id = _open_session(db_session, mentor).id

    session_crud.release_seat(db_session, session_id)
    db_session.commit()
    db_session.expire_all()

    assert session_crud.get_session(db_session, session_id).current_participants == 0


def test_crud_package_exposes_resource_modules():
    import mentorhub.crud as crud

    assert crud.session is session_crud
    for name in crud.__all__:
        assert hasattr(getattr(crud, name), "__file__")


# ======================
# VIEWER ENRICHMENT
# ======================

def test_enrolled_listing_and_flags(db_session, make_mentor, make_user):
    _, mentor = make_mentor()
    joined = _open_session(db_session, mentor).id
    other = _open_session(db_session, mentor).id
    viewer = make_user(name="Aluno")
    _join(db_session, joined, viewer)

    listing = session_api.list_sessions(
        status=None, mentor_id=None, mentee_id=None, limit=None, offset=None,
        current_user=viewer, db=db_session,
    )
    flags = {s["id"]: s["isEnrolled"] for s in listing["data"]}
    assert flags == {joined: True, other: False}

    anonymous = session_api.list_sessions(
        status=None, mentor_id=None, mentee_id=None, limit=None, offset=None,
        current_user=None, db=db_session,
    )
    assert all(s["isEnrolled"] is False for s in anonymous["data"])

    mine = session_api.my_enrolled_sessions(limit=None, offset=None, current_user=viewer, db=db_session)
    assert [s["id"] for s in mine["data"]] == [joined]

    detail = session_api.get_session(session_id=joined, current_user=viewer, db=db_session)
    assert detail["data"]["isEnrolled"] is True



# ======================
# END-TO-END SCENARIO
# ======================

def test_single_seat_scenario(db_session, make_user):
    owner = make_user(name="Mentor M", user_type="mentor", role="mentor")
    mentor_id = mentor_api.create_mentor(
        payload=MentorCreate(experience=5, specialties=["Go"]),
        current_user=owner,
        db=db_session,
    )["data"]["id"]

    s1 = session_api.create_session(
        payload=SessionCreate(
            mentorId=mentor_id,
            title="Go concorrente",
            scheduledAt=datetime.now(timezone.utc) + timedelta(days=1),
            duration=60,
            maxParticipants=1,
        ),
        current_user=owner,
        db=db_session,
    )["data"]["id"]

    a = make_user(name="Aluno A")
    b = make_user(name="Aluno B")

    body = _join(db_session, s1, a)
    assert body["data"]["currentParticipants"] == 1
    assert session_crud.is_user_enrolled(db_session, s1, a.id) is True

    with pytest.raises(HTTPException) as exc:
        _join(db_session, s1, b)
    assert "Sessão cheia" in exc.value.detail

    body = _leave(db_session, s1, a)
    assert body["data"]["currentParticipants"] == 0

    body = _join(db_session, s1, b)
    assert body["success"] is True
    assert body["data"]["currentParticipants"] == 1
