# tests/test_review_api.py
"""
Review tests
Submission rules, duplicates, listing with average rating and deletion
"""

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")

from fastapi import HTTPException  # noqa: E402
from pydantic import ValidationError  # noqa: E402
from sqlalchemy.exc import IntegrityError  # noqa: E402

from mentorhub.api import review as review_api  # noqa: E402
from mentorhub.crud import review as review_crud  # noqa: E402
from mentorhub.models.review import Review  # noqa: E402
from mentorhub.models.session import Session as SessionModel  # noqa: E402
from mentorhub.schemas import ReviewCreate  # noqa: E402


# ======================
# FIXTURES
# ======================

@pytest.fixture
def setup_session(db_session, make_mentor, make_user):
    """Completed session with a mentor and a learner"""
    mentor_user, mentor = make_mentor(name="Test Mentor")
    learner = make_user(name="Test Learner")
    session = SessionModel(
        mentor_id=mentor.id,
        title="Sessão concluída",
        scheduled_at=datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(days=1),
        duration=60,
        status="completed",
    )
    db_session.add(session)
    db_session.commit()
    return {"mentor": mentor_user, "learner": learner, "session": session}


def _submit(db_session, reviewer, **fields):
    return review_api.submit_review(review=ReviewCreate(**fields), current_user=reviewer, db=db_session)


def _list(db_session, **filters):
    params = {"session_id": None, "reviewee_id": None, "reviewer_id": None, "limit": None, "offset": None}
    params.update(filters)
    return review_api.list_reviews(db=db_session, **params)


# ======================
# SUBMIT
# ======================

def test_submit_review(db_session, setup_session):
    learner, mentor = setup_session["learner"], setup_session["mentor"]
    body = _submit(
        db_session,
        learner,
        sessionId=setup_session["session"].id,
        revieweeId=mentor.id,
        rating=5,
        comment="  Excelente explicação  ",
        communication=4,
    )

    data = body["data"]
    assert data["reviewerId"] == learner.id
    assert data["revieweeId"] == mentor.id
    assert data["rating"] == 5
    assert data["comment"] == "Excelente explicação"
    assert data["communication"] == 4
    assert data["expertise"] is None


def test_cannot_review_self(db_session, setup_session):
    learner = setup_session["learner"]
    with pytest.raises(HTTPException) as exc:
        _submit(db_session, learner, sessionId=setup_session["session"].id, revieweeId=learner.id, rating=3)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Você não pode avaliar a si mesmo"


def test_duplicate_review_rejected(db_session, setup_session):
    learner, mentor = setup_session["learner"], setup_session["mentor"]
    fields = {"sessionId": setup_session["session"].id, "revieweeId": mentor.id, "rating": 4}
    _submit(db_session, learner, **fields)

    with pytest.raises(HTTPException) as exc:
        _submit(db_session, learner, **fields)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Você já avaliou este usuário nesta sessão"
    assert db_session.query(Review).count() == 1

    # The other direction is a different review
    _submit(db_session, mentor, sessionId=setup_session["session"].id, revieweeId=learner.id, rating=5)
    assert db_session.query(Review).count() == 2


def test_unknown_session_or_reviewee(db_session, setup_session):
    learner = setup_session["learner"]
    with pytest.raises(HTTPException) as exc:
        _submit(db_session, learner, sessionId="missing", revieweeId=setup_session["mentor"].id, rating=4)
    assert exc.value.detail == "Sessão não encontrada"

    with pytest.raises(HTTPException) as exc:
        _submit(db_session, learner, sessionId=setup_session["session"].id, revieweeId="ghost", rating=4)
    assert exc.value.status_code == 404


def test_rating_bounds():
    for rating in (0, 6):
        with pytest.raises(ValidationError):
            ReviewCreate(sessionId="s", revieweeId="u", rating=rating)
    with pytest.raises(ValidationError):
        ReviewCreate(sessionId="s", revieweeId="u", rating=3, comment="   ")


def test_out_of_range_rating_rejected_by_table(db_session, setup_session):
    with pytest.raises(IntegrityError):
        review_crud.create_review(
            db_session,
            session_id=setup_session["session"].id,
            reviewer_id=setup_session["learner"].id,
            reviewee_id=setup_session["mentor"].id,
            rating=9,
        )
    db_session.rollback()
    assert db_session.query(Review).count() == 0


# ======================
# LIST / GET
# ======================

def test_list_with_average_rating(db_session, setup_session, make_user):
    mentor = setup_session["mentor"]
    session_id = setup_session["session"].id
    _submit(db_session, setup_session["learner"], sessionId=session_id, revieweeId=mentor.id, rating=5)
    _submit(db_session, make_user(name="Outro"), sessionId=session_id, revieweeId=mentor.id, rating=4)

    body = _list(db_session, reviewee_id=mentor.id)
    assert body["count"] == 2
    assert body["averageRating"] == 4.5

    body = _list(db_session, session_id=session_id)
    assert body["count"] == 2
    assert "averageRating" not in body

    assert _list(db_session, reviewer_id=mentor.id)["count"] == 0
    assert review_crud.average_rating_for_user(db_session, setup_session["learner"].id) is None


def test_get_review_not_found(db_session):
    with pytest.raises(HTTPException) as exc:
        review_api.get_review(review_id="missing", db=db_session)
    assert exc.value.detail == "Avaliação não encontrada"


# ======================
# DELETE
# ======================

def test_delete_by_author_or_admin(db_session, setup_session, make_user):
    learner, mentor = setup_session["learner"], setup_session["mentor"]
    session_id = setup_session["session"].id
    first = _submit(db_session, learner, sessionId=session_id, revieweeId=mentor.id, rating=2)["data"]["id"]

    with pytest.raises(HTTPException) as exc:
        review_api.delete_review(review_id=first, current_user=mentor, db=db_session)
    assert exc.value.status_code == 403

    body = review_api.delete_review(review_id=first, current_user=learner, db=db_session)
    assert body["data"] == {"reviewId": first}

    second = _submit(db_session, learner, sessionId=session_id, revieweeId=mentor.id, rating=3)["data"]["id"]
    admin = make_user(name="Admin", role="admin")
    review_api.delete_review(review_id=second, current_user=admin, db=db_session)
    assert db_session.query(Review).count() == 0
