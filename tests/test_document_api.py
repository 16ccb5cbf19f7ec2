# tests/test_document_api.py
"""
Session document tests
hasDocuments flag, ownership checks, counters and listing filters
"""

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")

from fastapi import HTTPException  # noqa: E402

from mentorhub.api import document as document_api  # noqa: E402
from mentorhub.api import session as session_api  # noqa: E402
from mentorhub.crud import session as session_crud  # noqa: E402
from mentorhub.models.document import Document, DocumentTag  # noqa: E402
from mentorhub.models.session import Session as SessionModel  # noqa: E402
from mentorhub.schemas import DocumentCreate, DocumentUpdate, SessionUpdate  # noqa: E402


@pytest.fixture
def hosted_session(db_session, make_mentor):
    """A mentor (user, profile) with one scheduled session"""
    user, mentor = make_mentor()
    session = SessionModel(
        mentor_id=mentor.id,
        title="Revisão de código",
        scheduled_at=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=3),
        duration=90,
        max_participants=10,
    )
    db_session.add(session)
    db_session.commit()
    return user, mentor, session


def _upload(db_session, user, mentor, session, **overrides):
    payload = {
        "sessionId": session.id,
        "mentorId": mentor.id,
        "title": "Slides da aula",
        "fileUrl": "https://files.test/slides.pdf",
        "fileName": "slides.pdf",
        "fileType": "pdf",
    }
    payload.update(overrides)
    return document_api.create_document(payload=DocumentCreate(**payload), current_user=user, db=db_session)


def _list(db_session, **filters):
    params = {"session_id": None, "mentor_id": None, "file_type": None, "search": None, "limit": None, "offset": None}
    params.update(filters)
    return document_api.list_documents(db=db_session, **params)["data"]


# ======================
# CREATE
# ======================

def test_create_flags_session(db_session, hosted_session):
    user, mentor, session = hosted_session
    session_id = session.id
    assert session.has_documents is False

    body = _upload(db_session, user, mentor, session, tags=["python", "review"], fileSize=2048)

    data = body["data"]
    assert body["message"] == "Documento criado com sucesso"
    assert data["sessionId"] == session_id
    assert data["tags"] == ["python", "review"]
    assert data["viewCount"] == 0 and data["downloadCount"] == 0
    assert data["isPublic"] is True
    assert session_crud.get_session(db_session, session_id).has_documents is True

    detail = session_api.get_session(session_id=session_id, current_user=None, db=db_session)
    assert detail["data"]["documents"] == [data["id"]]


def test_session_update_cannot_set_flag(db_session, hosted_session):
    user, _, session = hosted_session
    session_id = session.id

    assert "has_documents" not in SessionUpdate.model_fields
    session_api.update_session(
        session_id=session_id,
        payload=SessionUpdate.model_validate({"hasDocuments": True, "topic": "Testes"}),
        current_user=user,
        db=db_session,
    )
    assert session_crud.get_session(db_session, session_id).has_documents is False


@pytest.mark.parametrize("missing", ["sessionId", "mentorId", "title", "fileUrl", "fileName", "fileType"])
def test_create_requires_fields(db_session, hosted_session, missing):
    user, mentor, session = hosted_session
    with pytest.raises(HTTPException) as exc:
        _upload(db_session, user, mentor, session, **{missing: None})
    assert exc.value.status_code == 400
    assert exc.value.detail == "Campos obrigatórios faltando"
    assert db_session.query(Document).count() == 0


def test_create_for_other_mentor_forbidden(db_session, hosted_session, make_mentor):
    _, mentor, session = hosted_session
    intruder, _ = make_mentor(name="Intruso")

    with pytest.raises(HTTPException) as exc:
        _upload(db_session, intruder, mentor, session)
    assert exc.value.status_code == 403


def test_create_rejects_foreign_session(db_session, hosted_session, make_mentor):
    _, _, session = hosted_session
    other_user, other_mentor = make_mentor(name="Outro Mentor")

    with pytest.raises(HTTPException) as exc:
        _upload(db_session, other_user, other_mentor, session)
    assert exc.value.status_code == 400
    assert exc.value.detail == "A sessão não pertence a este mentor"


def test_create_unknown_session(db_session, hosted_session):
    user, mentor, session = hosted_session
    with pytest.raises(HTTPException) as exc:
        _upload(db_session, user, mentor, session, sessionId="missing")
    assert exc.value.status_code == 404


# ======================
# COUNTERS
# ======================

def test_detail_counts_views_and_download_counts_downloads(db_session, hosted_session):
    user, mentor, session = hosted_session
    document_id = _upload(db_session, user, mentor, session)["data"]["id"]

    document_api.get_document(document_id=document_id, db=db_session)
    body = document_api.get_document(document_id=document_id, db=db_session)
    assert body["data"]["viewCount"] == 2

    assert document_api.count_download(document_id=document_id, current_user=user, db=db_session)["message"] == "Download contado"
    db_session.expire_all()
    document = db_session.query(Document).filter(Document.id == document_id).one()
    assert document.download_count == 1
    assert document.view_count == 2


def test_get_document_not_found(db_session):
    with pytest.raises(HTTPException) as exc:
        document_api.get_document(document_id="missing", db=db_session)
    assert exc.value.status_code == 404


# ======================
# LISTING
# ======================

def test_list_filters_and_search(db_session, hosted_session):
    user, mentor, session = hosted_session
    _upload(db_session, user, mentor, session, title="Slides da aula")
    _upload(
        db_session, user, mentor, session,
        title="Exercícios",
        description="LISTA de prática",
        fileType="zip",
        fileName="lista.zip",
    )

    assert len(_list(db_session, session_id=session.id)) == 2
    assert len(_list(db_session, mentor_id=mentor.id)) == 2
    assert [d["title"] for d in _list(db_session, file_type="zip")] == ["Exercícios"]
    assert [d["title"] for d in _list(db_session, search="slides")] == ["Slides da aula"]
    assert [d["title"] for d in _list(db_session, search="lista")] == ["Exercícios"]
    assert _list(db_session, session_id="missing") == []
    assert len(_list(db_session, limit=1)) == 1


# ======================
# UPDATE / DELETE
# ======================

def test_update_by_owner_only(db_session, hosted_session, make_user):
    user, mentor, session = hosted_session
    document_id = _upload(db_session, user, mentor, session, description="Original")["data"]["id"]

    body = document_api.update_document(
        document_id=document_id,
        payload=DocumentUpdate(title="Slides revisados", isPublic=False),
        current_user=user,
        db=db_session,
    )
    assert body["data"]["title"] == "Slides revisados"
    assert body["data"]["isPublic"] is False
    assert body["data"]["description"] == "Original"

    with pytest.raises(HTTPException) as exc:
        document_api.update_document(
            document_id=document_id,
            payload=DocumentUpdate(title="Hack"),
            current_user=make_user(name="Stranger"),
            db=db_session,
        )
    assert exc.value.status_code == 403


def test_deleting_last_document_clears_flag(db_session, hosted_session):
    user, mentor, session = hosted_session
    session_id = session.id
    first = _upload(db_session, user, mentor, session, tags=["a"])["data"]["id"]
    second = _upload(db_session, user, mentor, session)["data"]["id"]

    document_api.delete_document(document_id=first, current_user=user, db=db_session)
    assert session_crud.get_session(db_session, session_id).has_documents is True
    assert db_session.query(DocumentTag).count() == 0

    body = document_api.delete_document(document_id=second, current_user=user, db=db_session)
    assert body["data"] == {"documentId": second}
    assert session_crud.get_session(db_session, session_id).has_documents is False
