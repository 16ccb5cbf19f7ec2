# mentorhub/services/document_service.py
"""
Document Service Layer
Keeps Session.has_documents in step with the documents attached to it
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentorhub import models, schemas
from mentorhub.crud import document as document_crud
from mentorhub.crud import mentor as mentor_crud
from mentorhub.crud import session as session_crud
from mentorhub.exceptions import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from mentorhub.utils.security import is_owner_or_admin

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("session_id", "mentor_id", "title", "file_url", "file_name", "file_type")


def create_document(
    db: Session,
    payload: schemas.DocumentCreate,
    current_user: models.User,
) -> models.Document:
    """
    Attach a document to a session and flag the session as having documents.

    The insert and the flag update commit together.

    Raises:
        ValidationError: A required field is missing or the session belongs to another mentor
        NotFoundError: Mentor or session does not exist
        AuthorizationError: Caller neither owns the mentor profile nor is admin
    """
    if any(not getattr(payload, field) for field in REQUIRED_FIELDS):
        raise ValidationError("Campos obrigatórios faltando")

    mentor = mentor_crud.get_mentor(db, payload.mentor_id)
    if mentor is None:
        raise NotFoundError("Mentor não encontrado")
    if not is_owner_or_admin(current_user, mentor.user_id):
        raise AuthorizationError("Sem permissão")

    session = session_crud.get_session(db, payload.session_id)
    if session is None:
        raise NotFoundError("Sessão não encontrada")
    if session.mentor_id != mentor.id:
        raise ValidationError("A sessão não pertence a este mentor")

    try:
        document = document_crud.create_document(
            db,
            session_id=session.id,
            mentor_id=mentor.id,
            title=payload.title,
            description=payload.description,
            file_url=payload.file_url,
            file_name=payload.file_name,
            file_type=payload.file_type,
            file_size=payload.file_size,
            tags=payload.tags,
            is_public=payload.is_public,
            language=payload.language,
            thumbnail_url=payload.thumbnail_url,
        )
        session_crud.set_has_documents(db, session.id, True)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Document creation failed (session_id=%s)", payload.session_id)
        raise InternalError("Erro ao criar documento")

    db.refresh(document)
    logger.info("Document %s attached to session %s", document.id, session.id)
    return document


def delete_document(db: Session, document: models.Document) -> None:
    """Delete a document; the session loses its flag with its last document."""
    session_id = document.session_id
    document_id = document.id
    try:
        document_crud.delete_document(db, document)
        if document_crud.count_for_session(db, session_id) == 0:
            session_crud.set_has_documents(db, session_id, False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Document deletion failed (document_id=%s)", document_id)
        raise InternalError("Erro ao deletar documento")
