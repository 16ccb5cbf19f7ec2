# mentorhub/api/document.py
"""
Session Documents API Router

Endpoints:
- GET /api/documents - List documents (sessionId, mentorId, fileType, search)
- GET /api/documents/{document_id} - Document detail (counts a view)
- POST /api/documents - Attach a document to a session (mentors and admins)
- PUT /api/documents/{document_id} - Update title, description or visibility
- DELETE /api/documents/{document_id} - Delete a document
- POST /api/documents/{document_id}/download - Count a download
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mentorhub.crud import document as document_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, NotFoundError
from mentorhub.models.document import Document
from mentorhub.models.user import User
from mentorhub.schemas import DocumentCreate, DocumentResponse, DocumentUpdate
from mentorhub.services import document_service
from mentorhub.utils.pagination import clamp_pagination
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user, is_owner_or_admin, require_mentor

router = APIRouter(prefix="/documents", tags=["documents"])


def _get_document_or_404(db: Session, document_id: str) -> Document:
    document = document_crud.get_document(db, document_id)
    if document is None:
        raise NotFoundError("Documento não encontrado")
    return document


def _ensure_document_owner(document: Document, current_user: User) -> None:
    owner_user_id = document.mentor.user_id if document.mentor else None
    if not is_owner_or_admin(current_user, owner_user_id):
        raise AuthorizationError("Sem permissão")


# ======================
# READ
# ======================
@router.get("")
def list_documents(
    session_id: Annotated[Optional[str], Query(alias="sessionId")] = None,
    mentor_id: Annotated[Optional[str], Query(alias="mentorId")] = None,
    file_type: Annotated[Optional[str], Query(alias="fileType")] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    db: Session = Depends(get_db),
):
    limit, offset = clamp_pagination(limit, offset)
    documents = document_crud.list_documents(
        db,
        session_id=session_id,
        mentor_id=mentor_id,
        file_type=file_type,
        search=search,
        limit=limit,
        offset=offset,
    )
    data = [DocumentResponse.model_validate(d) for d in documents]
    return success_response(data, count=len(data))


@router.get("/{document_id}")
def get_document(document_id: str, db: Session = Depends(get_db)):
    """Fetching a document counts as a view"""
    document = _get_document_or_404(db, document_id)
    document_crud.increment_view_count(db, document.id)
    db.commit()
    db.refresh(document)
    return success_response(DocumentResponse.model_validate(document))


# ======================
# WRITE
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def create_document(
    payload: DocumentCreate,
    current_user: User = Depends(require_mentor),
    db: Session = Depends(get_db),
):
    document = document_service.create_document(db, payload, current_user)
    return success_response(
        DocumentResponse.model_validate(document),
        message="Documento criado com sucesso",
    )


@router.put("/{document_id}")
def update_document(
    document_id: str,
    payload: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    document = _get_document_or_404(db, document_id)
    _ensure_document_owner(document, current_user)

    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    document_crud.update_document(db, document, **fields)
    db.commit()
    db.refresh(document)

    return success_response(
        DocumentResponse.model_validate(document),
        message="Documento atualizado com sucesso",
    )


@router.delete("/{document_id}")
def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    document = _get_document_or_404(db, document_id)
    _ensure_document_owner(document, current_user)

    document_service.delete_document(db, document)
    return success_response({"documentId": document_id}, message="Documento deletado com sucesso")


@router.post("/{document_id}/download")
def count_download(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    document = _get_document_or_404(db, document_id)
    document_crud.increment_download_count(db, document.id)
    db.commit()
    return success_response(message="Download contado")
