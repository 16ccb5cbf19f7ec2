# mentorhub/crud/document.py
"""
Document CRUD Operations
Metadata records for files attached to sessions.
"""

from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from mentorhub.models.document import Document


def get_document(db: Session, document_id: str) -> Optional[Document]:
    return db.query(Document).filter(Document.id == document_id).first()


def list_documents(
    db: Session,
    *,
    session_id: Optional[str] = None,
    mentor_id: Optional[str] = None,
    file_type: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Document]:
    """
    List documents, newest upload first.

    Args:
        db: Database session
        session_id: Only documents attached to this session
        mentor_id: Only documents uploaded by this mentor
        file_type: Exact file type
        search: Substring matched against title and description
        limit: Maximum documents to return
        offset: Number of documents to skip

    Returns:
        List of Document objects
    """
    query = db.query(Document)

    if session_id:
        query = query.filter(Document.session_id == session_id)
    if mentor_id:
        query = query.filter(Document.mentor_id == mentor_id)
    if file_type:
        query = query.filter(Document.file_type == file_type)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Document.title.ilike(pattern), Document.description.ilike(pattern)))

    return (
        query.order_by(Document.uploaded_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def create_document(
    db: Session,
    *,
    session_id: str,
    mentor_id: str,
    title: str,
    file_url: str,
    file_name: str,
    file_type: str,
    description: Optional[str] = None,
    file_size: Optional[int] = None,
    tags: Optional[Iterable[str]] = None,
    is_public: bool = True,
    language: Optional[str] = None,
    thumbnail_url: Optional[str] = None,
) -> Document:
    document = Document(
        session_id=session_id,
        mentor_id=mentor_id,
        title=title,
        description=description or "",
        file_url=file_url,
        file_name=file_name,
        file_type=file_type,
        file_size=file_size or 0,
        download_count=0,
        view_count=0,
        is_public=is_public,
        language=language,
        thumbnail_url=thumbnail_url,
    )
    document.tags = list(tags or [])

    db.add(document)
    db.flush()
    return document


def update_document(db: Session, document: Document, **fields) -> Document:
    for key, value in fields.items():
        setattr(document, key, value)
    db.flush()
    return document


def delete_document(db: Session, document: Document) -> None:
    db.delete(document)
    db.flush()


def count_for_session(db: Session, session_id: str) -> int:
    return db.query(Document).filter(Document.session_id == session_id).count()


# ======================
# COUNTERS
# ======================

def increment_view_count(db: Session, document_id: str) -> None:
    db.query(Document).filter(Document.id == document_id).update(
        {Document.view_count: Document.view_count + 1},
        synchronize_session=False,
    )


def increment_download_count(db: Session, document_id: str) -> None:
    db.query(Document).filter(Document.id == document_id).update(
        {Document.download_count: Document.download_count + 1},
        synchronize_session=False,
    )
