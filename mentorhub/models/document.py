from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    ForeignKey,
    TIMESTAMP,
    CheckConstraint,
    func,
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

FILE_TYPES = ("pdf", "pptx", "docx", "xlsx", "zip", "code", "image", "video", "other")


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    session_id = Column(String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True, nullable=False)
    mentor_id = Column(String(36), ForeignKey("mentors.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    file_url = Column(String(1000), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(10), nullable=False)
    file_size = Column(Integer, default=0, nullable=False)
    download_count = Column(Integer, default=0, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    uploaded_at = Column(TIMESTAMP, server_default=func.now())
    is_public = Column(Boolean, default=True, nullable=False)
    language = Column(String(50))
    thumbnail_url = Column(String(1000))

    __table_args__ = (
        CheckConstraint(
            "file_type IN ('pdf', 'pptx', 'docx', 'xlsx', 'zip', 'code', 'image', 'video', 'other')",
            name="check_document_file_type",
        ),
    )

    mentor = relationship("Mentor")
    tag_rows = relationship(
        "DocumentTag", order_by="DocumentTag.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    tags = association_proxy("tag_rows", "tag", creator=lambda value: DocumentTag(tag=value))


class DocumentTag(Base):
    __tablename__ = "document_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), index=True, nullable=False)
    tag = Column(String(50), nullable=False)
