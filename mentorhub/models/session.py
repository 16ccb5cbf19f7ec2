# mentorhub/models/session.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    TIMESTAMP,
    CheckConstraint,
    UniqueConstraint,
    func,
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

# Two vocabularies coexist: the mentor dashboard writes scheduled/in-progress,
# the public feed writes upcoming/live. Values are stored verbatim.
SESSION_STATUSES = ("scheduled", "in-progress", "completed", "cancelled", "upcoming", "live")

# Public-feed value -> dashboard value
STATUS_EQUIVALENTS = {
    "upcoming": "scheduled",
    "live": "in-progress",
}


def with_equivalents(*statuses: str) -> tuple:
    """Expand dashboard statuses with their public-feed aliases."""
    expanded = list(statuses)
    for alias, canonical in STATUS_EQUIVALENTS.items():
        if canonical in statuses and alias not in expanded:
            expanded.append(alias)
    return tuple(expanded)


def equivalent_statuses(status: str) -> tuple:
    """Every stored value meaning the same thing as ``status`` in either vocabulary."""
    return with_equivalents(STATUS_EQUIVALENTS.get(status, status))


# A mentor or mentee with sessions in these states cannot be deleted.
ACTIVE_STATUSES = ("scheduled", "upcoming", "live")
ENROLLABLE_STATUSES = with_equivalents("scheduled")
UNDELETABLE_STATUSES = with_equivalents("in-progress", "completed")


class Session(Base):
    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    mentor_id = Column(
        String(36),
        ForeignKey("mentors.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    # Legacy 1:1 binding, superseded by session_participants.
    mentee_id = Column(
        String(36),
        ForeignKey("mentees.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    topic = Column(String(100), default="")
    scheduled_at = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    max_participants = Column(Integer, nullable=True)
    current_participants = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default="scheduled", nullable=False)
    meeting_link = Column(String(500))
    notes = Column(Text)
    rating = Column(Float)
    feedback = Column(Text)
    has_documents = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('scheduled', 'in-progress', 'completed', 'cancelled', 'upcoming', 'live')",
            name="check_session_status",
        ),
    )

    mentor = relationship("Mentor")
    mentee = relationship("Mentee")

    requirement_rows = relationship(
        "SessionRequirement", order_by="SessionRequirement.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    objective_rows = relationship(
        "SessionObjective", order_by="SessionObjective.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    document_rows = relationship(
        "Document", order_by="Document.uploaded_at", viewonly=True,
    )

    requirements = association_proxy(
        "requirement_rows", "requirement",
        creator=lambda value: SessionRequirement(requirement=value),
    )
    objectives = association_proxy(
        "objective_rows", "objective",
        creator=lambda value: SessionObjective(objective=value),
    )

    @property
    def documents(self) -> list:
        return [document.id for document in self.document_rows]


class SessionRequirement(Base):
    __tablename__ = "session_requirements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True, nullable=False)
    requirement = Column(String(200), nullable=False)


class SessionObjective(Base):
    __tablename__ = "session_objectives"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True, nullable=False)
    objective = Column(String(200), nullable=False)


class SessionParticipant(Base):
    __tablename__ = "session_participants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    joined_at = Column(TIMESTAMP, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("session_id", "user_id", name="uq_session_participant"),
    )
