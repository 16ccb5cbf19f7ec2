# mentorhub/models/mentor.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Float,
    ForeignKey,
    TIMESTAMP,
    CheckConstraint,
    func,
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

DEFAULT_LANGUAGES = ["Português"]
DEFAULT_TIMEZONE = "America/Sao_Paulo"


class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    # Nullable: seeded profiles may exist without a login.
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=True,
    )
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    avatar = Column(String(10))
    profile_image_url = Column(String(500))
    bio = Column(Text, default="")
    experience = Column(Integer, default=0, nullable=False)
    rating = Column(Float, default=0.0, nullable=False)
    total_sessions = Column(Integer, default=0, nullable=False)
    hourly_rate = Column(Float, default=0.0, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="mentor_profile")

    specialty_rows = relationship(
        "MentorSpecialty",
        order_by="MentorSpecialty.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    language_rows = relationship(
        "MentorLanguage",
        order_by="MentorLanguage.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    certification_rows = relationship(
        "MentorCertification",
        order_by="MentorCertification.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    availability = relationship(
        "MentorAvailability",
        order_by="MentorAvailability.day_of_week",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Flat string views over the child tables; assigning replaces every row.
    specialties = association_proxy(
        "specialty_rows", "specialty",
        creator=lambda value: MentorSpecialty(specialty=value),
    )
    languages = association_proxy(
        "language_rows", "language",
        creator=lambda value: MentorLanguage(language=value),
    )
    certifications = association_proxy(
        "certification_rows", "certification",
        creator=lambda value: MentorCertification(certification=value),
    )


class MentorSpecialty(Base):
    __tablename__ = "mentor_specialties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(
        String(36),
        ForeignKey("mentors.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    specialty = Column(String(50), nullable=False, index=True)


class MentorLanguage(Base):
    __tablename__ = "mentor_languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(
        String(36),
        ForeignKey("mentors.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    language = Column(String(50), nullable=False)


class MentorCertification(Base):
    __tablename__ = "mentor_certifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(
        String(36),
        ForeignKey("mentors.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    certification = Column(String(200), nullable=False)


class MentorAvailability(Base):
    __tablename__ = "mentor_availability"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    mentor_id = Column(
        String(36),
        ForeignKey("mentors.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    timezone = Column(String(64), default=DEFAULT_TIMEZONE, nullable=False)

    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="check_day_of_week"),
    )
