from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, CheckConstraint, func
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

MENTEE_LEVELS = ("beginner", "intermediate", "advanced")


class Mentee(Base):
    __tablename__ = "mentees"

    id = Column(String(36), primary_key=True, default=generate_uuid)
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
    current_level = Column(String(20), default="beginner", nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "current_level IN ('beginner', 'intermediate', 'advanced')",
            name="check_mentee_level",
        ),
    )

    user = relationship("User", back_populates="mentee_profile")

    goal_rows = relationship(
        "MenteeGoal", order_by="MenteeGoal.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    interest_rows = relationship(
        "MenteeInterest", order_by="MenteeInterest.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    language_rows = relationship(
        "MenteeLanguage", order_by="MenteeLanguage.id",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    goals = association_proxy(
        "goal_rows", "goal", creator=lambda value: MenteeGoal(goal=value)
    )
    interests = association_proxy(
        "interest_rows", "interest", creator=lambda value: MenteeInterest(interest=value)
    )
    preferred_languages = association_proxy(
        "language_rows", "language", creator=lambda value: MenteeLanguage(language=value)
    )


class MenteeGoal(Base):
    __tablename__ = "mentee_goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentee_id = Column(String(36), ForeignKey("mentees.id", ondelete="CASCADE"), index=True, nullable=False)
    goal = Column(String(200), nullable=False)


class MenteeInterest(Base):
    __tablename__ = "mentee_interests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentee_id = Column(String(36), ForeignKey("mentees.id", ondelete="CASCADE"), index=True, nullable=False)
    interest = Column(String(100), nullable=False)


class MenteeLanguage(Base):
    __tablename__ = "mentee_languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentee_id = Column(String(36), ForeignKey("mentees.id", ondelete="CASCADE"), index=True, nullable=False)
    language = Column(String(50), nullable=False)
