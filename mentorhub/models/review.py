# mentorhub/models/review.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, func, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

SUB_RATINGS = ("communication", "expertise", "helpfulness", "punctuality")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    session_id = Column(String(36), ForeignKey("sessions.id", ondelete="CASCADE"), index=True, nullable=False)
    reviewer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    reviewee_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    communication = Column(Integer)
    expertise = Column(Integer)
    helpfulness = Column(Integer)
    punctuality = Column(Integer)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_rating_range"),
        CheckConstraint("communication >= 1 AND communication <= 5", name="check_communication_range"),
        CheckConstraint("expertise >= 1 AND expertise <= 5", name="check_expertise_range"),
        CheckConstraint("helpfulness >= 1 AND helpfulness <= 5", name="check_helpfulness_range"),
        CheckConstraint("punctuality >= 1 AND punctuality <= 5", name="check_punctuality_range"),
        UniqueConstraint("session_id", "reviewer_id", "reviewee_id", name="uq_review_per_session"),
    )

    # Relationships
    reviewer = relationship("User", foreign_keys=[reviewer_id])
    reviewee = relationship("User", foreign_keys=[reviewee_id])
