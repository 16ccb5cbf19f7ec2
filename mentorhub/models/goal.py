from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, TIMESTAMP, CheckConstraint, func

from mentorhub.database import Base
from mentorhub.models.user import generate_uuid

GOAL_CATEGORIES = ("career", "leadership", "communication", "technical", "personal")
GOAL_PRIORITIES = ("low", "medium", "high")
GOAL_STATUSES = ("not-started", "in-progress", "completed", "paused")


class Goal(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    category = Column(String(20), nullable=False)
    priority = Column(String(10), default="medium", nullable=False)
    status = Column(String(20), default="not-started", nullable=False)
    # No range check here; progress is a free integer at the data layer.
    progress = Column(Integer, default=0, nullable=False)
    target_date = Column(DateTime, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "category IN ('career', 'leadership', 'communication', 'technical', 'personal')",
            name="check_goal_category",
        ),
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="check_goal_priority"),
        CheckConstraint(
            "status IN ('not-started', 'in-progress', 'completed', 'paused')",
            name="check_goal_status",
        ),
    )
