import uuid

from sqlalchemy import Column, String, TIMESTAMP, CheckConstraint, func
from sqlalchemy.orm import relationship

from mentorhub.database import Base

USER_ROLES = ("admin", "user", "mentor")
USER_TYPES = ("mentor", "aprendiz")


def generate_uuid() -> str:
    return str(uuid.uuid4())


# ---------------- USER (AUTH TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(10))
    profile_image_url = Column(String(500))
    role = Column(String(20), nullable=False, default="user")
    user_type = Column(String(20))
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user', 'mentor')", name="check_user_role"),
        CheckConstraint("user_type IN ('mentor', 'aprendiz')", name="check_user_type"),
    )

    # Profiles are removed by the database when the user goes away.
    mentor_profile = relationship(
        "Mentor",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    mentee_profile = relationship(
        "Mentee",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
