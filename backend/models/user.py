"""User model definitions."""

import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum, String, func
from backend.database import Base


class UserRole(str, enum.Enum):
    LEARNER = "LEARNER"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Represents a RuralEdu account."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.LEARNER)
    date_of_birth = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
