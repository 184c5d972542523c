# backend/classroom_scheduler/models/user.py
from enum import Enum

from sqlalchemy import CheckConstraint, Column, Integer, String

from ..database import Base


class UserRole(str, Enum):
    """Roles a user can hold."""

    ADMIN = "ADMIN"
    FACULTY = "FACULTY"


class User(Base):
    """
    A person who is assigned to schedules or acts on them.

    Audit fields on schedules store the acting user's email, so email is
    unique and used as the natural lookup key.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(20), nullable=False, default=UserRole.FACULTY.value)

    __table_args__ = (CheckConstraint("role IN ('ADMIN', 'FACULTY')", name="ck_users_role"),)

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email} ({self.role})>"
