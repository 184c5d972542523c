# backend/classroom_scheduler/models/schedule.py
"""
Schedule model.

A schedule books one room for one course, taught by one user, on a single
date between a start and end time. Recurring requests are stored as one
independent schedule per occurrence.
"""

from datetime import datetime, timezone
from enum import Enum
import logging
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
)
from sqlalchemy.orm import relationship

from ..database import Base

logger = logging.getLogger(__name__)


class ScheduleStatus(str, Enum):
    """Schedule approval statuses."""

    PENDING = "PENDING"  # Default for every new or edited schedule
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Statuses that occupy the room
BLOCKING_STATUSES = (ScheduleStatus.PENDING.value, ScheduleStatus.APPROVED.value)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)

    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)

    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    status = Column(String(20), nullable=False, default=ScheduleStatus.PENDING.value, index=True)

    # Audit fields
    creation_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    created_by_email = Column(String(255), nullable=True)
    updated_by_email = Column(String(255), nullable=True)

    room = relationship("Room", back_populates="schedules")
    user = relationship("User")
    course = relationship("Course")

    __table_args__ = (
        Index("ix_schedules_room_date", "room_id", "date"),
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')",
            name="ck_schedules_status",
        ),
        CheckConstraint("start_time < end_time", name="check_time_order"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = ScheduleStatus.PENDING.value

    @property
    def is_blocking(self) -> bool:
        """Whether this schedule occupies its room."""
        return self.status in BLOCKING_STATUSES

    def __repr__(self) -> str:
        return (
            f"<Schedule {self.id}: room={self.room_id}, user={self.user_id}, "
            f"date={self.date}, time={self.start_time}-{self.end_time}, status={self.status}>"
        )
