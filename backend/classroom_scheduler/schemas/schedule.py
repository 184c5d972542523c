# backend/classroom_scheduler/schemas/schedule.py
"""
Schedule schemas.

Request bodies use ``HH:MM`` times and ``YYYY-MM-DD`` dates. Responses
carry the resolved room, user and course labels plus audit fields.
"""

import datetime as dt
from datetime import date, datetime, time
from typing import List, Optional, Set

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models.schedule import ScheduleStatus
from ._strict_base import StrictRequestModel
from .base import StandardizedModel, ensure_date_only, parse_time_value


class RecurringScheduleBase(StrictRequestModel):
    """Room, assignee, course and time of day repeated by a recurring request."""

    room_id: int = Field(..., gt=0, description="Room to book")
    user_id: int = Field(..., gt=0, description="User assigned to the schedule")
    course_id: int = Field(..., gt=0, description="Course taught in the room")
    start_time: time = Field(..., description="Start time (HH:MM)")
    end_time: time = Field(..., description="End time (HH:MM)")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time_string(cls, v: object) -> object:
        return parse_time_value(v)

    @model_validator(mode="after")
    def validate_time_order(self) -> "RecurringScheduleBase":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class ScheduleWindow(RecurringScheduleBase):
    """Room, assignee, course and time window shared by create and update requests."""

    date: dt.date = Field(..., description="Date of the schedule")

    @field_validator("date", mode="before")
    @classmethod
    def _enforce_date_only(cls, v: object) -> object:
        return ensure_date_only(v, "date")


class ScheduleCreate(ScheduleWindow):
    pass


class ScheduleUpdate(ScheduleWindow):
    """Full replacement of a schedule's room, assignee, course and window."""


class ScheduleResponse(StandardizedModel):
    id: int
    room_id: int
    room_number: Optional[str] = None
    user_id: int
    user_name: Optional[str] = None
    date: dt.date
    start_time: time
    end_time: time
    course_id: int
    course_code: Optional[str] = None
    course_description: Optional[str] = None
    status: ScheduleStatus
    creation_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    created_by_email: Optional[str] = None
    created_by_name: Optional[str] = None
    updated_by_email: Optional[str] = None
    updated_by_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class RecurrencePattern(StrictRequestModel):
    """
    Weekly recurrence over an inclusive date range.

    ``days_of_week`` uses 0=Sunday through 6=Saturday.
    """

    start_date: date
    end_date: date
    days_of_week: Set[int] = Field(..., min_length=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _enforce_date_only(cls, v: object) -> object:
        return ensure_date_only(v, "recurrence date")

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, v: Set[int]) -> Set[int]:
        invalid = sorted(day for day in v if day < 0 or day > 6)
        if invalid:
            raise ValueError(f"days_of_week values must be between 0 (Sunday) and 6 (Saturday): {invalid}")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "RecurrencePattern":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class RecurringScheduleRequest(StrictRequestModel):
    """One schedule is created per date produced by ``recurrence_pattern``."""

    base_schedule: RecurringScheduleBase
    recurrence_pattern: RecurrencePattern


class BatchStatusUpdateRequest(StrictRequestModel):
    ids: List[int] = Field(..., min_length=1)
    status: ScheduleStatus
