"""
Database models for the classroom scheduler.

- Campus layout: buildings and their rooms
- Academic catalog: departments, programs and courses
- Users who teach or administer schedules
- Schedules: room bookings for a course on a date and time window
"""

from .academic import Course, Department, Program
from .building import Building
from .room import Room
from .schedule import BLOCKING_STATUSES, Schedule, ScheduleStatus
from .user import User, UserRole

__all__ = [
    "BLOCKING_STATUSES",
    "Building",
    "Course",
    "Department",
    "Program",
    "Room",
    "Schedule",
    "ScheduleStatus",
    "User",
    "UserRole",
]
