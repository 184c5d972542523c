"""
Service layer for the classroom scheduler.

Services own business rules and transactions; repositories own queries.
"""

from .base import BaseService
from .building_service import BuildingService
from .cache_service import CacheService
from .conflict_checker import ConflictChecker
from .course_service import CourseService
from .department_service import DepartmentService
from .program_service import ProgramService
from .room_service import RoomService
from .schedule_service import ScheduleService
from .user_service import UserService

__all__ = [
    "BaseService",
    "BuildingService",
    "CacheService",
    "ConflictChecker",
    "CourseService",
    "DepartmentService",
    "ProgramService",
    "RoomService",
    "ScheduleService",
    "UserService",
]
