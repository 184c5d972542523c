"""
Repository layer for the classroom scheduler.

Repositories encapsulate data access and never commit; services own
transactions.
"""

from .academic_repository import CourseRepository, DepartmentRepository, ProgramRepository
from .base_repository import BaseRepository, IRepository
from .conflict_checker_repository import ConflictCheckerRepository
from .factory import RepositoryFactory
from .room_repository import RoomRepository
from .schedule_repository import ScheduleRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ConflictCheckerRepository",
    "CourseRepository",
    "DepartmentRepository",
    "IRepository",
    "ProgramRepository",
    "RepositoryFactory",
    "RoomRepository",
    "ScheduleRepository",
    "UserRepository",
]
