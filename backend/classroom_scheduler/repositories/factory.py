# backend/classroom_scheduler/repositories/factory.py
"""
Repository Factory for the classroom scheduler.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

# Avoid circular imports
if TYPE_CHECKING:
    from .academic_repository import CourseRepository, DepartmentRepository, ProgramRepository
    from .conflict_checker_repository import ConflictCheckerRepository
    from .room_repository import RoomRepository
    from .schedule_repository import ScheduleRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_base_repository(db: Session, model) -> BaseRepository:
        """Create a generic base repository for any model."""
        return BaseRepository(db, model)

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        """Create repository for conflict checking queries."""
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)

    @staticmethod
    def create_schedule_repository(db: Session) -> "ScheduleRepository":
        from .schedule_repository import ScheduleRepository

        return ScheduleRepository(db)

    @staticmethod
    def create_room_repository(db: Session) -> "RoomRepository":
        """Create repository for rooms, including availability search."""
        from .room_repository import RoomRepository

        return RoomRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_department_repository(db: Session) -> "DepartmentRepository":
        from .academic_repository import DepartmentRepository

        return DepartmentRepository(db)

    @staticmethod
    def create_program_repository(db: Session) -> "ProgramRepository":
        from .academic_repository import ProgramRepository

        return ProgramRepository(db)

    @staticmethod
    def create_course_repository(db: Session) -> "CourseRepository":
        from .academic_repository import CourseRepository

        return CourseRepository(db)
