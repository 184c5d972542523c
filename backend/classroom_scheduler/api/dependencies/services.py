# backend/classroom_scheduler/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Factory functions that build service instances with their
dependencies injected per request.
"""

from functools import lru_cache
import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.building_service import BuildingService
from ...services.cache_service import CacheService, get_cache_service
from ...services.course_service import CourseService
from ...services.department_service import DepartmentService
from ...services.program_service import ProgramService
from ...services.room_service import RoomService
from ...services.schedule_service import ScheduleService
from ...services.user_service import UserService
from .database import get_db

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_cache_service_singleton() -> Optional[CacheService]:
    """Get the process-wide cache service instance."""
    return get_cache_service()


def get_cache_service_dep() -> Optional[CacheService]:
    """Get cache service instance for dependency injection."""
    return get_cache_service_singleton()


def get_schedule_service(
    db: Session = Depends(get_db),
    cache: Optional[CacheService] = Depends(get_cache_service_dep),
) -> ScheduleService:
    return ScheduleService(db, cache)


def get_room_service(
    db: Session = Depends(get_db),
    cache: Optional[CacheService] = Depends(get_cache_service_dep),
) -> RoomService:
    return RoomService(db, cache)


def get_building_service(db: Session = Depends(get_db)) -> BuildingService:
    return BuildingService(db)


def get_department_service(db: Session = Depends(get_db)) -> DepartmentService:
    return DepartmentService(db)


def get_program_service(db: Session = Depends(get_db)) -> ProgramService:
    return ProgramService(db)


def get_course_service(
    db: Session = Depends(get_db),
    cache: Optional[CacheService] = Depends(get_cache_service_dep),
) -> CourseService:
    return CourseService(db, cache)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
