# backend/classroom_scheduler/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_acting_user, require_acting_user
from .database import get_db
from .services import (
    get_building_service,
    get_cache_service_dep,
    get_course_service,
    get_department_service,
    get_program_service,
    get_room_service,
    get_schedule_service,
    get_user_service,
)

__all__ = [
    # Acting user
    "get_acting_user",
    "require_acting_user",
    # Database
    "get_db",
    # Services
    "get_building_service",
    "get_cache_service_dep",
    "get_course_service",
    "get_department_service",
    "get_program_service",
    "get_room_service",
    "get_schedule_service",
    "get_user_service",
]
