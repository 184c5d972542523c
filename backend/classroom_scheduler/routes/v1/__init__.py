"""Versioned API routers mounted under /api/v1."""

from . import buildings, courses, departments, programs, rooms, schedules, users

__all__ = ["buildings", "courses", "departments", "programs", "rooms", "schedules", "users"]
