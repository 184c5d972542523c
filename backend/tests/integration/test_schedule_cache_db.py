# backend/tests/integration/test_schedule_cache_db.py
"""
Cached schedule reads against a real session and the in-memory cache.

Schedule payloads carry room, course and user labels, so renaming a room
or course must drop them.
"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from classroom_scheduler.models import ScheduleStatus
from classroom_scheduler.schemas.academic import CourseUpdate
from classroom_scheduler.schemas.room import RoomUpdate
from classroom_scheduler.services.cache_service import CacheService
from classroom_scheduler.services.course_service import CourseService
from classroom_scheduler.services.room_service import RoomService
from classroom_scheduler.services.schedule_service import ScheduleService

TEST_DATE = date(2024, 1, 8)


@pytest.fixture
def cache() -> CacheService:
    return CacheService()


@pytest.fixture
def schedule_service(db: Session, cache: CacheService) -> ScheduleService:
    return ScheduleService(db, cache)


class TestScheduleReadCache:
    def test_detail_is_served_from_cache(self, schedule_service, cache, schedule):
        schedule_service.get_schedule_by_id(schedule.id)
        schedule_service.get_schedule_by_id(schedule.id)

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_status_change_drops_cached_detail(self, schedule_service, schedule):
        schedule_service.get_schedule_by_id(schedule.id)

        schedule_service.update_schedule_status(schedule.id, ScheduleStatus.APPROVED)

        assert schedule_service.get_schedule_by_id(schedule.id).status == "APPROVED"

    def test_room_rename_drops_cached_schedules(
        self, db, schedule_service, cache, schedule, room, building
    ):
        schedule_service.get_schedule_by_id(schedule.id)
        schedule_service.get_schedules_by_date(TEST_DATE)

        RoomService(db, cache).update_room(
            room.id,
            RoomUpdate(room_number="SH-999", building_id=building.id, capacity=40),
        )

        assert schedule_service.get_schedule_by_id(schedule.id).room_number == "SH-999"
        assert [s.room_number for s in schedule_service.get_schedules_by_date(TEST_DATE)] == [
            "SH-999"
        ]

    def test_course_update_drops_cached_schedules(
        self, db, schedule_service, cache, schedule, course, program
    ):
        schedule_service.get_schedule_by_id(schedule.id)

        CourseService(db, cache).update_course(
            course.id,
            CourseUpdate(course_code="CS102", description="Data Structures", program_id=program.id),
        )

        cached = schedule_service.get_schedule_by_id(schedule.id)
        assert cached.course_code == "CS102"
        assert cached.course_description == "Data Structures"
