# backend/tests/unit/test_schedule_service_logic.py
"""
Unit tests for ScheduleService business rules.

Repositories and the conflict checker are mocked so each rule is
exercised without a database.
"""

from datetime import date, time
from unittest.mock import Mock

import pytest

from classroom_scheduler.core.config import settings
from classroom_scheduler.core.exceptions import (
    NotFoundException,
    ScheduleConflictException,
    ValidationException,
)
from classroom_scheduler.models import Course, Room, Schedule, ScheduleStatus, User
from classroom_scheduler.repositories.academic_repository import CourseRepository
from classroom_scheduler.repositories.conflict_checker_repository import (
    ConflictCheckerRepository,
)
from classroom_scheduler.repositories.room_repository import RoomRepository
from classroom_scheduler.repositories.schedule_repository import ScheduleRepository
from classroom_scheduler.repositories.user_repository import UserRepository
from classroom_scheduler.schemas.schedule import (
    RecurrencePattern,
    RecurringScheduleBase,
    RecurringScheduleRequest,
    ScheduleCreate,
)
from classroom_scheduler.services.conflict_checker import ConflictChecker
from classroom_scheduler.services.schedule_service import ScheduleService

MONDAY = date(2024, 1, 8)


@pytest.fixture
def room():
    return Room(id=1, room_number="SH-101", building_id=1, capacity=30)


@pytest.fixture
def user():
    return User(id=2, name="Grace Hopper", email="grace@college.edu", role="FACULTY")


@pytest.fixture
def admin():
    return User(id=3, name="Ada Admin", email="admin@college.edu", role="ADMIN")


@pytest.fixture
def course():
    return Course(id=4, course_code="CS101", description="Intro to Programming", program_id=1)


@pytest.fixture
def repos(room, user, course):
    schedule_repository = Mock(spec=ScheduleRepository)
    room_repository = Mock(spec=RoomRepository)
    user_repository = Mock(spec=UserRepository)
    course_repository = Mock(spec=CourseRepository)
    conflict_repository = Mock(spec=ConflictCheckerRepository)
    conflict_checker = Mock(spec=ConflictChecker)

    room_repository.get_by_id.return_value = room
    user_repository.get_by_id.return_value = user
    user_repository.get_names_by_emails.return_value = {}
    course_repository.get_by_id.return_value = course

    return {
        "repository": schedule_repository,
        "room_repository": room_repository,
        "user_repository": user_repository,
        "course_repository": course_repository,
        "conflict_checker_repository": conflict_repository,
        "conflict_checker": conflict_checker,
    }


@pytest.fixture
def service(mock_db, repos):
    return ScheduleService(mock_db, **repos)


def _create_request(**overrides) -> ScheduleCreate:
    data = {
        "room_id": 1,
        "user_id": 2,
        "course_id": 4,
        "date": "2024-01-08",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return ScheduleCreate(**data)


def _recurring_base() -> RecurringScheduleBase:
    return RecurringScheduleBase(
        room_id=1, user_id=2, course_id=4, start_time="09:00", end_time="10:00"
    )


def _persisted(room, user, course, schedule_id=10, on=MONDAY, **fields) -> Schedule:
    schedule = Schedule(
        id=schedule_id,
        date=on,
        start_time=time(9, 0),
        end_time=time(10, 0),
        **fields,
    )
    schedule.room = room
    schedule.user = user
    schedule.course = course
    schedule.room_id = room.id
    schedule.user_id = user.id
    schedule.course_id = course.id
    return schedule


class TestCreateSchedule:
    def test_missing_room_raises_not_found_and_writes_nothing(self, service, repos, mock_db):
        repos["room_repository"].get_by_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.create_schedule(_create_request(room_id=99))

        assert exc_info.value.message == "Room not found with id: 99"
        repos["repository"].create.assert_not_called()
        mock_db.rollback.assert_called_once()
        mock_db.commit.assert_not_called()

    def test_missing_course_raises_not_found(self, service, repos):
        repos["course_repository"].get_by_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.create_schedule(_create_request(course_id=77))

        assert exc_info.value.message == "Course not found with id: 77"

    def test_conflict_aborts_before_write(self, service, repos, mock_db):
        repos["conflict_checker"].ensure_no_conflicts.side_effect = ScheduleConflictException(
            "Room SH-101 has scheduling conflicts:"
        )

        with pytest.raises(ScheduleConflictException):
            service.create_schedule(_create_request())

        repos["conflict_checker_repository"].lock_room.assert_called_once_with(1)
        repos["repository"].create.assert_not_called()
        mock_db.commit.assert_not_called()

    def test_create_stamps_pending_and_requester(
        self, service, repos, room, user, course, admin, mock_db
    ):
        repos["repository"].create.side_effect = lambda **kw: _persisted(
            room,
            user,
            course,
            status=kw["status"],
            created_by_email=kw["created_by_email"],
            updated_by_email=kw["updated_by_email"],
        )
        repos["user_repository"].get_names_by_emails.return_value = {
            "admin@college.edu": "Ada Admin"
        }

        response = service.create_schedule(_create_request(), acting_user=admin)

        kwargs = repos["repository"].create.call_args.kwargs
        assert kwargs["status"] == ScheduleStatus.PENDING.value
        assert kwargs["created_by_email"] == "admin@college.edu"
        assert kwargs["updated_by_email"] == "admin@college.edu"
        assert response.status == "PENDING"
        assert response.created_by_name == "Ada Admin"
        assert response.room_number == "SH-101"
        mock_db.commit.assert_called_once()

    def test_without_acting_user_assignee_is_recorded(self, service, repos, room, user, course):
        repos["repository"].create.side_effect = lambda **kw: _persisted(
            room, user, course, created_by_email=kw["created_by_email"]
        )

        response = service.create_schedule(_create_request())

        assert repos["repository"].create.call_args.kwargs["created_by_email"] == "grace@college.edu"
        # No user matched the email, so the email stands in for the name
        assert response.created_by_name == "grace@college.edu"


class TestRecurringSchedule:
    def test_oversized_pattern_rejected_before_any_lookup(self, service, repos, mock_db):
        request = RecurringScheduleRequest(
            base_schedule=_recurring_base(),
            recurrence_pattern=RecurrencePattern(
                start_date=date(2024, 1, 1),
                end_date=date(2025, 12, 31),
                days_of_week={0, 1, 2, 3, 4, 5, 6},
            ),
        )

        with pytest.raises(ValidationException) as exc_info:
            service.create_recurring_schedule(request)

        assert exc_info.value.code == "RECURRENCE_TOO_LARGE"
        assert exc_info.value.details["max_occurrences"] == settings.max_recurring_occurrences
        repos["room_repository"].get_by_id.assert_not_called()
        repos["conflict_checker"].ensure_no_conflicts_for_dates.assert_not_called()
        mock_db.commit.assert_not_called()

    def test_empty_expansion_creates_nothing(self, service, repos):
        request = RecurringScheduleRequest(
            base_schedule=_recurring_base(),
            recurrence_pattern=RecurrencePattern(
                start_date=date(2024, 1, 2), end_date=date(2024, 1, 2), days_of_week={1}
            ),
        )

        assert service.create_recurring_schedule(request) == []
        repos["repository"].create_many.assert_not_called()

    def test_conflict_on_any_date_aborts_all(self, service, repos, mock_db):
        repos["conflict_checker"].ensure_no_conflicts_for_dates.side_effect = (
            ScheduleConflictException("Room SH-101 has scheduling conflicts:")
        )
        request = RecurringScheduleRequest(
            base_schedule=_recurring_base(),
            recurrence_pattern=RecurrencePattern(
                start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), days_of_week={1}
            ),
        )

        with pytest.raises(ScheduleConflictException):
            service.create_recurring_schedule(request)

        checked_dates = repos["conflict_checker"].ensure_no_conflicts_for_dates.call_args.args[1]
        assert checked_dates == [
            date(2024, 1, 1),
            date(2024, 1, 8),
            date(2024, 1, 15),
            date(2024, 1, 22),
            date(2024, 1, 29),
        ]
        repos["repository"].create_many.assert_not_called()
        mock_db.rollback.assert_called_once()


class TestBatchOperations:
    def test_batch_status_deduplicates_ids(self, service, repos, admin):
        repos["repository"].get_by_ids.return_value = []

        service.update_schedule_status_batch([1, 2, 1, 2], ScheduleStatus.APPROVED, admin)

        repos["repository"].get_by_ids.assert_called_once_with([1, 2])

    def test_batch_status_skips_missing_with_warning(
        self, service, repos, room, user, course, admin, caplog
    ):
        found = [_persisted(room, user, course, schedule_id=1)]
        repos["repository"].get_by_ids.return_value = found

        result = service.update_schedule_status_batch([1, 999], ScheduleStatus.APPROVED, admin)

        assert [r.id for r in result] == [1]
        assert found[0].status == "APPROVED"
        assert found[0].updated_by_email == "admin@college.edu"
        assert "Missing: [999]" in caplog.text

    def test_batch_delete_returns_deleted_count(self, service, repos, room, user, course):
        found = [_persisted(room, user, course, schedule_id=1)]
        repos["repository"].get_by_ids.return_value = found
        repos["repository"].delete_many.return_value = 1

        assert service.delete_schedules_batch([1, 5]) == 1
        repos["repository"].delete_many.assert_called_once_with(found)


class TestSingleScheduleOperations:
    def test_delete_unknown_schedule_raises_not_found(self, service, repos):
        repos["repository"].delete.return_value = False

        with pytest.raises(NotFoundException) as exc_info:
            service.delete_schedule(12345)

        assert exc_info.value.message == "Schedule not found with id: 12345"

    def test_status_change_skips_conflict_check(self, service, repos, room, user, course, admin):
        schedule = _persisted(room, user, course, status="PENDING")
        repos["repository"].get_by_id.return_value = schedule

        response = service.update_schedule_status(10, ScheduleStatus.REJECTED, acting_user=admin)

        assert response.status == "REJECTED"
        assert schedule.updated_by_email == "admin@college.edu"
        repos["conflict_checker"].ensure_no_conflicts.assert_not_called()

    def test_status_change_without_acting_user_stamps_assignee(
        self, service, repos, room, user, course
    ):
        schedule = _persisted(
            room, user, course, status="PENDING", updated_by_email="admin@college.edu"
        )
        repos["repository"].get_by_id.return_value = schedule

        service.update_schedule_status(10, ScheduleStatus.APPROVED)

        assert schedule.updated_by_email == user.email

    def test_get_by_email_unknown_user(self, service, repos):
        repos["user_repository"].get_by_email.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.get_schedules_by_email("nobody@college.edu")

        assert exc_info.value.message == "User not found with email: nobody@college.edu"
