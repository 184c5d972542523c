# backend/classroom_scheduler/services/schedule_service.py
"""
Schedule Service for the classroom scheduler.

The only component that writes schedules. Every create, update and
recurring create validates its references, checks the room for conflicts
and writes inside one transaction, so a failed request leaves nothing
behind. Status changes and batch operations skip the conflict check.
"""

from datetime import date, time
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import NotFoundException, ScheduleConflictException, ValidationException
from ..models.academic import Course
from ..models.room import Room
from ..models.schedule import Schedule, ScheduleStatus
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories import RepositoryFactory
from ..repositories.academic_repository import CourseRepository
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from ..repositories.room_repository import RoomRepository
from ..repositories.schedule_repository import ScheduleRepository
from ..repositories.user_repository import UserRepository
from ..schemas.schedule import (
    RecurringScheduleRequest,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleUpdate,
)
from .base import BaseService
from .cache_service import SCHEDULE_CACHE_PATTERN, CacheKeyBuilder, CacheService
from .conflict_checker import ConflictChecker
from .recurrence import count_occurrences, expand_recurrence

logger = logging.getLogger(__name__)


class ScheduleService(BaseService):
    """
    Service layer for the schedule lifecycle.

    Acting users are passed in explicitly; when none is given the
    schedule's assigned user is recorded in the audit fields.
    """

    def __init__(
        self,
        db: Session,
        cache: Optional[CacheService] = None,
        repository: Optional[ScheduleRepository] = None,
        conflict_checker_repository: Optional[ConflictCheckerRepository] = None,
        conflict_checker: Optional[ConflictChecker] = None,
        room_repository: Optional[RoomRepository] = None,
        user_repository: Optional[UserRepository] = None,
        course_repository: Optional[CourseRepository] = None,
    ):
        super().__init__(db, cache)
        self.repository = repository or RepositoryFactory.create_schedule_repository(db)
        self.conflict_checker_repository = (
            conflict_checker_repository
            or RepositoryFactory.create_conflict_checker_repository(db)
        )
        self.conflict_checker = conflict_checker or ConflictChecker(
            db, self.conflict_checker_repository
        )
        self.room_repository = room_repository or RepositoryFactory.create_room_repository(db)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)
        self.course_repository = course_repository or RepositoryFactory.create_course_repository(db)

    # Reads

    @BaseService.measure_operation("get_all_schedules")
    def get_all_schedules(self) -> List[ScheduleResponse]:
        return self._to_responses(self.repository.get_all())

    @BaseService.measure_operation("get_schedule_by_id")
    def get_schedule_by_id(self, schedule_id: int) -> ScheduleResponse:
        cache_key = CacheKeyBuilder.build("schedule", "detail", schedule_id)
        cached = self._cache_get(cache_key)
        if cached is not None:
            return ScheduleResponse.model_validate(cached)

        response = self._to_response(self._get_schedule_or_404(schedule_id))
        self._cache_set(cache_key, response.model_dump(mode="json"))
        return response

    @BaseService.measure_operation("get_schedules_by_date")
    def get_schedules_by_date(self, target_date: date) -> List[ScheduleResponse]:
        cache_key = CacheKeyBuilder.build("schedule", "date", target_date)
        cached = self._cache_get(cache_key)
        if cached is not None:
            return [ScheduleResponse.model_validate(item) for item in cached]

        responses = self._to_responses(self.repository.get_by_date(target_date))
        self._cache_set(cache_key, [item.model_dump(mode="json") for item in responses])
        return responses

    @BaseService.measure_operation("get_schedules_by_user")
    def get_schedules_by_user(self, user_id: int) -> List[ScheduleResponse]:
        self._get_user_or_404(user_id)
        return self._to_responses(self.repository.get_by_user(user_id))

    @BaseService.measure_operation("get_schedules_by_email")
    def get_schedules_by_email(self, email: str) -> List[ScheduleResponse]:
        user = self.user_repository.get_by_email(email)
        if not user:
            raise NotFoundException(f"User not found with email: {email}")
        return self._to_responses(self.repository.get_by_user(user.id))

    # Writes

    @BaseService.measure_operation("create_schedule")
    def create_schedule(
        self, data: ScheduleCreate, acting_user: Optional[User] = None
    ) -> ScheduleResponse:
        """
        Create a PENDING schedule after checking the room is free.

        Raises:
            NotFoundException: If the room, user or course does not exist
            ScheduleConflictException: If the window overlaps a blocking schedule
        """
        with self.transaction():
            room, user, course = self._resolve_references(data.room_id, data.user_id, data.course_id)
            self._ensure_room_free("create", room, data.date, data.start_time, data.end_time)

            actor_email = (acting_user or user).email
            schedule = self.repository.create(
                room=room,
                user=user,
                course=course,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                status=ScheduleStatus.PENDING.value,
                created_by_email=actor_email,
                updated_by_email=actor_email,
            )

        self._after_write("create", 1)
        self.logger.info(
            f"Created schedule {schedule.id} for room {room.room_number} on {data.date} "
            f"{data.start_time}-{data.end_time}"
        )
        return self._to_response(schedule)

    @BaseService.measure_operation("update_schedule")
    def update_schedule(
        self, schedule_id: int, data: ScheduleUpdate, acting_user: Optional[User] = None
    ) -> ScheduleResponse:
        """
        Replace a schedule's room, assignee, course and window.

        The schedule itself is excluded from the conflict check, and any
        edit sends it back to PENDING for re-approval.
        """
        with self.transaction():
            schedule = self._get_schedule_or_404(schedule_id)
            room, user, course = self._resolve_references(data.room_id, data.user_id, data.course_id)
            self._ensure_room_free(
                "update",
                room,
                data.date,
                data.start_time,
                data.end_time,
                exclude_schedule_id=schedule_id,
            )

            schedule.room = room
            schedule.user = user
            schedule.course = course
            schedule.date = data.date
            schedule.start_time = data.start_time
            schedule.end_time = data.end_time
            schedule.status = ScheduleStatus.PENDING.value
            schedule.updated_by_email = (acting_user or user).email
            self.db.flush()

        self._after_write("update", 1)
        return self._to_response(schedule)

    @BaseService.measure_operation("update_schedule_status")
    def update_schedule_status(
        self,
        schedule_id: int,
        status: ScheduleStatus,
        acting_user: Optional[User] = None,
    ) -> ScheduleResponse:
        with self.transaction():
            schedule = self._get_schedule_or_404(schedule_id)
            schedule.status = ScheduleStatus(status).value
            schedule.updated_by_email = (acting_user or schedule.user).email
            self.db.flush()

        self._after_write("status", 1)
        self.logger.info(f"Schedule {schedule_id} status set to {schedule.status}")
        return self._to_response(schedule)

    @BaseService.measure_operation("delete_schedule")
    def delete_schedule(self, schedule_id: int) -> None:
        with self.transaction():
            if not self.repository.delete(schedule_id):
                raise NotFoundException(f"Schedule not found with id: {schedule_id}")

        self.invalidate_pattern(SCHEDULE_CACHE_PATTERN)
        self.logger.info(f"Deleted schedule {schedule_id}")

    @BaseService.measure_operation("create_recurring_schedule")
    def create_recurring_schedule(
        self, request: RecurringScheduleRequest, acting_user: Optional[User] = None
    ) -> List[ScheduleResponse]:
        """
        Create one PENDING schedule per date of a weekly recurrence.

        All-or-nothing: if any date conflicts, the exception lists every
        conflicting date and no schedule is written.

        Raises:
            ValidationException: If the pattern expands past the occurrence cap
            NotFoundException: If the room, user or course does not exist
            ScheduleConflictException: If any date overlaps a blocking schedule
        """
        base = request.base_schedule
        pattern = request.recurrence_pattern

        occurrences = count_occurrences(pattern.start_date, pattern.end_date, pattern.days_of_week)
        limit = settings.max_recurring_occurrences
        if occurrences > limit:
            raise ValidationException(
                f"Recurrence pattern produces {occurrences} schedules; the maximum is {limit}",
                code="RECURRENCE_TOO_LARGE",
                details={"occurrences": occurrences, "max_occurrences": limit},
            )

        with self.transaction():
            room, user, course = self._resolve_references(base.room_id, base.user_id, base.course_id)

            dates = expand_recurrence(pattern)
            if not dates:
                self.logger.info("Recurrence pattern produced no dates; nothing to create")
                return []

            self._ensure_room_free("recurring", room, dates, base.start_time, base.end_time)

            actor_email = (acting_user or user).email
            schedules = self.repository.create_many(
                [
                    {
                        "room": room,
                        "user": user,
                        "course": course,
                        "date": occurrence,
                        "start_time": base.start_time,
                        "end_time": base.end_time,
                        "status": ScheduleStatus.PENDING.value,
                        "created_by_email": actor_email,
                        "updated_by_email": actor_email,
                    }
                    for occurrence in dates
                ]
            )

        self._after_write("recurring", len(schedules))
        self.logger.info(
            f"Created {len(schedules)} recurring schedules for room {room.room_number} "
            f"from {pattern.start_date} to {pattern.end_date}"
        )
        return self._to_responses(schedules)

    @BaseService.measure_operation("update_schedule_status_batch")
    def update_schedule_status_batch(
        self, schedule_ids: Iterable[int], status: ScheduleStatus, acting_user: User
    ) -> List[ScheduleResponse]:
        """
        Set the status of every existing schedule in ``schedule_ids``.

        Unknown ids are skipped with a warning; the found subset is updated
        in one transaction and returned.
        """
        requested = list(dict.fromkeys(schedule_ids))
        new_status = ScheduleStatus(status).value

        with self.transaction():
            schedules = self.repository.get_by_ids(requested)
            self._warn_missing("update", requested, schedules)

            for schedule in schedules:
                schedule.status = new_status
                schedule.updated_by_email = acting_user.email
            self.db.flush()

        self._after_write("batch_status", len(schedules))
        return self._to_responses(schedules)

    @BaseService.measure_operation("delete_schedules_batch")
    def delete_schedules_batch(self, schedule_ids: Iterable[int]) -> int:
        """Delete every existing schedule in ``schedule_ids``; returns how many were deleted."""
        requested = list(dict.fromkeys(schedule_ids))

        with self.transaction():
            schedules = self.repository.get_by_ids(requested, load_relationships=False)
            self._warn_missing("delete", requested, schedules)
            deleted = self.repository.delete_many(schedules)

        self.invalidate_pattern(SCHEDULE_CACHE_PATTERN)
        self.logger.info(f"Batch deleted {deleted} schedules")
        return deleted

    # Helpers

    def _get_schedule_or_404(self, schedule_id: int) -> Schedule:
        schedule = self.repository.get_by_id(schedule_id)
        if not schedule:
            raise NotFoundException(f"Schedule not found with id: {schedule_id}")
        return schedule

    def _get_user_or_404(self, user_id: int) -> User:
        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundException(f"User not found with id: {user_id}")
        return user

    def _resolve_references(
        self, room_id: int, user_id: int, course_id: int
    ) -> Tuple[Room, User, Course]:
        room = self.room_repository.get_by_id(room_id)
        if not room:
            raise NotFoundException(f"Room not found with id: {room_id}")

        user = self._get_user_or_404(user_id)

        course = self.course_repository.get_by_id(course_id)
        if not course:
            raise NotFoundException(f"Course not found with id: {course_id}")

        return room, user, course

    def _ensure_room_free(
        self,
        operation: str,
        room: Room,
        dates: Union[date, List[date]],
        start_time: time,
        end_time: time,
        exclude_schedule_id: Optional[int] = None,
    ) -> None:
        """Lock the room row, then raise if the window is taken on any of ``dates``."""
        self.conflict_checker_repository.lock_room(room.id)

        try:
            if isinstance(dates, list):
                self.conflict_checker.ensure_no_conflicts_for_dates(
                    room, dates, start_time, end_time
                )
            else:
                self.conflict_checker.ensure_no_conflicts(
                    room, dates, start_time, end_time, exclude_schedule_id
                )
        except ScheduleConflictException:
            prometheus_metrics.inc_schedule_conflict(operation)
            raise

    def _warn_missing(self, action: str, requested: List[int], found: List[Schedule]) -> None:
        if len(found) == len(requested):
            return
        found_ids = {schedule.id for schedule in found}
        missing = [schedule_id for schedule_id in requested if schedule_id not in found_ids]
        self.logger.warning(
            f"Some schedules were not found during batch {action}. "
            f"Requested: {len(requested)}, Found: {len(found)}, Missing: {missing}"
        )

    def _after_write(self, operation: str, count: int) -> None:
        self.invalidate_pattern(SCHEDULE_CACHE_PATTERN)
        prometheus_metrics.inc_schedules_written(operation, count)

    def _cache_get(self, key: str):
        if not self.cache:
            return None
        return self.cache.get(key)

    def _cache_set(self, key: str, value) -> None:
        if self.cache:
            self.cache.set(key, value, ttl=settings.cache_ttl_seconds)

    def _to_response(self, schedule: Schedule) -> ScheduleResponse:
        return self._to_responses([schedule])[0]

    def _to_responses(self, schedules: List[Schedule]) -> List[ScheduleResponse]:
        """
        Map schedules to responses, resolving audit names with one user lookup.

        Audit emails without a matching user fall back to the email itself.
        """
        emails = set()
        for schedule in schedules:
            emails.update(e for e in (schedule.created_by_email, schedule.updated_by_email) if e)
        names: Dict[str, str] = self.user_repository.get_names_by_emails(emails) if emails else {}

        def _name(email: Optional[str]) -> Optional[str]:
            if not email:
                return None
            return names.get(email, email)

        return [
            ScheduleResponse(
                id=schedule.id,
                room_id=schedule.room_id,
                room_number=schedule.room.room_number if schedule.room else None,
                user_id=schedule.user_id,
                user_name=schedule.user.name if schedule.user else None,
                date=schedule.date,
                start_time=schedule.start_time,
                end_time=schedule.end_time,
                course_id=schedule.course_id,
                course_code=schedule.course.course_code if schedule.course else None,
                course_description=schedule.course.description if schedule.course else None,
                status=schedule.status,
                creation_date=schedule.creation_date,
                last_updated=schedule.last_updated,
                created_by_email=schedule.created_by_email,
                created_by_name=_name(schedule.created_by_email),
                updated_by_email=schedule.updated_by_email,
                updated_by_name=_name(schedule.updated_by_email),
            )
            for schedule in schedules
        ]
