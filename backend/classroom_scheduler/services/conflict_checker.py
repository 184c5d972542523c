# backend/classroom_scheduler/services/conflict_checker.py
"""
Conflict Checker Service for the classroom scheduler.

Detects room double-booking. Two schedules conflict when they share a
room and date and their ``[start, end)`` windows overlap strictly, so a
class ending at 10:00 and another starting at 10:00 do not conflict.
Only PENDING and APPROVED schedules occupy a room.
"""

from collections import defaultdict
from datetime import date, time
import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ScheduleConflictException
from ..models.room import Room
from ..models.schedule import Schedule
from ..repositories import RepositoryFactory
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from .base import BaseService

logger = logging.getLogger(__name__)


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """Strict half-open overlap test; touching endpoints do not overlap."""
    return start_a < end_b and start_b < end_a


def format_time_12h(value: time) -> str:
    """Render a time as ``9:05 AM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_date_short(value: date) -> str:
    """Render a date as ``Jan 8, 2024``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def describe_conflict(schedule: Schedule) -> str:
    course = schedule.course
    user = schedule.user
    course_code = course.course_code if course else "Unknown course"
    course_description = course.description if course else ""
    assigned_to = user.name if user else "unknown user"
    return (
        f"{format_date_short(schedule.date)} from {format_time_12h(schedule.start_time)} "
        f"to {format_time_12h(schedule.end_time)} for {course_code} - {course_description} "
        f"(assigned to {assigned_to})"
    )


def format_conflict_message(room_number: str, conflicts: Iterable[Schedule]) -> str:
    """
    Build the user-facing conflict message.

    One bullet line per conflicting schedule, ordered by date then start time.
    """
    ordered = sorted(conflicts, key=lambda s: (s.date, s.start_time, s.id or 0))
    lines = [f"Room {room_number} has scheduling conflicts:"]
    lines.extend(f"• {describe_conflict(schedule)}" for schedule in ordered)
    return "\n".join(lines)


def conflict_details(conflicts: Iterable[Schedule]) -> List[Dict[str, Any]]:
    ordered = sorted(conflicts, key=lambda s: (s.date, s.start_time, s.id or 0))
    return [
        {
            "schedule_id": schedule.id,
            "date": schedule.date.isoformat(),
            "start_time": schedule.start_time.strftime("%H:%M"),
            "end_time": schedule.end_time.strftime("%H:%M"),
            "course_code": schedule.course.course_code if schedule.course else None,
            "course_description": schedule.course.description if schedule.course else None,
            "assigned_to": schedule.user.name if schedule.user else None,
            "status": schedule.status,
        }
        for schedule in ordered
    ]


class ConflictChecker(BaseService):
    """
    Service for checking room conflicts.

    Lookups go through ``ConflictCheckerRepository``; the overlap rule is
    applied in memory.
    """

    def __init__(self, db: Session, repository: Optional[ConflictCheckerRepository] = None):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)

    @BaseService.measure_operation("check_schedule_conflicts")
    def check_schedule_conflicts(
        self,
        room_id: int,
        check_date: date,
        start_time: time,
        end_time: time,
        exclude_schedule_id: Optional[int] = None,
    ) -> List[Schedule]:
        """
        Return the blocking schedules that overlap the window on one date.

        Args:
            room_id: The room to check
            check_date: The date to check
            start_time: Start of the requested window
            end_time: End of the requested window
            exclude_schedule_id: Schedule to ignore (the one being updated)

        Returns:
            Conflicting schedules ordered by start time
        """
        candidates = self.repository.get_schedules_for_conflict_check(
            room_id, check_date, exclude_schedule_id
        )

        conflicts = [
            schedule
            for schedule in candidates
            if schedule.id != exclude_schedule_id
            and intervals_overlap(start_time, end_time, schedule.start_time, schedule.end_time)
        ]

        if conflicts:
            self.logger.warning(
                f"Found {len(conflicts)} schedule conflicts for room {room_id} "
                f"on {check_date} between {start_time}-{end_time}"
            )

        return conflicts

    def has_conflict(
        self,
        room_id: int,
        check_date: date,
        start_time: time,
        end_time: time,
        exclude_schedule_id: Optional[int] = None,
    ) -> bool:
        return bool(
            self.check_schedule_conflicts(
                room_id, check_date, start_time, end_time, exclude_schedule_id
            )
        )

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        room_id: int,
        dates: Iterable[date],
        start_time: time,
        end_time: time,
    ) -> Dict[date, List[Schedule]]:
        """
        Check the same window across many dates with a single query.

        Returns:
            Mapping of each conflicting date to its conflicting schedules,
            in date order. Dates without conflicts are absent.
        """
        date_list = sorted(set(dates))
        candidates = self.repository.get_schedules_for_dates(room_id, date_list)

        by_date: Dict[date, List[Schedule]] = defaultdict(list)
        for schedule in candidates:
            if intervals_overlap(start_time, end_time, schedule.start_time, schedule.end_time):
                by_date[schedule.date].append(schedule)

        result = {
            conflict_date: sorted(by_date[conflict_date], key=lambda s: s.start_time)
            for conflict_date in date_list
            if by_date.get(conflict_date)
        }

        if result:
            total = sum(len(items) for items in result.values())
            self.logger.warning(
                f"Found {total} schedule conflicts for room {room_id} across "
                f"{len(result)} of {len(date_list)} dates between {start_time}-{end_time}"
            )

        return result

    def ensure_no_conflicts(
        self,
        room: Room,
        check_date: date,
        start_time: time,
        end_time: time,
        exclude_schedule_id: Optional[int] = None,
    ) -> None:
        """
        Raise ScheduleConflictException if the window is taken on ``check_date``.
        """
        conflicts = self.check_schedule_conflicts(
            room.id, check_date, start_time, end_time, exclude_schedule_id
        )
        if conflicts:
            raise self._conflict_error(room, conflicts)

    def ensure_no_conflicts_for_dates(
        self,
        room: Room,
        dates: Iterable[date],
        start_time: time,
        end_time: time,
    ) -> None:
        """
        Raise ScheduleConflictException listing every conflict across ``dates``.
        """
        conflicts_by_date = self.find_conflicts(room.id, dates, start_time, end_time)
        if conflicts_by_date:
            all_conflicts = [s for items in conflicts_by_date.values() for s in items]
            raise self._conflict_error(room, all_conflicts)

    def _conflict_error(self, room: Room, conflicts: List[Schedule]) -> ScheduleConflictException:
        return ScheduleConflictException(
            format_conflict_message(room.room_number, conflicts),
            details={
                "room_id": room.id,
                "room_number": room.room_number,
                "conflicts": conflict_details(conflicts),
            },
        )
