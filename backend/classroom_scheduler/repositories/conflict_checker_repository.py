# backend/classroom_scheduler/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for the classroom scheduler.

Loads the schedules that can collide with a requested room booking. Only
PENDING and APPROVED schedules occupy a room; REJECTED ones are ignored.
"""

from datetime import date
import logging
from typing import Iterable, List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.room import Room
from ..models.schedule import BLOCKING_STATUSES, Schedule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Schedule]):
    """Repository for conflict checking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Schedule)
        self.logger = logging.getLogger(__name__)

    def _blocking_query(self, room_id: int):
        return (
            self.db.query(Schedule)
            .options(
                joinedload(Schedule.room),
                joinedload(Schedule.user),
                joinedload(Schedule.course),
            )
            .filter(
                Schedule.room_id == room_id,
                Schedule.status.in_(BLOCKING_STATUSES),
            )
        )

    def get_schedules_for_conflict_check(
        self, room_id: int, check_date: date, exclude_schedule_id: Optional[int] = None
    ) -> List[Schedule]:
        """
        Get blocking schedules for a room on a specific date.

        Args:
            room_id: The room to check
            check_date: The date to check for conflicts
            exclude_schedule_id: Optional schedule ID to leave out (the one being edited)

        Returns:
            Schedules ordered by start time, with room, user and course loaded
        """
        try:
            query = self._blocking_query(room_id).filter(Schedule.date == check_date)

            if exclude_schedule_id is not None:
                query = query.filter(Schedule.id != exclude_schedule_id)

            return cast(List[Schedule], query.order_by(Schedule.start_time).all())

        except SQLAlchemyError as e:
            self.logger.error(f"Error getting schedules for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get conflict schedules: {str(e)}")

    def get_schedules_for_dates(self, room_id: int, dates: Iterable[date]) -> List[Schedule]:
        """
        Get blocking schedules for a room across many dates in one query.

        Returns:
            Schedules ordered by date and start time
        """
        date_list = list(dates)
        if not date_list:
            return []

        try:
            return cast(
                List[Schedule],
                self._blocking_query(room_id)
                .filter(Schedule.date.in_(date_list))
                .order_by(Schedule.date, Schedule.start_time)
                .all(),
            )

        except SQLAlchemyError as e:
            self.logger.error(f"Error getting schedules for dates: {str(e)}")
            raise RepositoryException(f"Failed to get schedules for dates: {str(e)}")

    def lock_room(self, room_id: int) -> Optional[Room]:
        """
        Lock the room row for the rest of the transaction.

        Writers for the same room serialise on this lock so the conflict
        check and the insert see a consistent view. Backends without row
        locks (SQLite) ignore the clause.
        """
        try:
            return cast(
                Optional[Room],
                self.db.query(Room).filter(Room.id == room_id).with_for_update().first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error locking room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to lock room: {str(e)}")
