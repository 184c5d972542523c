# backend/classroom_scheduler/repositories/schedule_repository.py
"""
Schedule Repository for the classroom scheduler.

Read and bulk-write queries for schedules. Every read eager-loads the
room, user and course so response mapping never triggers lazy loads.
"""

from datetime import date
import logging
from typing import List, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.schedule import Schedule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ScheduleRepository(BaseRepository[Schedule]):
    def __init__(self, db: Session):
        super().__init__(db, Schedule)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(Schedule.room),
            joinedload(Schedule.user),
            joinedload(Schedule.course),
        )

    def get_by_date(self, target_date: date) -> List[Schedule]:
        """All schedules on a date, across rooms, ordered by room and start time."""
        try:
            return cast(
                List[Schedule],
                self._apply_eager_loading(self.db.query(Schedule))
                .filter(Schedule.date == target_date)
                .order_by(Schedule.room_id, Schedule.start_time, Schedule.id)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting schedules for {target_date}: {str(e)}")
            raise RepositoryException(f"Failed to get schedules by date: {str(e)}")

    def get_by_user(self, user_id: int) -> List[Schedule]:
        """All schedules assigned to a user, in chronological order."""
        try:
            return cast(
                List[Schedule],
                self._apply_eager_loading(self.db.query(Schedule))
                .filter(Schedule.user_id == user_id)
                .order_by(Schedule.date, Schedule.start_time, Schedule.id)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting schedules for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get schedules by user: {str(e)}")
