# backend/classroom_scheduler/repositories/room_repository.py
from datetime import date, time
import logging
from typing import List, cast

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.room import Room
from ..models.schedule import BLOCKING_STATUSES, Schedule
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RoomRepository(BaseRepository[Room]):
    def __init__(self, db: Session):
        super().__init__(db, Room)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Room.building))

    def find_available(self, target_date: date, start_time: time, end_time: time) -> List[Room]:
        """
        Rooms with no blocking schedule overlapping ``[start_time, end_time)`` on the date.

        Uses the same strict overlap rule as conflict checking, so a booking
        that ends exactly at ``start_time`` leaves the room available.
        """
        try:
            busy_room_ids = (
                select(Schedule.room_id)
                .where(
                    and_(
                        Schedule.date == target_date,
                        Schedule.status.in_(BLOCKING_STATUSES),
                        Schedule.start_time < end_time,
                        Schedule.end_time > start_time,
                    )
                )
                .distinct()
            )
            return cast(
                List[Room],
                self._apply_eager_loading(self.db.query(Room))
                .filter(Room.id.notin_(busy_room_ids))
                .order_by(Room.room_number)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding available rooms: {str(e)}")
            raise RepositoryException(f"Failed to find available rooms: {str(e)}")
