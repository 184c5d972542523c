# backend/classroom_scheduler/services/room_service.py
"""
Room Service for the classroom scheduler.

CRUD for rooms plus the availability search used when picking a room
for a new schedule.
"""

from datetime import date, time
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException, ValidationException
from ..models.building import Building
from ..models.room import Room
from ..models.schedule import Schedule
from ..repositories import RepositoryFactory
from ..repositories.room_repository import RoomRepository
from ..schemas.room import RoomCreate, RoomResponse, RoomUpdate
from .base import BaseService
from .cache_service import SCHEDULE_CACHE_PATTERN, CacheService


class RoomService(BaseService):
    def __init__(
        self,
        db: Session,
        cache: Optional[CacheService] = None,
        repository: Optional[RoomRepository] = None,
    ):
        super().__init__(db, cache)
        self.repository = repository or RepositoryFactory.create_room_repository(db)
        self.building_repository = RepositoryFactory.create_base_repository(db, Building)
        self.schedule_repository = RepositoryFactory.create_base_repository(db, Schedule)

    @BaseService.measure_operation("list_rooms")
    def list_rooms(self) -> List[RoomResponse]:
        return [RoomResponse.from_room(room) for room in self.repository.get_all()]

    @BaseService.measure_operation("get_room")
    def get_room(self, room_id: int) -> RoomResponse:
        return RoomResponse.from_room(self._get_or_404(room_id))

    @BaseService.measure_operation("create_room")
    def create_room(self, data: RoomCreate) -> RoomResponse:
        with self.transaction():
            building = self._get_building_or_404(data.building_id)
            self._ensure_number_available(data.room_number)
            room = self.repository.create(
                room_number=data.room_number,
                building=building,
                capacity=data.capacity,
                has_projector=data.has_projector,
                has_computers=data.has_computers,
            )
        self.log_operation("create_room", room_id=room.id, room_number=room.room_number)
        return RoomResponse.from_room(room)

    @BaseService.measure_operation("update_room")
    def update_room(self, room_id: int, data: RoomUpdate) -> RoomResponse:
        with self.transaction():
            room = self._get_or_404(room_id)
            building = self._get_building_or_404(data.building_id)
            self._ensure_number_available(data.room_number, exclude_id=room_id)

            room.room_number = data.room_number
            room.building = building
            room.capacity = data.capacity
            room.has_projector = data.has_projector
            room.has_computers = data.has_computers
            self.db.flush()
        self.invalidate_pattern(SCHEDULE_CACHE_PATTERN)
        return RoomResponse.from_room(room)

    @BaseService.measure_operation("delete_room")
    def delete_room(self, room_id: int) -> None:
        with self.transaction():
            self._get_or_404(room_id)
            if self.schedule_repository.exists(room_id=room_id):
                raise ConflictException(f"Room {room_id} has schedules and cannot be deleted")
            self.repository.delete(room_id)

    @BaseService.measure_operation("find_available_rooms")
    def find_available_rooms(
        self, target_date: date, start_time: time, end_time: time
    ) -> List[RoomResponse]:
        """
        Rooms free for the whole ``[start_time, end_time)`` window on ``target_date``.

        Raises:
            ValidationException: If the window is empty or inverted
        """
        if end_time <= start_time:
            raise ValidationException("End time must be after start time")

        rooms = self.repository.find_available(target_date, start_time, end_time)
        self.logger.debug(
            f"{len(rooms)} rooms available on {target_date} between {start_time}-{end_time}"
        )
        return [RoomResponse.from_room(room) for room in rooms]

    def _get_or_404(self, room_id: int) -> Room:
        room = self.repository.get_by_id(room_id)
        if not room:
            raise NotFoundException(f"Room not found with id: {room_id}")
        return room

    def _get_building_or_404(self, building_id: int) -> Building:
        building = self.building_repository.get_by_id(building_id)
        if not building:
            raise NotFoundException(f"Building not found with id: {building_id}")
        return building

    def _ensure_number_available(self, room_number: str, exclude_id: Optional[int] = None) -> None:
        existing = self.repository.find_one_by(room_number=room_number)
        if existing and existing.id != exclude_id:
            raise ConflictException(f"Room already exists with number: {room_number}")
