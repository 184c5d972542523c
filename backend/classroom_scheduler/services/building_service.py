# backend/classroom_scheduler/services/building_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.building import Building
from ..models.room import Room
from ..repositories import BaseRepository, RepositoryFactory
from ..schemas.room import BuildingCreate, BuildingResponse, BuildingUpdate
from .base import BaseService


class BuildingService(BaseService):
    def __init__(self, db: Session, repository: Optional[BaseRepository[Building]] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_base_repository(db, Building)
        self.room_repository = RepositoryFactory.create_base_repository(db, Room)

    @BaseService.measure_operation("list_buildings")
    def list_buildings(self) -> List[BuildingResponse]:
        return [BuildingResponse.model_validate(b) for b in self.repository.get_all()]

    @BaseService.measure_operation("get_building")
    def get_building(self, building_id: int) -> BuildingResponse:
        return BuildingResponse.model_validate(self._get_or_404(building_id))

    @BaseService.measure_operation("create_building")
    def create_building(self, data: BuildingCreate) -> BuildingResponse:
        with self.transaction():
            self._ensure_name_available(data.name)
            building = self.repository.create(name=data.name)
        self.log_operation("create_building", building_id=building.id)
        return BuildingResponse.model_validate(building)

    @BaseService.measure_operation("update_building")
    def update_building(self, building_id: int, data: BuildingUpdate) -> BuildingResponse:
        with self.transaction():
            building = self._get_or_404(building_id)
            self._ensure_name_available(data.name, exclude_id=building_id)
            building.name = data.name
            self.db.flush()
        return BuildingResponse.model_validate(building)

    @BaseService.measure_operation("delete_building")
    def delete_building(self, building_id: int) -> None:
        with self.transaction():
            self._get_or_404(building_id)
            if self.room_repository.exists(building_id=building_id):
                raise ConflictException(
                    f"Building {building_id} still has rooms and cannot be deleted"
                )
            self.repository.delete(building_id)

    def _get_or_404(self, building_id: int) -> Building:
        building = self.repository.get_by_id(building_id)
        if not building:
            raise NotFoundException(f"Building not found with id: {building_id}")
        return building

    def _ensure_name_available(self, name: str, exclude_id: Optional[int] = None) -> None:
        existing = self.repository.find_one_by(name=name)
        if existing and existing.id != exclude_id:
            raise ConflictException(f"Building already exists with name: {name}")
