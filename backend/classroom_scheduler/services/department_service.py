# backend/classroom_scheduler/services/department_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.academic import Department, Program
from ..repositories import RepositoryFactory
from ..repositories.academic_repository import DepartmentRepository
from ..schemas.academic import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from .base import BaseService


class DepartmentService(BaseService):
    def __init__(self, db: Session, repository: Optional[DepartmentRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_department_repository(db)
        self.program_repository = RepositoryFactory.create_base_repository(db, Program)

    @BaseService.measure_operation("list_departments")
    def list_departments(self) -> List[DepartmentResponse]:
        return [DepartmentResponse.model_validate(d) for d in self.repository.get_all()]

    @BaseService.measure_operation("get_department")
    def get_department(self, department_id: int) -> DepartmentResponse:
        return DepartmentResponse.model_validate(self._get_or_404(department_id))

    @BaseService.measure_operation("create_department")
    def create_department(self, data: DepartmentCreate) -> DepartmentResponse:
        with self.transaction():
            self._ensure_name_available(data.name)
            department = self.repository.create(name=data.name)
        return DepartmentResponse.model_validate(department)

    @BaseService.measure_operation("update_department")
    def update_department(self, department_id: int, data: DepartmentUpdate) -> DepartmentResponse:
        with self.transaction():
            department = self._get_or_404(department_id)
            self._ensure_name_available(data.name, exclude_id=department_id)
            department.name = data.name
            self.db.flush()
        return DepartmentResponse.model_validate(department)

    @BaseService.measure_operation("delete_department")
    def delete_department(self, department_id: int) -> None:
        with self.transaction():
            self._get_or_404(department_id)
            if self.program_repository.exists(department_id=department_id):
                raise ConflictException(
                    f"Department {department_id} still has programs and cannot be deleted"
                )
            self.repository.delete(department_id)

    def _get_or_404(self, department_id: int) -> Department:
        department = self.repository.get_by_id(department_id)
        if not department:
            raise NotFoundException(f"Department not found with id: {department_id}")
        return department

    def _ensure_name_available(self, name: str, exclude_id: Optional[int] = None) -> None:
        existing = self.repository.find_one_by(name=name)
        if existing and existing.id != exclude_id:
            raise ConflictException(f"Department already exists with name: {name}")
