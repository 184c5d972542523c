# backend/classroom_scheduler/services/program_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.academic import Course, Department, Program
from ..repositories import RepositoryFactory
from ..repositories.academic_repository import ProgramRepository
from ..schemas.academic import ProgramCreate, ProgramResponse, ProgramUpdate
from .base import BaseService


class ProgramService(BaseService):
    def __init__(self, db: Session, repository: Optional[ProgramRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_program_repository(db)
        self.department_repository = RepositoryFactory.create_department_repository(db)
        self.course_repository = RepositoryFactory.create_base_repository(db, Course)

    @BaseService.measure_operation("list_programs")
    def list_programs(self) -> List[ProgramResponse]:
        return [ProgramResponse.from_program(p) for p in self.repository.get_all()]

    @BaseService.measure_operation("get_program")
    def get_program(self, program_id: int) -> ProgramResponse:
        return ProgramResponse.from_program(self._get_or_404(program_id))

    @BaseService.measure_operation("get_programs_by_department")
    def get_programs_by_department(self, department_id: int) -> List[ProgramResponse]:
        self._get_department_or_404(department_id)
        programs = self.repository.find_by(department_id=department_id)
        return [ProgramResponse.from_program(p) for p in programs]

    @BaseService.measure_operation("create_program")
    def create_program(self, data: ProgramCreate) -> ProgramResponse:
        with self.transaction():
            department = self._get_department_or_404(data.department_id)
            self._ensure_code_available(data.code)
            program = self.repository.create(name=data.name, code=data.code, department=department)
        return ProgramResponse.from_program(program)

    @BaseService.measure_operation("update_program")
    def update_program(self, program_id: int, data: ProgramUpdate) -> ProgramResponse:
        with self.transaction():
            program = self._get_or_404(program_id)
            department = self._get_department_or_404(data.department_id)
            self._ensure_code_available(data.code, exclude_id=program_id)

            program.name = data.name
            program.code = data.code
            program.department = department
            self.db.flush()
        return ProgramResponse.from_program(program)

    @BaseService.measure_operation("delete_program")
    def delete_program(self, program_id: int) -> None:
        with self.transaction():
            self._get_or_404(program_id)
            if self.course_repository.exists(program_id=program_id):
                raise ConflictException(
                    f"Program {program_id} still has courses and cannot be deleted"
                )
            self.repository.delete(program_id)

    def _get_or_404(self, program_id: int) -> Program:
        program = self.repository.get_by_id(program_id)
        if not program:
            raise NotFoundException(f"Program not found with id: {program_id}")
        return program

    def _get_department_or_404(self, department_id: int) -> Department:
        department = self.department_repository.get_by_id(department_id)
        if not department:
            raise NotFoundException(f"Department not found with id: {department_id}")
        return department

    def _ensure_code_available(self, code: str, exclude_id: Optional[int] = None) -> None:
        existing = self.repository.find_one_by(code=code)
        if existing and existing.id != exclude_id:
            raise ConflictException(f"Program already exists with code: {code}")
