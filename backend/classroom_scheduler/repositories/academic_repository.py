# backend/classroom_scheduler/repositories/academic_repository.py
"""Repositories for the academic catalog: departments, programs and courses."""

from sqlalchemy.orm import Query, Session, joinedload

from ..models.academic import Course, Department, Program
from .base_repository import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    def __init__(self, db: Session):
        super().__init__(db, Department)


class ProgramRepository(BaseRepository[Program]):
    def __init__(self, db: Session):
        super().__init__(db, Program)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Program.department))


class CourseRepository(BaseRepository[Course]):
    def __init__(self, db: Session):
        super().__init__(db, Course)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Course.program).joinedload(Program.department))
