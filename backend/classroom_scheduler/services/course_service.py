# backend/classroom_scheduler/services/course_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.academic import Course, Program
from ..models.schedule import Schedule
from ..repositories import RepositoryFactory
from ..repositories.academic_repository import CourseRepository
from ..schemas.academic import CourseCreate, CourseResponse, CourseUpdate
from .base import BaseService
from .cache_service import SCHEDULE_CACHE_PATTERN, CacheService


class CourseService(BaseService):
    def __init__(
        self,
        db: Session,
        cache: Optional[CacheService] = None,
        repository: Optional[CourseRepository] = None,
    ):
        super().__init__(db, cache)
        self.repository = repository or RepositoryFactory.create_course_repository(db)
        self.program_repository = RepositoryFactory.create_program_repository(db)
        self.schedule_repository = RepositoryFactory.create_base_repository(db, Schedule)

    @BaseService.measure_operation("list_courses")
    def list_courses(self) -> List[CourseResponse]:
        return [CourseResponse.from_course(c) for c in self.repository.get_all()]

    @BaseService.measure_operation("get_course")
    def get_course(self, course_id: int) -> CourseResponse:
        return CourseResponse.from_course(self._get_or_404(course_id))

    @BaseService.measure_operation("get_courses_by_program")
    def get_courses_by_program(self, program_id: int) -> List[CourseResponse]:
        self._get_program_or_404(program_id)
        return [CourseResponse.from_course(c) for c in self.repository.find_by(program_id=program_id)]

    @BaseService.measure_operation("create_course")
    def create_course(self, data: CourseCreate) -> CourseResponse:
        with self.transaction():
            program = self._get_program_or_404(data.program_id)
            self._ensure_code_available(data.course_code)
            course = self.repository.create(
                course_code=data.course_code, description=data.description, program=program
            )
        return CourseResponse.from_course(course)

    @BaseService.measure_operation("update_course")
    def update_course(self, course_id: int, data: CourseUpdate) -> CourseResponse:
        with self.transaction():
            course = self._get_or_404(course_id)
            program = self._get_program_or_404(data.program_id)
            self._ensure_code_available(data.course_code, exclude_id=course_id)

            course.course_code = data.course_code
            course.description = data.description
            course.program = program
            self.db.flush()
        self.invalidate_pattern(SCHEDULE_CACHE_PATTERN)
        return CourseResponse.from_course(course)

    @BaseService.measure_operation("delete_course")
    def delete_course(self, course_id: int) -> None:
        with self.transaction():
            self._get_or_404(course_id)
            if self.schedule_repository.exists(course_id=course_id):
                raise ConflictException(f"Course {course_id} has schedules and cannot be deleted")
            self.repository.delete(course_id)

    def _get_or_404(self, course_id: int) -> Course:
        course = self.repository.get_by_id(course_id)
        if not course:
            raise NotFoundException(f"Course not found with id: {course_id}")
        return course

    def _get_program_or_404(self, program_id: int) -> Program:
        program = self.program_repository.get_by_id(program_id)
        if not program:
            raise NotFoundException(f"Program not found with id: {program_id}")
        return program

    def _ensure_code_available(self, course_code: str, exclude_id: Optional[int] = None) -> None:
        existing = self.repository.find_one_by(course_code=course_code)
        if existing and existing.id != exclude_id:
            raise ConflictException(f"Course already exists with code: {course_code}")
