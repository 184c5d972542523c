# backend/classroom_scheduler/schemas/academic.py
"""Schemas for departments, programs and courses."""

from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class DepartmentCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=150)

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return v.strip()


class DepartmentUpdate(DepartmentCreate):
    pass


class DepartmentResponse(StandardizedModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProgramCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=150)
    code: str = Field(..., min_length=1, max_length=20)
    department_id: int = Field(..., gt=0)

    @field_validator("name", "code")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class ProgramUpdate(ProgramCreate):
    pass


class ProgramResponse(StandardizedModel):
    id: int
    name: str
    code: str
    department_id: int
    department_name: Optional[str] = None

    @classmethod
    def from_program(cls, program) -> "ProgramResponse":
        return cls(
            id=program.id,
            name=program.name,
            code=program.code,
            department_id=program.department_id,
            department_name=program.department.name if program.department else None,
        )


class CourseCreate(StrictRequestModel):
    course_code: str = Field(..., min_length=1, max_length=20)
    description: str = Field(..., min_length=1)
    program_id: int = Field(..., gt=0)

    @field_validator("course_code", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class CourseUpdate(CourseCreate):
    pass


class CourseResponse(StandardizedModel):
    id: int
    course_code: str
    description: str
    program_id: int
    program_name: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None

    @classmethod
    def from_course(cls, course) -> "CourseResponse":
        program = course.program
        department = program.department if program else None
        return cls(
            id=course.id,
            course_code=course.course_code,
            description=course.description,
            program_id=course.program_id,
            program_name=program.name if program else None,
            department_id=department.id if department else None,
            department_name=department.name if department else None,
        )
