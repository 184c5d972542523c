# backend/classroom_scheduler/models/academic.py
"""
Academic catalog models.

Departments own programs, and programs own courses. Schedules reference
courses directly.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False, unique=True)

    programs = relationship("Program", back_populates="department")

    def __repr__(self) -> str:
        return f"<Department {self.id}: {self.name}>"


class Program(Base):
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    code = Column(String(20), nullable=False, unique=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False, index=True)

    department = relationship("Department", back_populates="programs")
    courses = relationship("Course", back_populates="program")

    def __repr__(self) -> str:
        return f"<Program {self.id}: {self.code} {self.name}>"


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String(20), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)

    program = relationship("Program", back_populates="courses")

    def __repr__(self) -> str:
        return f"<Course {self.id}: {self.course_code}>"
