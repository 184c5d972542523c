# backend/tests/conftest.py
"""
Pytest configuration for the classroom scheduler.

Tests run against an in-memory SQLite database that is created and
dropped around every test. Caching is disabled so no state leaks between
tests through the process-wide cache service.
"""

import os

# CRITICAL: Set testing mode BEFORE any app imports!
os.environ["IS_TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ.pop("REDIS_URL", None)

from datetime import date, time
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from classroom_scheduler import models  # noqa: F401
from classroom_scheduler.api.dependencies.database import get_db
from classroom_scheduler.core.config import settings
from classroom_scheduler.database import Base, SessionLocal, engine
from classroom_scheduler.main import app
from classroom_scheduler.models import (
    Building,
    Course,
    Department,
    Program,
    Room,
    Schedule,
    ScheduleStatus,
    User,
    UserRole,
)
from classroom_scheduler.services.base import BaseService

settings.is_testing = True
settings.cache_enabled = False

# Monday
TEST_DATE = date(2024, 1, 8)


@pytest.fixture(scope="function")
def db():
    """
    Create a new database session for each test.

    Tables are created before and dropped after the test, so every test
    starts from an empty schema.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session):
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture(autouse=True)
def clear_service_metrics():
    BaseService._class_metrics.clear()
    yield


@pytest.fixture
def building(db: Session) -> Building:
    building = Building(name="Science Hall")
    db.add(building)
    db.commit()
    return building


@pytest.fixture
def room(db: Session, building: Building) -> Room:
    room = Room(
        room_number="SH-101",
        building_id=building.id,
        capacity=40,
        has_projector=True,
        has_computers=False,
    )
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def second_room(db: Session, building: Building) -> Room:
    room = Room(room_number="SH-102", building_id=building.id, capacity=25)
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def department(db: Session) -> Department:
    department = Department(name="Computer Science")
    db.add(department)
    db.commit()
    return department


@pytest.fixture
def program(db: Session, department: Department) -> Program:
    program = Program(name="BSc Computer Science", code="BSCS", department_id=department.id)
    db.add(program)
    db.commit()
    return program


@pytest.fixture
def course(db: Session, program: Program) -> Course:
    course = Course(course_code="CS101", description="Intro to Programming", program_id=program.id)
    db.add(course)
    db.commit()
    return course


@pytest.fixture
def admin_user(db: Session) -> User:
    user = User(name="Ada Admin", email="admin@college.edu", role=UserRole.ADMIN.value)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def faculty_user(db: Session) -> User:
    user = User(name="Grace Hopper", email="grace@college.edu", role=UserRole.FACULTY.value)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def schedule(db: Session, room: Room, faculty_user: User, course: Course) -> Schedule:
    """An existing PENDING schedule: TEST_DATE 09:00-10:00 in ``room``."""
    schedule = Schedule(
        room_id=room.id,
        user_id=faculty_user.id,
        course_id=course.id,
        date=TEST_DATE,
        start_time=time(9, 0),
        end_time=time(10, 0),
        status=ScheduleStatus.PENDING.value,
        created_by_email=faculty_user.email,
        updated_by_email=faculty_user.email,
    )
    db.add(schedule)
    db.commit()
    return schedule


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    return Mock(spec=Session)
