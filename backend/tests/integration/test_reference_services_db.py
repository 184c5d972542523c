# backend/tests/integration/test_reference_services_db.py
"""CRUD services for buildings, rooms, departments, programs, courses and users."""

from datetime import date, time

import pytest

from classroom_scheduler.core.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from classroom_scheduler.models import ScheduleStatus
from classroom_scheduler.schemas.academic import CourseCreate, DepartmentCreate, ProgramCreate
from classroom_scheduler.schemas.room import BuildingCreate, RoomCreate, RoomUpdate
from classroom_scheduler.schemas.user import UserCreate
from classroom_scheduler.services import (
    BuildingService,
    CourseService,
    DepartmentService,
    ProgramService,
    RoomService,
    UserService,
)

MONDAY = date(2024, 1, 8)


class TestBuildingService:
    def test_create_and_list(self, db):
        service = BuildingService(db)

        created = service.create_building(BuildingCreate(name="  Library  "))

        assert created.name == "Library"
        assert [b.name for b in service.list_buildings()] == ["Library"]

    def test_duplicate_name(self, db, building):
        with pytest.raises(ConflictException, match="Building already exists with name: Science Hall"):
            BuildingService(db).create_building(BuildingCreate(name="Science Hall"))

    def test_cannot_delete_building_with_rooms(self, db, room):
        with pytest.raises(ConflictException):
            BuildingService(db).delete_building(room.building_id)


class TestRoomService:
    def test_create_room_in_unknown_building(self, db):
        with pytest.raises(NotFoundException, match="Building not found with id: 77"):
            RoomService(db).create_room(RoomCreate(room_number="X-1", building_id=77))

    def test_update_room_keeps_number_uniqueness(self, db, room, second_room, building):
        service = RoomService(db)

        with pytest.raises(ConflictException):
            service.update_room(
                second_room.id, RoomUpdate(room_number="SH-101", building_id=building.id)
            )

        renamed = service.update_room(
            room.id,
            RoomUpdate(room_number="SH-101", building_id=building.id, capacity=55),
        )
        assert renamed.capacity == 55
        assert renamed.building_name == "Science Hall"

    def test_cannot_delete_room_with_schedules(self, db, schedule):
        with pytest.raises(ConflictException):
            RoomService(db).delete_room(schedule.room_id)

    def test_delete_room(self, db, second_room):
        service = RoomService(db)

        service.delete_room(second_room.id)

        with pytest.raises(NotFoundException):
            service.get_room(second_room.id)


class TestFindAvailableRooms:
    def test_busy_room_is_excluded(self, db, schedule, second_room):
        rooms = RoomService(db).find_available_rooms(MONDAY, time(9, 30), time(10, 30))

        assert [r.room_number for r in rooms] == ["SH-102"]

    def test_touching_window_leaves_room_available(self, db, schedule, second_room):
        rooms = RoomService(db).find_available_rooms(MONDAY, time(10, 0), time(11, 0))

        assert [r.room_number for r in rooms] == ["SH-101", "SH-102"]

    def test_rejected_schedule_frees_room(self, db, schedule, second_room):
        schedule.status = ScheduleStatus.REJECTED.value
        db.commit()

        rooms = RoomService(db).find_available_rooms(MONDAY, time(9, 0), time(10, 0))

        assert [r.room_number for r in rooms] == ["SH-101", "SH-102"]

    def test_other_dates_are_ignored(self, db, schedule):
        rooms = RoomService(db).find_available_rooms(date(2024, 1, 9), time(9, 0), time(10, 0))

        assert [r.room_number for r in rooms] == ["SH-101"]

    def test_inverted_window_is_invalid(self, db):
        with pytest.raises(ValidationException):
            RoomService(db).find_available_rooms(MONDAY, time(11, 0), time(10, 0))


class TestAcademicServices:
    def test_program_hierarchy(self, db):
        department = DepartmentService(db).create_department(DepartmentCreate(name="Mathematics"))
        program = ProgramService(db).create_program(
            ProgramCreate(name="BSc Mathematics", code="BSMA", department_id=department.id)
        )
        course = CourseService(db).create_course(
            CourseCreate(course_code="MA101", description="Calculus I", program_id=program.id)
        )

        assert program.department_name == "Mathematics"
        assert course.program_name == "BSc Mathematics"
        assert course.department_name == "Mathematics"
        assert [p.code for p in ProgramService(db).get_programs_by_department(department.id)] == [
            "BSMA"
        ]
        assert [c.course_code for c in CourseService(db).get_courses_by_program(program.id)] == [
            "MA101"
        ]

    def test_filtered_lists_404_for_unknown_parent(self, db):
        with pytest.raises(NotFoundException, match="Department not found with id: 5"):
            ProgramService(db).get_programs_by_department(5)
        with pytest.raises(NotFoundException, match="Program not found with id: 6"):
            CourseService(db).get_courses_by_program(6)

    def test_duplicate_course_code(self, db, course, program):
        with pytest.raises(ConflictException, match="Course already exists with code: CS101"):
            CourseService(db).create_course(
                CourseCreate(course_code="CS101", description="Again", program_id=program.id)
            )

    def test_cannot_delete_course_in_use(self, db, schedule):
        with pytest.raises(ConflictException):
            CourseService(db).delete_course(schedule.course_id)

    def test_cannot_delete_department_with_programs(self, db, program):
        with pytest.raises(ConflictException):
            DepartmentService(db).delete_department(program.department_id)


class TestUserService:
    def test_create_and_lookup_by_email(self, db):
        service = UserService(db)

        created = service.create_user(UserCreate(name="Alan Turing", email="alan@college.edu"))

        assert created.role == "FACULTY"
        assert service.get_user_by_email("alan@college.edu").id == created.id
        assert service.find_by_email("nobody@college.edu") is None

    def test_duplicate_email(self, db, faculty_user):
        with pytest.raises(ConflictException):
            UserService(db).create_user(UserCreate(name="Copy", email=faculty_user.email))

    def test_unknown_user(self, db):
        with pytest.raises(NotFoundException, match="User not found with id: 3"):
            UserService(db).get_user(3)
