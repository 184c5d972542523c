# backend/tests/integration/api/test_reference_routes.py
"""HTTP behaviour of the reference-data routes, health and metrics."""


class TestRoomRoutes:
    def test_crud(self, client, building):
        created = client.post(
            "/api/v1/rooms",
            json={"room_number": "LAB-1", "building_id": building.id, "capacity": 20},
        )
        assert created.status_code == 201
        room_id = created.json()["id"]

        assert client.get(f"/api/v1/rooms/{room_id}").json()["building_name"] == "Science Hall"

        updated = client.put(
            f"/api/v1/rooms/{room_id}",
            json={"room_number": "LAB-1", "building_id": building.id, "capacity": 24},
        )
        assert updated.json()["capacity"] == 24

        assert client.delete(f"/api/v1/rooms/{room_id}").status_code == 204
        assert client.get(f"/api/v1/rooms/{room_id}").status_code == 404

    def test_duplicate_room_number_is_409(self, client, room, building):
        response = client.post(
            "/api/v1/rooms", json={"room_number": room.room_number, "building_id": building.id}
        )

        assert response.status_code == 409

    def test_available_rooms(self, client, schedule, second_room):
        response = client.get(
            "/api/v1/rooms/available",
            params={"date": "2024-01-08", "start_time": "09:00", "end_time": "10:00"},
        )

        assert response.status_code == 200
        assert [r["room_number"] for r in response.json()] == ["SH-102"]


class TestAcademicRoutes:
    def test_department_program_course_chain(self, client):
        department = client.post("/api/v1/departments", json={"name": "Physics"}).json()
        program = client.post(
            "/api/v1/programs",
            json={"name": "BSc Physics", "code": "BSPH", "department_id": department["id"]},
        ).json()
        course = client.post(
            "/api/v1/courses",
            json={"course_code": "PH101", "description": "Mechanics", "program_id": program["id"]},
        )

        assert course.status_code == 201
        assert course.json()["department_name"] == "Physics"
        by_department = client.get(f"/api/v1/programs/department/{department['id']}").json()
        assert [p["code"] for p in by_department] == ["BSPH"]
        by_program = client.get(f"/api/v1/courses/program/{program['id']}").json()
        assert [c["course_code"] for c in by_program] == ["PH101"]

    def test_filtered_lists_for_unknown_parent(self, client, db):
        assert client.get("/api/v1/programs/department/8").status_code == 404
        assert client.get("/api/v1/courses/program/8").status_code == 404

    def test_building_list(self, client, building):
        assert [b["name"] for b in client.get("/api/v1/buildings").json()] == ["Science Hall"]


class TestUserRoutes:
    def test_create_and_lookup(self, client, db):
        created = client.post(
            "/api/v1/users", json={"name": "Barbara Liskov", "email": "barbara@college.edu"}
        )

        assert created.status_code == 201
        assert created.json()["role"] == "FACULTY"
        by_email = client.get("/api/v1/users/email/barbara@college.edu")
        assert by_email.json()["id"] == created.json()["id"]

    def test_invalid_email_is_422(self, client, db):
        response = client.post("/api/v1/users", json={"name": "Nobody", "email": "not-an-email"})

        assert response.status_code == 422


class TestOperationalEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_prometheus_metrics(self, client, schedule):
        client.get(f"/api/v1/schedules/{schedule.id}")

        response = client.get("/metrics/prometheus")

        assert response.status_code == 200
        assert "classroom_scheduler_http_requests_total" in response.text
