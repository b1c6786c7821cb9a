"""Browsing and managing research positions over the API."""

from tests.conftest import login


class TestBrowse:

    def test_anonymous_can_browse(self, client):
        response = client.get("/api/positions")
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 5
        assert {p["id"] for p in body["positions"]} == {"pos1", "pos2", "pos3", "pos4", "pos5"}

    def test_newest_first(self, client):
        ids = [p["id"] for p in client.get("/api/positions").json()["positions"]]
        assert ids == ["pos5", "pos4", "pos3", "pos2", "pos1"]

    def test_camel_case_payload(self, client):
        position = client.get("/api/positions/pos1").json()
        assert position["minimumCGPA"] == 8.0
        assert position["courseCode"] == "CS F266"
        assert position["eligibleBranches"] == ["A5 - Computer Science", "A7 - Electronics & Communication"]
        assert position["status"] == "open"

    def test_search_matches_professor_name(self, client):
        body = client.get("/api/positions", params={"search": "sunita"}).json()
        assert {p["id"] for p in body["positions"]} == {"pos2", "pos5"}

    def test_search_matches_course_code(self, client):
        body = client.get("/api/positions", params={"search": "econ f266"}).json()
        assert [p["id"] for p in body["positions"]] == ["pos3"]

    def test_department_filter(self, client):
        body = client.get("/api/positions", params={"department": "Computer Science"}).json()
        assert {p["id"] for p in body["positions"]} == {"pos1", "pos4"}

        everything = client.get("/api/positions", params={"department": "all"}).json()
        assert everything["total"] == 5

    def test_departments(self, client):
        assert client.get("/api/positions/departments").json() == [
            "Computer Science", "Economics", "Mechanical Engineering"
        ]

    def test_unknown_position(self, client):
        response = client.get("/api/positions/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Position not found"


class TestManagePositions:

    def test_create_position(self, client, professor_headers, new_position_payload):
        response = client.post("/api/positions", headers=professor_headers, json=new_position_payload)
        assert response.status_code == 201
        created = response.json()
        assert created["professorId"] == "p1"
        assert created["professorName"] == "Dr. Anand Mishra"
        assert created["department"] == "Computer Science"
        assert created["status"] == "open"

        listing = client.get("/api/positions").json()
        assert listing["total"] == 6
        assert listing["positions"][0]["id"] == created["id"]

    def test_create_needs_department(self, client, new_position_payload):
        client.post("/api/auth/register", json={
            "fullName": "Dr. Meera Nair", "idNumber": "PROF020",
            "email": "meera@goa.bits-pilani.ac.in",
            "password": "secret-pass-1", "confirmPassword": "secret-pass-1", "role": "professor"
        })
        headers = login(client, "meera@goa.bits-pilani.ac.in", "secret-pass-1")

        response = client.post("/api/positions", headers=headers, json=new_position_payload)
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Complete your faculty profile with a department")

        client.put("/api/professors/profile", headers=headers, json={"department": "Physics"})
        response = client.post("/api/positions", headers=headers, json=new_position_payload)
        assert response.status_code == 201
        assert response.json()["department"] == "Physics"
        assert response.json()["professorName"] == "Dr. Meera Nair"

    def test_student_cannot_create(self, client, student_headers, new_position_payload):
        response = client.post("/api/positions", headers=student_headers, json=new_position_payload)
        assert response.status_code == 403

    def test_create_validates_cgpa(self, client, professor_headers, new_position_payload):
        new_position_payload["minimumCGPA"] = 11
        response = client.post("/api/positions", headers=professor_headers, json=new_position_payload)
        assert response.status_code == 422

    def test_owner_can_update_and_close(self, client, professor_headers):
        response = client.put("/api/positions/pos1", headers=professor_headers, json={
            "summary": "Updated summary", "status": "closed"
        })
        assert response.status_code == 200
        assert response.json()["summary"] == "Updated summary"
        assert response.json()["status"] == "closed"

        listing = client.get("/api/positions").json()
        assert "pos1" not in {p["id"] for p in listing["positions"]}

    def test_owner_can_clear_optional_fields(self, client, professor_headers):
        response = client.put("/api/positions/pos1", headers=professor_headers, json={"prerequisites": None})
        assert response.status_code == 200
        assert response.json()["prerequisites"] is None
        assert response.json()["courseCode"] == "CS F266"

    def test_non_owner_cannot_update(self, client, other_professor_headers):
        response = client.put("/api/positions/pos1", headers=other_professor_headers, json={"credits": 4})
        assert response.status_code == 403
        assert response.json()["detail"] == "You don't have permission to update this position"

    def test_non_owner_cannot_delete(self, client, other_professor_headers):
        response = client.delete("/api/positions/pos1", headers=other_professor_headers)
        assert response.status_code == 403
        assert client.get("/api/positions/pos1").status_code == 200

    def test_update_unknown_position(self, client, professor_headers):
        response = client.put("/api/positions/nope", headers=professor_headers, json={"credits": 4})
        assert response.status_code == 404

    def test_delete_removes_position_and_applications(self, client, professor_headers):
        response = client.delete("/api/positions/pos1", headers=professor_headers)
        assert response.status_code == 200

        assert client.get("/api/positions/pos1").status_code == 404

        # deleted position is gone from the student's listing and history
        student_headers = login(client, "f20210001@goa.bits-pilani.ac.in")
        positions = client.get("/api/students/positions", headers=student_headers).json()
        assert "pos1" not in {p["id"] for p in positions}
        applications = client.get("/api/students/applications", headers=student_headers).json()
        assert applications == []

    def test_my_positions_with_counts(self, client, professor_headers):
        positions = client.get("/api/professors/positions", headers=professor_headers).json()
        by_id = {p["id"]: p for p in positions}
        assert set(by_id) == {"pos1", "pos4"}
        assert by_id["pos1"]["applicationCounts"] == {
            "total": 3, "pending": 1, "shortlisted": 1, "rejected": 1
        }
        assert by_id["pos4"]["applicationCounts"]["total"] == 0

    def test_my_positions_includes_closed(self, client, professor_headers):
        client.put("/api/positions/pos4", headers=professor_headers, json={"status": "closed"})
        positions = client.get("/api/professors/positions", headers=professor_headers).json()
        assert {p["id"]: p["status"] for p in positions}["pos4"] == "closed"
