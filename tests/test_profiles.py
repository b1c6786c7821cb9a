"""Student and professor profile endpoints."""


class TestStudentProfile:

    def test_get_profile(self, client, student_headers):
        response = client.get("/api/students/profile", headers=student_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "f20210001@goa.bits-pilani.ac.in"
        assert body["dualDegree"] == "MSc. Economics"
        assert body["profileComplete"] is True

    def test_update_profile(self, client, student_headers):
        response = client.put("/api/students/profile", headers=student_headers, json={
            "cgpa": 9.4, "minorDegree": "Data Science"
        })
        assert response.status_code == 200
        body = response.json()
        assert body["cgpa"] == 9.4
        assert body["minorDegree"] == "Data Science"
        # untouched fields survive
        assert body["btechBranch"] == "Computer Science"

    def test_rejects_cgpa_out_of_range(self, client, student_headers):
        response = client.put("/api/students/profile", headers=student_headers, json={"cgpa": 10.5})
        assert response.status_code == 422

    def test_rejects_bad_whatsapp_number(self, client, student_headers):
        response = client.put("/api/students/profile", headers=student_headers, json={"whatsappNumber": "12345"})
        assert response.status_code == 422

    def test_empty_update(self, client, student_headers):
        response = client.put("/api/students/profile", headers=student_headers, json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "No fields to update"

    def test_professor_cannot_use_student_profile(self, client, professor_headers):
        response = client.get("/api/students/profile", headers=professor_headers)
        assert response.status_code == 403


class TestProfessorProfile:

    def test_get_profile(self, client, professor_headers):
        body = client.get("/api/professors/profile", headers=professor_headers).json()
        assert body["designation"] == "Professor"
        assert body["department"] == "Computer Science"
        assert body["chamberNumber"] == "A-212"

    def test_update_interests_from_comma_string(self, client, professor_headers):
        response = client.put("/api/professors/profile", headers=professor_headers, json={
            "researchInterests": "Robotics, Reinforcement Learning ,",
            "designation": "Senior Professor"
        })
        assert response.status_code == 200
        body = response.json()
        assert body["researchInterests"] == ["Robotics", "Reinforcement Learning"]
        assert body["designation"] == "Senior Professor"

    def test_rejects_unknown_department(self, client, professor_headers):
        response = client.put("/api/professors/profile", headers=professor_headers, json={"department": "Astrology"})
        assert response.status_code == 422

    def test_rejects_unknown_designation(self, client, professor_headers):
        response = client.put("/api/professors/profile", headers=professor_headers, json={"designation": "Dean"})
        assert response.status_code == 422

    def test_student_cannot_use_professor_profile(self, client, student_headers):
        response = client.put("/api/professors/profile", headers=student_headers, json={"chamberNumber": "X-1"})
        assert response.status_code == 403

    def test_options_are_public(self, client):
        body = client.get("/api/professors/options").json()
        assert len(body["designations"]) == 5
        assert "Assistant Professor" in body["designations"]
        assert len(body["departments"]) == 12
        assert "Economics" in body["departments"]
