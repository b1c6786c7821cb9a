"""Registration, login and session bootstrap."""

from sqlalchemy import text

from app.api.routes import auth_routes
from app.db.postgres import get_db_session
from tests.conftest import PROFESSOR_EMAIL, STUDENT_EMAIL, login


def register_payload(**overrides):
    payload = {
        "fullName": "Neha Iyer",
        "idNumber": "2023A7PS0150G",
        "email": "f20230150@goa.bits-pilani.ac.in",
        "password": "secret-pass-1",
        "confirmPassword": "secret-pass-1",
        "role": "student"
    }
    payload.update(overrides)
    return payload


class TestRegister:

    def test_register_then_login(self, client):
        response = client.post("/api/auth/register", json=register_payload())
        assert response.status_code == 201
        assert response.json()["success"] is True

        headers = login(client, "f20230150@goa.bits-pilani.ac.in", "secret-pass-1")
        session = client.get("/api/auth/session", headers=headers).json()
        assert session["authenticated"] is True
        assert session["user"]["role"] == "student"
        assert session["user"]["fullName"] == "Neha Iyer"
        assert session["user"]["profileComplete"] is False

    def test_register_professor_creates_professor_profile(self, client):
        response = client.post("/api/auth/register", json=register_payload(
            email="meera@goa.bits-pilani.ac.in", idNumber="PROF010", role="professor"
        ))
        assert response.status_code == 201

        headers = login(client, "meera@goa.bits-pilani.ac.in", "secret-pass-1")
        profile = client.get("/api/professors/profile", headers=headers).json()
        assert profile["role"] == "professor"
        assert profile["researchInterests"] == []
        assert profile["profileComplete"] is False

    def test_rejects_non_campus_email(self, client):
        response = client.post("/api/auth/register", json=register_payload(email="someone@gmail.com"))
        assert response.status_code == 400
        assert "goa.bits-pilani.ac.in" in response.json()["detail"]

    def test_rejects_mismatched_passwords(self, client):
        response = client.post("/api/auth/register", json=register_payload(confirmPassword="different-pass"))
        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    def test_rejects_duplicate_email(self, client):
        response = client.post("/api/auth/register", json=register_payload(email=STUDENT_EMAIL))
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_concurrent_duplicate_is_still_a_rule_error(self, client, monkeypatch):
        # both requests passed the lookup; the unique email constraint decides
        monkeypatch.setattr(auth_routes, "email_taken", lambda db, email: False)
        response = client.post("/api/auth/register", json=register_payload(email=STUDENT_EMAIL))
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_rejects_short_password(self, client):
        response = client.post("/api/auth/register", json=register_payload(password="short", confirmPassword="short"))
        assert response.status_code == 422


class TestLogin:

    def test_demo_account_login(self, client):
        response = client.post("/api/auth/login", json={"email": PROFESSOR_EMAIL, "password": "research123"})
        assert response.status_code == 200
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["userId"] == "p1"
        assert body["role"] == "professor"
        assert body["profileComplete"] is True

    def test_wrong_password(self, client):
        response = client.post("/api/auth/login", json={"email": STUDENT_EMAIL, "password": "not-the-password"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={
            "email": "nobody@goa.bits-pilani.ac.in", "password": "research123"
        })
        assert response.status_code == 401

    def test_login_rejects_non_campus_email(self, client):
        response = client.post("/api/auth/login", json={"email": "x@gmail.com", "password": "research123"})
        assert response.status_code == 400
        assert "@goa.bits-pilani.ac.in" in response.json()["detail"]

    def test_deactivated_account(self, client, student_headers):
        with get_db_session() as db:
            db.execute(text("UPDATE users SET is_active = :active WHERE id = :id"), {"active": False, "id": "s1"})

        response = client.post("/api/auth/login", json={"email": STUDENT_EMAIL, "password": "research123"})
        assert response.status_code == 403
        assert response.json()["detail"] == "Account deactivated"

        # a token issued before deactivation no longer opens a session
        session = client.get("/api/auth/session", headers=student_headers).json()
        assert session == {"authenticated": False, "user": None}

        response = client.get("/api/auth/me", headers=student_headers)
        assert response.status_code == 403


class TestSession:

    def test_no_token_means_no_session(self, client):
        response = client.get("/api/auth/session")
        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_garbage_token_means_no_session(self, client):
        response = client.get("/api/auth/session", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 200
        assert response.json()["authenticated"] is False

    def test_student_session_is_typed(self, client, student_headers):
        user = client.get("/api/auth/session", headers=student_headers).json()["user"]
        assert user["id"] == "s1"
        assert user["cgpa"] == 9.2
        assert user["btechBranch"] == "Computer Science"
        assert "designation" not in user

    def test_professor_session_is_typed(self, client, professor_headers):
        user = client.get("/api/auth/session", headers=professor_headers).json()["user"]
        assert user["id"] == "p1"
        assert user["designation"] == "Professor"
        assert "Machine Learning" in user["researchInterests"]
        assert "cgpa" not in user

    def test_me_and_logout(self, client, student_headers):
        me = client.get("/api/auth/me", headers=student_headers).json()
        assert me["userId"] == "s1"
        assert me["email"] == STUDENT_EMAIL

        response = client.post("/api/auth/logout", headers=student_headers)
        assert response.status_code == 200

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code in (401, 403)
