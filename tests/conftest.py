"""
Shared fixtures.

The app runs against an in-memory SQLite database holding the demo
dataset. Every test starts from a freshly seeded copy.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MOCK_FALLBACK"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.db.bootstrap import reset_database
from app.main import app

STUDENT_EMAIL = "f20210001@goa.bits-pilani.ac.in"          # s1, CGPA 9.2
LOW_CGPA_STUDENT_EMAIL = "f20220103@goa.bits-pilani.ac.in"  # s3, CGPA 8.1
PROFESSOR_EMAIL = "anand@goa.bits-pilani.ac.in"             # p1, owns pos1 and pos4
OTHER_PROFESSOR_EMAIL = "sunita@goa.bits-pilani.ac.in"      # p2, owns pos2 and pos5


@pytest.fixture(autouse=True)
def seeded_database():
    reset_database(seed=True)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def login(client: TestClient, email: str, password: str = None) -> dict:
    """Log in and return the Authorization header."""
    response = client.post("/api/auth/login", json={
        "email": email,
        "password": password or get_settings().demo_password
    })
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.fixture
def student_headers(client):
    return login(client, STUDENT_EMAIL)


@pytest.fixture
def low_cgpa_student_headers(client):
    return login(client, LOW_CGPA_STUDENT_EMAIL)


@pytest.fixture
def professor_headers(client):
    return login(client, PROFESSOR_EMAIL)


@pytest.fixture
def other_professor_headers(client):
    return login(client, OTHER_PROFESSOR_EMAIL)


@pytest.fixture
def new_position_payload():
    return {
        "researchArea": "Reinforcement Learning",
        "courseCode": "CS F376",
        "credits": 3,
        "semester": "Academic Year 24-25 Semester-2",
        "prerequisites": None,
        "minimumCGPA": 9.0,
        "summary": "Policy gradient methods for robotic control.",
        "eligibleBranches": ["A7 - Computer Science"],
        "numberOfOpenings": 1,
        "lastDateToApply": "2099-12-31"
    }
