"""
Demo dataset.

Three students, three professors, five research positions and four
applications. Loaded into the in-memory fallback database when the real
database is unreachable, or into an empty real database when
SEED_DEMO_DATA is set.

Every demo account logs in with settings.demo_password. Deadlines and
creation dates are relative to the seeding day so positions stay open
for applications.
"""

import json
import logging
from datetime import timedelta

from sqlalchemy import text

from app.core.config import get_settings
from app.core.security import hash_password
from app.db.postgres import get_db_session
from app.utils.dates import utc_now, to_db_timestamp, to_db_date

logger = logging.getLogger(__name__)

settings = get_settings()


MOCK_STUDENTS = [
    {
        "id": "s1",
        "full_name": "Aaditya Sharma",
        "id_number": "2021A7PS0001G",
        "email": "f20210001@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543210",
        "btech_branch": "Computer Science",
        "dual_degree": "MSc. Economics",
        "minor_degree": None,
        "cgpa": 9.2,
        "days_ago": 300,
    },
    {
        "id": "s2",
        "full_name": "Priya Patel",
        "id_number": "2021A3PS0042G",
        "email": "f20210042@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543211",
        "btech_branch": "Mechanical Engineering",
        "dual_degree": None,
        "minor_degree": "Finance",
        "cgpa": 8.7,
        "days_ago": 299,
    },
    {
        "id": "s3",
        "full_name": "Rahul Gupta",
        "id_number": "2022A8PS0103G",
        "email": "f20220103@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543212",
        "btech_branch": "Electronics and Communication",
        "dual_degree": None,
        "minor_degree": None,
        "cgpa": 8.1,
        "days_ago": 298,
    },
]

MOCK_PROFESSORS = [
    {
        "id": "p1",
        "full_name": "Dr. Anand Mishra",
        "id_number": "PROF001",
        "email": "anand@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543213",
        "designation": "Professor",
        "department": "Computer Science",
        "chamber_number": "A-212",
        "research_interests": ["Machine Learning", "Computer Vision", "Natural Language Processing"],
        "days_ago": 480,
    },
    {
        "id": "p2",
        "full_name": "Dr. Sunita Verma",
        "id_number": "PROF002",
        "email": "sunita@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543214",
        "designation": "Associate Professor",
        "department": "Mechanical Engineering",
        "chamber_number": "B-113",
        "research_interests": ["Fluid Dynamics", "Thermal Engineering"],
        "days_ago": 479,
    },
    {
        "id": "p3",
        "full_name": "Dr. Rajesh Kumar",
        "id_number": "PROF003",
        "email": "rajesh@goa.bits-pilani.ac.in",
        "whatsapp_number": "9876543215",
        "designation": "Assistant Professor",
        "department": "Economics",
        "chamber_number": "C-302",
        "research_interests": ["Macroeconomics", "Development Economics"],
        "days_ago": 478,
    },
]

MOCK_POSITIONS = [
    {
        "id": "pos1",
        "professor_id": "p1",
        "professor_name": "Dr. Anand Mishra",
        "department": "Computer Science",
        "research_area": "Machine Learning",
        "course_code": "CS F266",
        "credits": 3,
        "semester": "Academic Year 24-25 Semester-1",
        "prerequisites": "CS F111 with Grade: A or above",
        "minimum_cgpa": 8.0,
        "summary": "Development of deep learning models for image classification and object detection.",
        "specific_requirements": "Proficiency in Python and PyTorch/TensorFlow is required.",
        "eligible_branches": ["A5 - Computer Science", "A7 - Electronics & Communication"],
        "number_of_openings": 2,
        "days_ago": 60,
        "deadline_in_days": 30,
    },
    {
        "id": "pos2",
        "professor_id": "p2",
        "professor_name": "Dr. Sunita Verma",
        "department": "Mechanical Engineering",
        "research_area": "Computational Fluid Dynamics",
        "course_code": "ME F266",
        "credits": 4,
        "semester": "Academic Year 24-25 Semester-1",
        "prerequisites": "ME F211 (Fluid Mechanics) with Grade: B or above",
        "minimum_cgpa": 7.5,
        "summary": "Simulation of fluid flow and heat transfer in microchannels.",
        "specific_requirements": None,
        "eligible_branches": ["A2 - Civil", "A4 - Mechanical"],
        "number_of_openings": 3,
        "days_ago": 59,
        "deadline_in_days": 45,
    },
    {
        "id": "pos3",
        "professor_id": "p3",
        "professor_name": "Dr. Rajesh Kumar",
        "department": "Economics",
        "research_area": "Econometric Analysis",
        "course_code": "ECON F266",
        "credits": 3,
        "semester": "Academic Year 24-25 Semester-2",
        "prerequisites": "ECON F111 with Grade: B or above",
        "minimum_cgpa": 7.0,
        "summary": "Statistical analysis of economic data using regression models.",
        "specific_requirements": "Familiarity with statistical software (R/STATA) is preferred.",
        "eligible_branches": ["A1 - Chemical", "A5 - Computer Science"],
        "number_of_openings": 1,
        "days_ago": 58,
        "deadline_in_days": 60,
    },
    {
        "id": "pos4",
        "professor_id": "p1",
        "professor_name": "Dr. Anand Mishra",
        "department": "Computer Science",
        "research_area": "Natural Language Processing",
        "course_code": "CS F367",
        "credits": 3,
        "semester": "Academic Year 24-25 Semester-2",
        "prerequisites": "CS F266 with Grade: B or above",
        "minimum_cgpa": 7.5,
        "summary": "Research on transformer models for Indian languages.",
        "specific_requirements": "Experience with PyTorch and transformers library preferred.",
        "eligible_branches": ["A5 - Computer Science", "A7 - Electronics & Communication"],
        "number_of_openings": 2,
        "days_ago": 57,
        "deadline_in_days": 75,
    },
    {
        "id": "pos5",
        "professor_id": "p2",
        "professor_name": "Dr. Sunita Verma",
        "department": "Mechanical Engineering",
        "research_area": "Renewable Energy Systems",
        "course_code": "ME F366",
        "credits": 4,
        "semester": "Academic Year 24-25 Semester-2",
        "prerequisites": "ME F266 with Grade: B or above",
        "minimum_cgpa": 7.0,
        "summary": "Design and optimization of solar thermal systems.",
        "specific_requirements": None,
        "eligible_branches": ["A4 - Mechanical", "A3 - Chemical"],
        "number_of_openings": 1,
        "days_ago": 56,
        "deadline_in_days": 90,
    },
]

MOCK_APPLICATIONS = [
    {
        "id": "app1",
        "position_id": "pos1",
        "student_id": "s1",
        "pitch": "I have experience in machine learning projects and have worked with PyTorch for image "
                 "classification tasks. I am excited to contribute to research in this field.",
        "status": "pending",
        "days_ago": 50,
    },
    {
        "id": "app2",
        "position_id": "pos2",
        "student_id": "s3",
        "pitch": "I have a strong interest in fluid dynamics and have completed relevant coursework. "
                 "I am eager to apply my knowledge to computational simulations.",
        "status": "shortlisted",
        "days_ago": 49,
    },
    {
        "id": "app3",
        "position_id": "pos1",
        "student_id": "s2",
        "pitch": "I have experience in deep learning and computer vision projects. "
                 "I would love to contribute to this research.",
        "status": "shortlisted",
        "days_ago": 48,
    },
    {
        "id": "app4",
        "position_id": "pos1",
        "student_id": "s3",
        "pitch": "I am particularly interested in the intersection of ML and computer vision.",
        "status": "rejected",
        "days_ago": 47,
    },
]


def seed_mock_data() -> dict:
    """
    Insert the demo dataset. Expects empty tables.

    Returns:
        Row counts per table
    """
    now = utc_now()
    password_hash = hash_password(settings.demo_password)
    students_by_id = {s["id"]: s for s in MOCK_STUDENTS}

    with get_db_session() as db:
        for person, role in [(s, "student") for s in MOCK_STUDENTS] + [(p, "professor") for p in MOCK_PROFESSORS]:
            created_at = to_db_timestamp(now - timedelta(days=person["days_ago"]))
            db.execute(
                text("""
                    INSERT INTO users (id, email, password_hash, role, is_active, created_at)
                    VALUES (:id, :email, :password_hash, :role, :is_active, :created_at)
                """),
                {
                    "id": person["id"], "email": person["email"], "password_hash": password_hash,
                    "role": role, "is_active": True, "created_at": created_at
                }
            )
            db.execute(
                text("""
                    INSERT INTO profiles (id, full_name, id_number, email, whatsapp_number, role,
                        btech_branch, dual_degree, minor_degree, cgpa,
                        designation, department, chamber_number, research_interests, created_at)
                    VALUES (:id, :full_name, :id_number, :email, :whatsapp_number, :role,
                        :btech_branch, :dual_degree, :minor_degree, :cgpa,
                        :designation, :department, :chamber_number, :research_interests, :created_at)
                """),
                {
                    "id": person["id"], "full_name": person["full_name"], "id_number": person["id_number"],
                    "email": person["email"], "whatsapp_number": person["whatsapp_number"], "role": role,
                    "btech_branch": person.get("btech_branch"), "dual_degree": person.get("dual_degree"),
                    "minor_degree": person.get("minor_degree"), "cgpa": person.get("cgpa"),
                    "designation": person.get("designation"), "department": person.get("department"),
                    "chamber_number": person.get("chamber_number"),
                    "research_interests": json.dumps(person["research_interests"]) if role == "professor" else None,
                    "created_at": created_at
                }
            )

        for pos in MOCK_POSITIONS:
            params = {k: v for k, v in pos.items() if k not in ("days_ago", "deadline_in_days")}
            params.update({
                "eligible_branches": json.dumps(pos["eligible_branches"]),
                "last_date_to_apply": to_db_date(now.date() + timedelta(days=pos["deadline_in_days"])),
                "status": "open",
                "created_at": to_db_timestamp(now - timedelta(days=pos["days_ago"]))
            })
            db.execute(
                text("""
                    INSERT INTO research_positions (id, professor_id, professor_name, department, research_area,
                        course_code, credits, semester, prerequisites, minimum_cgpa, summary,
                        specific_requirements, eligible_branches, number_of_openings, last_date_to_apply,
                        status, created_at)
                    VALUES (:id, :professor_id, :professor_name, :department, :research_area,
                        :course_code, :credits, :semester, :prerequisites, :minimum_cgpa, :summary,
                        :specific_requirements, :eligible_branches, :number_of_openings, :last_date_to_apply,
                        :status, :created_at)
                """),
                params
            )

        for app in MOCK_APPLICATIONS:
            student = students_by_id[app["student_id"]]
            db.execute(
                text("""
                    INSERT INTO applications (id, position_id, student_id, full_name, id_number, email,
                        whatsapp_number, btech_branch, dual_degree, minor_degree, cgpa, pitch, resume_link,
                        status, created_at)
                    VALUES (:id, :position_id, :student_id, :full_name, :id_number, :email,
                        :whatsapp_number, :btech_branch, :dual_degree, :minor_degree, :cgpa, :pitch, NULL,
                        :status, :created_at)
                """),
                {
                    "id": app["id"], "position_id": app["position_id"], "student_id": student["id"],
                    "full_name": student["full_name"], "id_number": student["id_number"],
                    "email": student["email"], "whatsapp_number": student["whatsapp_number"],
                    "btech_branch": student["btech_branch"], "dual_degree": student["dual_degree"],
                    "minor_degree": student["minor_degree"], "cgpa": student["cgpa"],
                    "pitch": app["pitch"], "status": app["status"],
                    "created_at": to_db_timestamp(now - timedelta(days=app["days_ago"]))
                }
            )

    counts = {
        "users": len(MOCK_STUDENTS) + len(MOCK_PROFESSORS),
        "profiles": len(MOCK_STUDENTS) + len(MOCK_PROFESSORS),
        "research_positions": len(MOCK_POSITIONS),
        "applications": len(MOCK_APPLICATIONS),
    }
    logger.info("Demo dataset seeded: %s", counts)
    return counts
