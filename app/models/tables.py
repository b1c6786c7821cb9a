"""
Table definitions.

Queries are written as raw SQL (see app.services); these Core tables only
exist so the schema can be created on PostgreSQL and on the SQLite fallback.

Tables:
- users: auth records (email, password hash, role)
- profiles: student/professor profile fields, one row per user
- research_positions: postings authored by professors
- applications: student submissions against positions
"""

from sqlalchemy import (
    MetaData, Table, Column, String, Integer, Float, Boolean, Date, DateTime,
    Text, JSON, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.engine import Engine

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

profiles = Table(
    "profiles", metadata,
    Column("id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("full_name", String(100), nullable=False),
    Column("id_number", String(20), nullable=False),
    Column("email", String(255), nullable=False),
    Column("whatsapp_number", String(10)),
    Column("role", String(20), nullable=False),
    # Student fields
    Column("btech_branch", String(100)),
    Column("dual_degree", String(100)),
    Column("minor_degree", String(100)),
    Column("cgpa", Float),
    # Professor fields
    Column("designation", String(50)),
    Column("department", String(100)),
    Column("chamber_number", String(20)),
    Column("research_interests", JSON),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

research_positions = Table(
    "research_positions", metadata,
    Column("id", String(36), primary_key=True),
    Column("professor_id", String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("professor_name", String(100), nullable=False),
    Column("department", String(100), nullable=False),
    Column("research_area", String(200), nullable=False),
    Column("course_code", String(20), nullable=False),
    Column("credits", Integer, nullable=False),
    Column("semester", String(100), nullable=False),
    Column("prerequisites", Text),
    Column("minimum_cgpa", Float, nullable=False),
    Column("summary", Text, nullable=False),
    Column("specific_requirements", Text),
    Column("eligible_branches", JSON, nullable=False),
    Column("number_of_openings", Integer, nullable=False, default=1),
    Column("last_date_to_apply", Date, nullable=False),
    Column("status", String(10), nullable=False, default="open"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

applications = Table(
    "applications", metadata,
    Column("id", String(36), primary_key=True),
    Column("position_id", String(36), ForeignKey("research_positions.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("student_id", String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("full_name", String(100), nullable=False),
    Column("id_number", String(20), nullable=False),
    Column("email", String(255), nullable=False),
    Column("whatsapp_number", String(10), nullable=False),
    Column("btech_branch", String(100)),
    Column("dual_degree", String(100)),
    Column("minor_degree", String(100)),
    Column("cgpa", Float, nullable=False),
    Column("pitch", Text, nullable=False),
    Column("resume_link", String(500)),
    Column("status", String(20), nullable=False, default="pending"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    # A student applies to a position at most once
    UniqueConstraint("position_id", "student_id", name="uq_application_position_student"),
)

TABLE_NAMES = [t.name for t in metadata.sorted_tables]


def create_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    metadata.create_all(engine, checkfirst=True)


def drop_schema(engine: Engine) -> None:
    metadata.drop_all(engine)
