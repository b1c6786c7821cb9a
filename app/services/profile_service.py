"""
Profile Service - maps profile rows to typed users and applies profile edits.

A profile row carries both student and professor columns; the `role`
column decides whether it becomes a StudentProfile or a ProfessorProfile.
"""

import json
import logging
from typing import Optional, Union

from pydantic import TypeAdapter
from sqlalchemy import text

from app.core.exceptions import BusinessRuleError, NotFoundError
from app.db.postgres import get_db_session, execute_raw_sql
from app.schemas.schemas import (
    UserProfile, StudentProfile, ProfessorProfile, StudentProfileUpdate, ProfessorProfileUpdate
)

logger = logging.getLogger(__name__)

_profile_adapter = TypeAdapter(UserProfile)

ProfileType = Union[StudentProfile, ProfessorProfile]


def map_profile_row(row: dict) -> ProfileType:
    """Turn a profiles row into StudentProfile or ProfessorProfile."""
    return _profile_adapter.validate_python(row)


def fetch_profile(user_id: str) -> Optional[ProfileType]:
    rows = execute_raw_sql("SELECT * FROM profiles WHERE id = :id", {"id": user_id})
    if not rows:
        return None
    return map_profile_row(rows[0])


def _apply_update(user_id: str, values: dict) -> ProfileType:
    if not values:
        raise BusinessRuleError("No fields to update")

    updates = [f"{field} = :{field}" for field in values]
    params = dict(values, id=user_id)

    with get_db_session() as db:
        result = db.execute(
            text(f"UPDATE profiles SET {', '.join(updates)} WHERE id = :id"),
            params
        )
        if result.rowcount == 0:
            raise NotFoundError("Profile not found")

    logger.info("Profile %s updated: %s", user_id, sorted(values))
    return fetch_profile(user_id)


def update_student_profile(student: StudentProfile, data: StudentProfileUpdate) -> StudentProfile:
    """Update only the provided student fields."""
    return _apply_update(student.id, data.model_dump(exclude_none=True))


def update_professor_profile(professor: ProfessorProfile, data: ProfessorProfileUpdate) -> ProfessorProfile:
    """Update only the provided professor fields."""
    values = data.model_dump(exclude_none=True)
    if "designation" in values:
        values["designation"] = data.designation.value
    if "research_interests" in values:
        values["research_interests"] = json.dumps(values["research_interests"])
    return _apply_update(professor.id, values)
