"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Update profile (branch, degrees, WhatsApp, CGPA)
GET /students/applications - Get my applications
GET /students/positions - Open positions with my eligibility and status
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.auth import get_current_student
from app.services.positions_service import PositionsStore
from app.services.profile_service import update_student_profile
from app.schemas.schemas import (
    StudentProfile, StudentProfileUpdate, StudentApplicationView, StudentPositionView
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=StudentProfile)
async def get_profile(student: StudentProfile = Depends(get_current_student)):
    """Get current student's profile."""
    return student


@router.put("/profile", response_model=StudentProfile)
async def update_profile(data: StudentProfileUpdate, student: StudentProfile = Depends(get_current_student)):
    """Update student profile. Only provided fields are updated."""
    return update_student_profile(student, data)


@router.get("/applications", response_model=List[StudentApplicationView])
async def get_my_applications(student: StudentProfile = Depends(get_current_student)):
    """Get all research applications for current student, newest first."""
    return PositionsStore(student).my_applications()


@router.get("/positions", response_model=List[StudentPositionView])
async def get_positions_for_student(
    search: Optional[str] = Query(None, description="Search research area, professor, course code, summary"),
    department: Optional[str] = Query(None, description="Department name or 'all'"),
    student: StudentProfile = Depends(get_current_student)
):
    """
    Open positions annotated for the current student.

    Each position says whether the student's CGPA meets the minimum,
    whether it still accepts applications, and the student's application
    status if they already applied.
    """
    return PositionsStore(student).student_positions(search, department)
