"""
Professor Routes

GET /professors/profile - Get own profile
PUT /professors/profile - Update profile (designation, department, chamber, interests)
GET /professors/options - Designations and departments for profile forms
GET /professors/positions - My positions with applicant counts
PUT /professors/applications/{id}/status - Shortlist or reject an applicant
"""

from fastapi import APIRouter, Depends
from typing import List

from app.core.auth import get_current_professor
from app.services.positions_service import PositionsStore
from app.services.profile_service import update_professor_profile
from app.schemas.schemas import (
    DEPARTMENTS, Designation, ProfessorProfile, ProfessorProfileUpdate, ProfileOptions,
    ProfessorPositionView, Application, ApplicationStatusUpdate
)

router = APIRouter(prefix="/professors", tags=["Professors"])


@router.get("/profile", response_model=ProfessorProfile)
async def get_profile(professor: ProfessorProfile = Depends(get_current_professor)):
    """Get current professor's profile."""
    return professor


@router.put("/profile", response_model=ProfessorProfile)
async def update_profile(data: ProfessorProfileUpdate, professor: ProfessorProfile = Depends(get_current_professor)):
    """Update professor profile. Research interests may be a list or a comma separated string."""
    return update_professor_profile(professor, data)


@router.get("/options", response_model=ProfileOptions)
async def profile_options():
    return ProfileOptions(designations=[d.value for d in Designation], departments=DEPARTMENTS)


@router.get("/positions", response_model=List[ProfessorPositionView])
async def get_my_positions(professor: ProfessorProfile = Depends(get_current_professor)):
    """All positions posted by this professor (open and closed)."""
    return PositionsStore(professor).my_positions()


@router.put("/applications/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    professor: ProfessorProfile = Depends(get_current_professor)
):
    """Update status of an application to one of this professor's positions."""
    return PositionsStore(professor).update_application_status(application_id, update.status)
