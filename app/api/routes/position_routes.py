"""
Position Routes

GET /positions - List open positions (search + department filters, public)
GET /positions/departments - Departments with open positions
GET /positions/{position_id} - Get position details
POST /positions - Create position (professor only)
PUT /positions/{position_id} - Update position (owning professor only)
DELETE /positions/{position_id} - Delete position and its applications (owner only)
POST /positions/{position_id}/apply - Apply to position (student only)
GET /positions/{position_id}/applications - Applicants (owner only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.auth import get_current_student, get_current_professor, get_optional_profile
from app.services.positions_service import PositionsStore
from app.services.profile_service import ProfileType
from app.schemas.schemas import (
    PositionCreate, PositionUpdate, ResearchPosition, PositionListResponse,
    Application, ApplicationCreate, MessageResponse, StudentProfile, ProfessorProfile
)

router = APIRouter(prefix="/positions", tags=["Positions"])


@router.get("", response_model=PositionListResponse)
async def list_positions(
    search: Optional[str] = Query(None, description="Search research area, professor, course code, summary"),
    department: Optional[str] = Query(None, description="Department name or 'all'"),
    profile: Optional[ProfileType] = Depends(get_optional_profile)
):
    """List open research positions. No login needed to browse."""
    positions = PositionsStore(profile).open_positions(search, department)
    return PositionListResponse(positions=positions, total=len(positions))


@router.get("/departments", response_model=List[str])
async def list_departments():
    """Departments that currently have open positions."""
    return PositionsStore().departments()


@router.get("/{position_id}", response_model=ResearchPosition)
async def get_position(position_id: str):
    """Get details of a specific position."""
    return PositionsStore().position_or_404(position_id)


@router.post("", response_model=ResearchPosition, status_code=201)
async def create_position(data: PositionCreate, professor: ProfessorProfile = Depends(get_current_professor)):
    """Create a research position. Department and professor name come from the profile."""
    return PositionsStore(professor).create_position(data)


@router.put("/{position_id}", response_model=ResearchPosition)
async def update_position(
    position_id: str,
    data: PositionUpdate,
    professor: ProfessorProfile = Depends(get_current_professor)
):
    """Update a position, including closing or reopening it. Owner only."""
    return PositionsStore(professor).update_position(position_id, data)


@router.delete("/{position_id}", response_model=MessageResponse)
async def delete_position(position_id: str, professor: ProfessorProfile = Depends(get_current_professor)):
    """Delete a position. Its applications are deleted with it."""
    PositionsStore(professor).delete_position(position_id)
    return MessageResponse(message="Position deleted successfully")


@router.post("/{position_id}/apply", response_model=Application, status_code=201)
async def apply_to_position(
    position_id: str,
    application: ApplicationCreate,
    student: StudentProfile = Depends(get_current_student)
):
    """Apply to a position. One application per position; CGPA must meet the minimum."""
    return PositionsStore(student).create_application(position_id, application)


@router.get("/{position_id}/applications", response_model=List[Application])
async def get_position_applications(
    position_id: str,
    professor: ProfessorProfile = Depends(get_current_professor)
):
    """Applications received for one of the professor's positions."""
    return PositionsStore(professor).applications_for_position(position_id)
