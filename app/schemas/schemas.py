"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Rows come out of the database in snake_case; view models serialise with
camelCase keys (the shape the browser client consumes) and accept either
spelling on input.
"""

import json
import re
from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


WHATSAPP_PATTERN = r"^\d{10}$"
RESUME_LINK_PREFIX = "https://drive.google.com/"

DEPARTMENTS = [
    "Computer Science",
    "Mechanical Engineering",
    "Electrical and Electronics Engineering",
    "Chemical Engineering",
    "Civil Engineering",
    "Economics",
    "Mathematics",
    "Physics",
    "Chemistry",
    "Biological Sciences",
    "Humanities and Social Sciences",
    "Pharmacy",
]


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    professor = "professor"


class Designation(str, Enum):
    professor = "Professor"
    senior_professor = "Senior Professor"
    associate_professor = "Associate Professor"
    assistant_professor = "Assistant Professor"
    junior_professor = "Junior Professor"


class PositionStatus(str, Enum):
    open = "open"
    closed = "closed"


class ApplicationStatus(str, Enum):
    pending = "pending"
    shortlisted = "shortlisted"
    rejected = "rejected"


def _parse_string_list(value):
    """Accept a list, a JSON encoded list (SQLite rows) or a comma separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            value = json.loads(stripped)
        else:
            value = stripped.split(",")
    return [item.strip() for item in value if item and item.strip()]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    id_number: str = Field(..., min_length=1, max_length=20)
    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str
    role: UserRole


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: str
    profile_complete: bool


class UserResponse(CamelModel):
    user_id: str
    email: str
    role: str
    is_active: bool
    created_at: datetime


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class BaseProfile(CamelModel):
    id: str
    full_name: str
    id_number: str
    email: str
    whatsapp_number: Optional[str] = None
    created_at: datetime


class StudentProfile(BaseProfile):
    role: Literal["student"] = "student"
    btech_branch: Optional[str] = None
    dual_degree: Optional[str] = None
    minor_degree: Optional[str] = None
    cgpa: Optional[float] = None

    @computed_field(alias="profileComplete")
    @property
    def profile_complete(self) -> bool:
        return self.cgpa is not None and bool(self.whatsapp_number and re.match(WHATSAPP_PATTERN, self.whatsapp_number))


class ProfessorProfile(BaseProfile):
    role: Literal["professor"] = "professor"
    designation: Optional[Designation] = None
    department: Optional[str] = None
    chamber_number: Optional[str] = None
    research_interests: List[str] = []

    @field_validator("research_interests", mode="before")
    @classmethod
    def parse_interests(cls, v):
        return _parse_string_list(v)

    @computed_field(alias="profileComplete")
    @property
    def profile_complete(self) -> bool:
        return self.designation is not None and bool(self.department)


UserProfile = Annotated[Union[StudentProfile, ProfessorProfile], Field(discriminator="role")]


class SessionResponse(CamelModel):
    authenticated: bool
    user: Optional[UserProfile] = None


class StudentProfileUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    btech_branch: Optional[str] = Field(None, max_length=100)
    dual_degree: Optional[str] = Field(None, max_length=100)
    minor_degree: Optional[str] = Field(None, max_length=100)
    whatsapp_number: Optional[str] = Field(None, pattern=WHATSAPP_PATTERN)
    cgpa: Optional[float] = Field(None, ge=0, le=10)


class ProfessorProfileUpdate(CamelModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    designation: Optional[Designation] = None
    department: Optional[str] = None
    chamber_number: Optional[str] = Field(None, max_length=20)
    research_interests: Optional[List[str]] = None
    whatsapp_number: Optional[str] = Field(None, pattern=WHATSAPP_PATTERN)

    @field_validator("department")
    @classmethod
    def known_department(cls, v):
        if v is not None and v not in DEPARTMENTS:
            raise ValueError(f"Unknown department '{v}'")
        return v

    @field_validator("research_interests", mode="before")
    @classmethod
    def parse_interests(cls, v):
        if v is None:
            return None
        return _parse_string_list(v)


class ProfileOptions(BaseModel):
    designations: List[str]
    departments: List[str]


# ============================================================
# POSITION SCHEMAS
# ============================================================

class PositionCreate(CamelModel):
    research_area: str = Field(..., min_length=1, max_length=200)
    course_code: str = Field(..., min_length=1, max_length=20)
    credits: int = Field(..., ge=1, le=20)
    semester: str = Field(..., min_length=1, max_length=100)
    prerequisites: Optional[str] = None
    minimum_cgpa: float = Field(..., ge=0, le=10, alias="minimumCGPA")
    summary: str = Field(..., min_length=1)
    specific_requirements: Optional[str] = None
    eligible_branches: List[str] = []
    number_of_openings: int = Field(1, ge=1)
    last_date_to_apply: date


class PositionUpdate(CamelModel):
    research_area: Optional[str] = Field(None, min_length=1, max_length=200)
    course_code: Optional[str] = Field(None, min_length=1, max_length=20)
    credits: Optional[int] = Field(None, ge=1, le=20)
    semester: Optional[str] = Field(None, min_length=1, max_length=100)
    prerequisites: Optional[str] = None
    minimum_cgpa: Optional[float] = Field(None, ge=0, le=10, alias="minimumCGPA")
    summary: Optional[str] = Field(None, min_length=1)
    specific_requirements: Optional[str] = None
    eligible_branches: Optional[List[str]] = None
    number_of_openings: Optional[int] = Field(None, ge=1)
    last_date_to_apply: Optional[date] = None
    status: Optional[PositionStatus] = None


class ResearchPosition(CamelModel):
    id: str
    professor_id: str
    professor_name: str
    department: str
    research_area: str
    course_code: str
    credits: int
    semester: str
    prerequisites: Optional[str] = None
    minimum_cgpa: float = Field(..., alias="minimumCGPA")
    summary: str
    specific_requirements: Optional[str] = None
    eligible_branches: List[str] = []
    number_of_openings: int = 1
    last_date_to_apply: date
    status: PositionStatus
    created_at: datetime

    @field_validator("eligible_branches", mode="before")
    @classmethod
    def parse_branches(cls, v):
        return _parse_string_list(v)


class ApplicationCounts(CamelModel):
    total: int = 0
    pending: int = 0
    shortlisted: int = 0
    rejected: int = 0


class ProfessorPositionView(ResearchPosition):
    application_counts: ApplicationCounts


class StudentPositionView(ResearchPosition):
    is_cgpa_eligible: bool
    is_accepting_applications: bool
    has_applied: bool
    application_status: Optional[ApplicationStatus] = None


class PositionListResponse(CamelModel):
    positions: List[ResearchPosition]
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    pitch: str = Field(..., min_length=1, max_length=5000)
    resume_link: Optional[str] = Field(None, max_length=500)

    @field_validator("resume_link")
    @classmethod
    def drive_link(cls, v):
        if v is not None and not v.startswith(RESUME_LINK_PREFIX):
            raise ValueError("Please provide a valid Google Drive link to your resume")
        return v


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class Application(CamelModel):
    id: str
    position_id: str
    student_id: str
    full_name: str
    id_number: str
    email: str
    whatsapp_number: str
    btech_branch: Optional[str] = None
    dual_degree: Optional[str] = None
    minor_degree: Optional[str] = None
    cgpa: float
    pitch: str
    resume_link: Optional[str] = None
    status: ApplicationStatus
    created_at: datetime


class StudentApplicationView(Application):
    research_area: str
    course_code: str
    professor_name: str
    department: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
