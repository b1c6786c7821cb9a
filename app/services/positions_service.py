"""
Positions Service - the positions/applications store.

PURPOSE:
Every request builds a store for the calling user (or anonymous visitor).
The store fetches all rows of research_positions and applications, maps
them to view models, and derives the subsets each page needs in memory:
- open positions filtered by search string and department
- a professor's own positions with application counts
- a student's own applications, and positions annotated with eligibility

Mutations are single statements followed by a full refresh. Role and
ownership checks happen here, so every route gets the same rules:
- only students apply, once per position, with CGPA >= the minimum
- only the authoring professor edits, deletes, or reviews applicants
"""

import json
import logging
import uuid
from contextlib import contextmanager
from typing import List, Optional, Union

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import (
    BusinessRuleError, NotFoundError, PermissionDeniedError, ServiceUnavailableError
)
from app.db.postgres import get_db_session, execute_raw_sql
from app.schemas.schemas import (
    Application, ApplicationCounts, ApplicationCreate, ApplicationStatus,
    PositionCreate, PositionStatus, PositionUpdate, ProfessorPositionView,
    ProfessorProfile, ResearchPosition, StudentApplicationView, StudentPositionView,
    StudentProfile
)
from app.utils.dates import today, to_db_date, to_db_timestamp, utc_now

logger = logging.getLogger(__name__)

ALL_DEPARTMENTS = "all"

# Position columns that may be cleared with an explicit null
NULLABLE_POSITION_FIELDS = {"prerequisites", "specific_requirements"}


@contextmanager
def surface_errors(action: str):
    """Log a database failure and re-raise it as a readable message."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("%s failed: %s", action, e)
        raise ServiceUnavailableError(f"Failed to {action}") from e


# ============================================================
# FILTERS
# ============================================================

def matches_search(position: ResearchPosition, query: Optional[str]) -> bool:
    """Case-insensitive match on research area, professor, course code or summary."""
    if not query:
        return True
    needle = query.strip().lower()
    haystacks = [position.research_area, position.professor_name, position.course_code, position.summary or ""]
    return any(needle in h.lower() for h in haystacks)


def matches_department(position: ResearchPosition, department: Optional[str]) -> bool:
    if not department or department == ALL_DEPARTMENTS:
        return True
    return position.department == department


def is_accepting_applications(position: ResearchPosition) -> bool:
    """Open and the last date to apply has not passed."""
    return position.status == PositionStatus.open and today() <= position.last_date_to_apply


def _to_column_value(field: str, value):
    if value is None:
        return None
    if field == "eligible_branches":
        return json.dumps(value)
    if field == "last_date_to_apply":
        return to_db_date(value)
    if isinstance(value, (PositionStatus, ApplicationStatus)):
        return value.value
    return value


# ============================================================
# STORE
# ============================================================

class PositionsStore:
    """
    In-memory view of positions and applications for one user.

    Args:
        user: StudentProfile, ProfessorProfile, or None for visitors
    """

    def __init__(self, user: Optional[Union[StudentProfile, ProfessorProfile]] = None):
        self.user = user
        self.positions: List[ResearchPosition] = []
        self.applications: List[Application] = []
        self.refresh()

    def refresh(self) -> None:
        """Re-fetch both tables."""
        with surface_errors("fetch research positions"):
            position_rows = execute_raw_sql("SELECT * FROM research_positions ORDER BY created_at DESC")
            application_rows = execute_raw_sql("SELECT * FROM applications ORDER BY created_at DESC")

        self.positions = [ResearchPosition.model_validate(r) for r in position_rows]
        self.applications = [Application.model_validate(r) for r in application_rows]

    # ------------------------------------------------------------
    # Role helpers
    # ------------------------------------------------------------

    @property
    def is_student(self) -> bool:
        return isinstance(self.user, StudentProfile)

    @property
    def is_professor(self) -> bool:
        return isinstance(self.user, ProfessorProfile)

    def _require_professor(self, action: str) -> None:
        if not self.is_professor:
            raise PermissionDeniedError(f"Only professors can {action}")

    def _require_owner(self, position: ResearchPosition, action: str) -> None:
        if position.professor_id != self.user.id:
            raise PermissionDeniedError(f"You don't have permission to {action}")

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def get_position(self, position_id: str) -> Optional[ResearchPosition]:
        return next((p for p in self.positions if p.id == position_id), None)

    def position_or_404(self, position_id: str) -> ResearchPosition:
        position = self.get_position(position_id)
        if position is None:
            raise NotFoundError("Position not found")
        return position

    def get_application(self, application_id: str) -> Optional[Application]:
        return next((a for a in self.applications if a.id == application_id), None)

    def open_positions(self, search: Optional[str] = None, department: Optional[str] = None) -> List[ResearchPosition]:
        return [
            p for p in self.positions
            if p.status == PositionStatus.open
            and matches_department(p, department)
            and matches_search(p, search)
        ]

    def departments(self) -> List[str]:
        """Distinct departments of open positions."""
        return sorted({p.department for p in self.positions if p.status == PositionStatus.open})

    def application_counts(self, position_id: str) -> ApplicationCounts:
        counts = ApplicationCounts()
        for a in self.applications:
            if a.position_id != position_id:
                continue
            counts.total += 1
            setattr(counts, a.status.value, getattr(counts, a.status.value) + 1)
        return counts

    def my_positions(self) -> List[ProfessorPositionView]:
        """The professor's own positions, any status, with applicant counts."""
        if not self.is_professor:
            return []
        return [
            ProfessorPositionView(**p.model_dump(), application_counts=self.application_counts(p.id))
            for p in self.positions if p.professor_id == self.user.id
        ]

    def my_applications(self) -> List[StudentApplicationView]:
        if not self.is_student:
            return []
        views = []
        for a in self.applications:
            if a.student_id != self.user.id:
                continue
            position = self.get_position(a.position_id)
            if position is None:
                continue
            views.append(StudentApplicationView(
                **a.model_dump(),
                research_area=position.research_area,
                course_code=position.course_code,
                professor_name=position.professor_name,
                department=position.department
            ))
        return views

    def has_applied(self, position_id: str) -> bool:
        if not self.is_student:
            return False
        return any(a.position_id == position_id and a.student_id == self.user.id for a in self.applications)

    def is_cgpa_eligible(self, position: ResearchPosition) -> bool:
        if not self.is_student or self.user.cgpa is None:
            return False
        return self.user.cgpa >= position.minimum_cgpa

    def student_positions(self, search: Optional[str] = None, department: Optional[str] = None) -> List[StudentPositionView]:
        """Open positions annotated with the student's eligibility and application status."""
        status_by_position = {
            a.position_id: a.status for a in self.applications
            if self.is_student and a.student_id == self.user.id
        }
        return [
            StudentPositionView(
                **p.model_dump(),
                is_cgpa_eligible=self.is_cgpa_eligible(p),
                is_accepting_applications=is_accepting_applications(p),
                has_applied=p.id in status_by_position,
                application_status=status_by_position.get(p.id)
            )
            for p in self.open_positions(search, department)
        ]

    def applications_for_position(self, position_id: str) -> List[Application]:
        self._require_professor("view applications")
        position = self.position_or_404(position_id)
        self._require_owner(position, "view applications for this position")
        return [a for a in self.applications if a.position_id == position_id]

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def create_position(self, data: PositionCreate) -> ResearchPosition:
        self._require_professor("create positions")
        if not self.user.department:
            raise BusinessRuleError("Complete your faculty profile with a department before posting a position")

        position_id = str(uuid.uuid4())
        params = {field: _to_column_value(field, value) for field, value in data.model_dump().items()}
        params.update({
            "id": position_id,
            "professor_id": self.user.id,
            "professor_name": self.user.full_name,
            "department": self.user.department,
            "status": PositionStatus.open.value,
            "created_at": to_db_timestamp(utc_now())
        })

        with surface_errors("create position"):
            with get_db_session() as db:
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

        logger.info("Professor %s created position %s", self.user.id, position_id)
        self.refresh()
        return self.get_position(position_id)

    def update_position(self, position_id: str, data: PositionUpdate) -> ResearchPosition:
        self._require_professor("update positions")
        position = self.position_or_404(position_id)
        self._require_owner(position, "update this position")

        values = {
            field: _to_column_value(field, value)
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_POSITION_FIELDS
        }
        if not values:
            raise BusinessRuleError("No fields to update")

        updates = [f"{field} = :{field}" for field in values]
        with surface_errors("update position"):
            with get_db_session() as db:
                db.execute(
                    text(f"UPDATE research_positions SET {', '.join(updates)} WHERE id = :position_id"),
                    dict(values, position_id=position_id)
                )

        logger.info("Professor %s updated position %s: %s", self.user.id, position_id, sorted(values))
        self.refresh()
        return self.get_position(position_id)

    def delete_position(self, position_id: str) -> None:
        """Delete a position and every application against it."""
        self._require_professor("delete positions")
        position = self.position_or_404(position_id)
        self._require_owner(position, "delete this position")

        with surface_errors("delete position"):
            with get_db_session() as db:
                db.execute(text("DELETE FROM applications WHERE position_id = :pid"), {"pid": position_id})
                db.execute(text("DELETE FROM research_positions WHERE id = :pid"), {"pid": position_id})

        logger.info("Professor %s deleted position %s", self.user.id, position_id)
        self.refresh()

    def create_application(self, position_id: str, data: ApplicationCreate) -> Application:
        if not self.is_student:
            raise PermissionDeniedError("Only students can apply for positions")

        position = self.position_or_404(position_id)
        student = self.user

        if self.has_applied(position_id):
            raise BusinessRuleError("You have already applied for this position")
        if position.status != PositionStatus.open:
            raise BusinessRuleError("This position is not accepting applications")
        if not is_accepting_applications(position):
            raise BusinessRuleError("The application deadline for this position has passed")
        if not student.profile_complete:
            raise BusinessRuleError("Complete your student profile (CGPA and WhatsApp number) before applying")
        if student.cgpa < position.minimum_cgpa:
            raise BusinessRuleError(
                f"Your CGPA ({student.cgpa}) does not meet the minimum requirement ({position.minimum_cgpa})"
            )

        application_id = str(uuid.uuid4())
        try:
            with get_db_session() as db:
                db.execute(
                    text("""
                        INSERT INTO applications (id, position_id, student_id, full_name, id_number, email,
                            whatsapp_number, btech_branch, dual_degree, minor_degree, cgpa, pitch, resume_link,
                            status, created_at)
                        VALUES (:id, :position_id, :student_id, :full_name, :id_number, :email,
                            :whatsapp_number, :btech_branch, :dual_degree, :minor_degree, :cgpa, :pitch, :resume_link,
                            :status, :created_at)
                    """),
                    {
                        "id": application_id, "position_id": position_id, "student_id": student.id,
                        "full_name": student.full_name, "id_number": student.id_number, "email": student.email,
                        "whatsapp_number": student.whatsapp_number, "btech_branch": student.btech_branch,
                        "dual_degree": student.dual_degree, "minor_degree": student.minor_degree,
                        "cgpa": student.cgpa, "pitch": data.pitch, "resume_link": data.resume_link,
                        "status": ApplicationStatus.pending.value, "created_at": to_db_timestamp(utc_now())
                    }
                )
        except IntegrityError as e:
            # Lost a race against a concurrent submission by the same student
            logger.warning("Duplicate application by %s for %s: %s", student.id, position_id, e)
            raise BusinessRuleError("You have already applied for this position") from e
        except SQLAlchemyError as e:
            logger.error("Application creation failed: %s", e)
            raise ServiceUnavailableError("Failed to submit application") from e

        logger.info("Student %s applied to position %s", student.id, position_id)
        self.refresh()
        return self.get_application(application_id)

    def update_application_status(self, application_id: str, status: ApplicationStatus) -> Application:
        self._require_professor("update application status")
        application = self.get_application(application_id)
        if application is None:
            raise NotFoundError("Application not found")
        position = self.position_or_404(application.position_id)
        self._require_owner(position, "update this application")

        with surface_errors("update application status"):
            with get_db_session() as db:
                db.execute(
                    text("UPDATE applications SET status = :status WHERE id = :aid"),
                    {"status": status.value, "aid": application_id}
                )

        logger.info("Application %s marked %s by %s", application_id, status.value, self.user.id)
        self.refresh()
        return self.get_application(application_id)
