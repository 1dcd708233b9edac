"""
Enrollment data models.

Contains the Enrollment dataclass and the EnrollmentStatus enum that
represent a student's record of course attempts.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class EnrollmentStatus(Enum):
    """
    Lifecycle states for an enrollment.

    TODO: Planned or assigned, not started
    IN_PROGRESS: Currently being taken (counts toward the projection only)
    COMPLETED: Finished; the only status that earns credit
    DROPPED: Soft-removed; kept on the ledger for history
    """
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DROPPED = "dropped"


class EnrollmentSource(Enum):
    """Who put the course on the ledger."""
    SELF = "self"
    ADVISOR = "advisor"


@dataclass(frozen=True)
class Enrollment:
    """
    A student's attempt at a single provider course.

    This is the unit the matching engine allocates to requirement slots.
    Enrollments are immutable snapshots; a status change produces a new
    record through `with_status()`.

    Attributes:
        id: Ledger identifier
        student_id: Owning student
        provider_id: Provider key or id (e.g., "sophia", "study_com")
        course_code: Provider course code (e.g., "MATH 301")
        title: Human-readable course title
        credits: Credit value (1-6, checked at the parsing boundary)
        status: EnrollmentStatus
        area: Requirement area tag, None when unknown
        is_upper_level: True/False, or None when the level is unknown
        source: EnrollmentSource (self-entered or advisor-assigned)
        assigned_by: Advisor id for advisor assignments
    """
    id: str
    student_id: str
    provider_id: str
    course_code: str
    title: str
    credits: int
    status: EnrollmentStatus
    area: Optional[str] = None
    is_upper_level: Optional[bool] = None
    source: EnrollmentSource = EnrollmentSource.SELF
    assigned_by: Optional[str] = None
    course_url: Optional[str] = None
    notes: Optional[str] = None

    def with_status(self, status: EnrollmentStatus) -> "Enrollment":
        return replace(self, status=status)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "provider_id": self.provider_id,
            "course_code": self.course_code,
            "title": self.title,
            "credits": self.credits,
            "status": self.status.value,
            "area": self.area,
            "is_upper_level": self.is_upper_level,
            "source": self.source.value,
            "assigned_by": self.assigned_by,
            "course_url": self.course_url,
            "notes": self.notes,
        }
