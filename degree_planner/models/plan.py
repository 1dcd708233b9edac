"""
Template assignment plan models.

An AssignmentPlan is a dry-run delta: what applying a template would add to
a ledger and what it would skip. Committing it is the caller's job.
"""

from dataclasses import dataclass, field

from .template import TemplateCourse


@dataclass(frozen=True)
class SkippedCourse:
    course: TemplateCourse
    reason: str


@dataclass
class AssignmentPlan:
    template_id: str
    student_id: str
    to_create: list = field(default_factory=list)  # New Enrollment records, status todo
    to_skip: list = field(default_factory=list)    # SkippedCourse entries

    @property
    def assigned_count(self) -> int:
        return len(self.to_create)

    @property
    def skipped_count(self) -> int:
        return len(self.to_skip)

    def summary(self) -> dict:
        """
        Counts plus itemized skip reasons, shaped for the boundary layer to
        show the user verbatim.
        """
        return {
            "assigned": self.assigned_count,
            "skipped": self.skipped_count,
            "skipped_courses": [
                {
                    "provider_id": s.course.provider_id,
                    "course_code": s.course.course_code,
                    "title": s.course.title,
                    "reason": s.reason,
                }
                for s in self.to_skip
            ],
        }
