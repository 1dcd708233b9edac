"""
Template Assignment Planner.

This module simulates bulk-assigning a course template to a student's
ledger and returns the dry-run delta. Nothing is written here.
"""

import logging
import uuid
from typing import Callable, Optional

from ..config import SKIP_ALREADY_ENROLLED, SKIP_DUPLICATE_IN_TEMPLATE
from ..errors import ValidationError
from ..models import (
    CourseTemplate,
    TemplateCourse,
    Enrollment,
    EnrollmentStatus,
    EnrollmentSource,
    SkippedCourse,
    AssignmentPlan,
    infer_upper_level,
)

logger = logging.getLogger(__name__)


def normalize_provider_key(provider_id: str) -> str:
    """
    Normalize a provider key: lowercase, trimmed, hyphens to underscores.

    "Study-Com" and "study_com" both become "study_com".
    """
    return (provider_id or "").strip().lower().replace("-", "_")


def normalize_course_code(course_code: str) -> str:
    return " ".join((course_code or "").split()).upper()


def course_key(provider_id: str, course_code: str) -> tuple:
    """Identity of a course for duplicate detection."""
    return normalize_provider_key(provider_id), normalize_course_code(course_code)


def _new_enrollment_id() -> str:
    return str(uuid.uuid4())


class TemplatePlanner:
    """
    Plans the application of a course template to a ledger.

    DUPLICATE HANDLING:
    ------------------
    A template course is skipped when the student already has an enrollment
    for the same provider + course code, whatever its status. A dropped or
    completed course is still "already enrolled": re-adding it would let
    the same credit accumulate twice.

    A course listed twice in the same template is created once; the repeat
    is skipped as "duplicate in template".

    WHAT THE PLAN DOES NOT DO:
    -------------------------
    - It does not persist anything. The caller commits `to_create`.
    - It does not run the matching engine. New enrollments are "todo", which
      never counts toward progress; re-run compute_progress after commit.

    The duplicate check is only as good as the snapshot it runs against.
    Two plans for the same student committed concurrently can both pass it,
    so commits must be serialized per student.
    """

    def __init__(self, id_factory: Callable[[], str] = _new_enrollment_id):
        self.id_factory = id_factory

    def plan_assignment(self, template: CourseTemplate, existing_enrollments,
                        student_id: str, assigned_by: Optional[str] = None) -> AssignmentPlan:
        """
        Build the dry-run delta for applying `template` to a student.

        Args:
            template: The course template to apply
            existing_enrollments: The student's current enrollments (any status)
            student_id: Student receiving the courses
            assigned_by: Advisor id. None or the student's own id means
                         self-assignment.

        Returns:
            AssignmentPlan with `to_create` (new todo enrollments) and
            `to_skip` (SkippedCourse with a reason per course)
        """
        if not student_id:
            raise ValidationError("plan_assignment requires a student_id")

        existing_keys = {
            course_key(e.provider_id, e.course_code)
            for e in existing_enrollments
            if e.course_code
        }

        is_self_assignment = assigned_by is None or assigned_by == student_id
        plan = AssignmentPlan(template_id=template.id, student_id=student_id)
        planned_keys = set()

        for course in template.courses:
            key = course_key(course.provider_id, course.course_code)

            if key in existing_keys:
                plan.to_skip.append(SkippedCourse(course=course, reason=SKIP_ALREADY_ENROLLED))
                continue
            if key in planned_keys:
                plan.to_skip.append(SkippedCourse(course=course, reason=SKIP_DUPLICATE_IN_TEMPLATE))
                continue

            planned_keys.add(key)
            plan.to_create.append(
                self._materialize(course, student_id, assigned_by, is_self_assignment)
            )

        if not plan.to_create:
            logger.warning("All template courses already enrolled: template=%s student=%s",
                           template.id, student_id)
        logger.info(
            "Template planned: template=%s student=%s requested=%d assigned=%d skipped=%d",
            template.id, student_id, len(template.courses),
            plan.assigned_count, plan.skipped_count,
        )
        return plan

    def _materialize(self, course: TemplateCourse, student_id: str,
                     assigned_by: Optional[str], is_self_assignment: bool) -> Enrollment:
        is_upper_level = course.is_upper_level
        if is_upper_level is None:
            is_upper_level = infer_upper_level(course.course_code)

        return Enrollment(
            id=self.id_factory(),
            student_id=student_id,
            provider_id=course.provider_id,
            course_code=course.course_code,
            title=course.title,
            credits=course.credits,
            status=EnrollmentStatus.TODO,
            area=course.area,
            is_upper_level=is_upper_level,
            source=EnrollmentSource.SELF if is_self_assignment else EnrollmentSource.ADVISOR,
            assigned_by=None if is_self_assignment else assigned_by,
            course_url=course.course_url,
        )


def choose_template(templates, template_id: Optional[str] = None) -> Optional[CourseTemplate]:
    """
    Pick a template by id, or the default one when no id is given.

    Templates are considered default-first, then by name, so with several
    defaults the alphabetically first wins.
    """
    ordered = sorted(templates, key=lambda t: (not t.is_default, t.name))
    if template_id is not None:
        for template in ordered:
            if template.id == template_id:
                return template
        return None
    for template in ordered:
        if template.is_default:
            return template
    return None
