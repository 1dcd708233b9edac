"""
Enrollment ledger.

The mutable, insertion-ordered set of one student's enrollments. The
engines never see the ledger itself, only `snapshot()` tuples of it.
"""

import logging

from ..config import STATUS_TRANSITIONS
from ..errors import ValidationError
from .enrollment import Enrollment, EnrollmentStatus
from .plan import AssignmentPlan

logger = logging.getLogger(__name__)


class EnrollmentLedger:
    """
    Holds a student's enrollments in creation order.

    Insertion order matters: the matching engine breaks allocation ties by
    it. Mutations are limited to appending new enrollments and status
    transitions. Nothing is ever removed; "dropped" is the soft state.

    Only one writer may mutate a given student's ledger at a time. The
    duplicate check in TemplatePlanner is only correct against a consistent
    snapshot, so concurrent commits must be serialized by the caller.
    """

    def __init__(self, enrollments=()):
        self._entries = {}
        for enrollment in enrollments:
            self._append(enrollment)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def __contains__(self, enrollment_id) -> bool:
        return enrollment_id in self._entries

    def get(self, enrollment_id: str) -> Enrollment:
        try:
            return self._entries[enrollment_id]
        except KeyError:
            raise ValidationError(f"Unknown enrollment: {enrollment_id}") from None

    def snapshot(self) -> tuple:
        """Immutable view for the engines, in creation order."""
        return tuple(self._entries.values())

    def _append(self, enrollment: Enrollment):
        if enrollment.id in self._entries:
            raise ValidationError(f"Duplicate enrollment id: {enrollment.id}")
        self._entries[enrollment.id] = enrollment

    def add(self, enrollment: Enrollment) -> Enrollment:
        self._append(enrollment)
        logger.info("Enrollment added: %s (%s)", enrollment.id, enrollment.course_code)
        return enrollment

    def commit(self, plan: AssignmentPlan) -> list:
        """
        Append every enrollment a plan would create.

        The whole plan is checked before anything is appended, so a colliding
        id leaves the ledger untouched.
        """
        seen = set(self._entries)
        for enrollment in plan.to_create:
            if enrollment.id in seen:
                raise ValidationError(f"Duplicate enrollment id: {enrollment.id}")
            seen.add(enrollment.id)

        for enrollment in plan.to_create:
            self._entries[enrollment.id] = enrollment

        logger.info(
            "Plan committed for %s: assigned=%d skipped=%d",
            plan.student_id, plan.assigned_count, plan.skipped_count,
        )
        return list(plan.to_create)

    def transition(self, enrollment_id: str, status: EnrollmentStatus) -> Enrollment:
        """Move an enrollment to a new status, following STATUS_TRANSITIONS."""
        current = self.get(enrollment_id)
        if current.status == status:
            return current

        allowed = STATUS_TRANSITIONS.get(current.status.value, set())
        if status.value not in allowed:
            raise ValidationError(
                f"Cannot move enrollment {enrollment_id} from "
                f"{current.status.value} to {status.value}"
            )

        updated = current.with_status(status)
        self._entries[enrollment_id] = updated
        logger.info("Enrollment %s: %s -> %s", enrollment_id, current.status.value, status.value)
        return updated
