"""
Requirement Matching Engine.

This module allocates a student's enrollments to a program's requirement
slots and computes per-slot and program-wide progress.
"""

import logging
from typing import Optional

from ..errors import ValidationError
from ..models import (
    Enrollment,
    EnrollmentStatus,
    RequirementSlot,
    Program,
    SlotProgress,
    ConstraintViolation,
    ProgressReport,
)
from ..models.progress import (
    OVERFLOW,
    UNMET_MINIMUM,
    UPPER_LEVEL_SHORTFALL,
    TOTAL_SHORTFALL,
)

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Matches enrollments to requirement slots.

    ═══════════════════════════════════════════════════════════════════════════
    ALLOCATION ORDER
    ═══════════════════════════════════════════════════════════════════════════

    Slots are filled one at a time in ascending `sequence` (ties keep the
    order the slots were given in). For each slot, eligible enrollments are
    taken greedily in ledger order until `min_credits` is met:

        eligible = completed
                   AND area matches the slot's area
                   AND (slot not upper-level OR enrollment is upper-level)
                   AND not already consumed by an earlier slot

    An enrollment is consumed whole. A course that would push the slot past
    `max_credits` is passed over while later courses still fit. Only when
    the minimum cannot be reached otherwise is the first such course taken,
    and the excess is recorded as overflow: it is excluded from
    `credits_applied` but stays visible so the student or advisor can fix
    the assignment.

        min=6, max=6, completed [3, 4, 3]  ->  takes 3 + 3, the 4 stays free

    This is a greedy first-come allocation, not an optimal matching. A
    lower-sequence slot can take a course a later slot needed more.

    OVERLAPPING SLOTS:
    -----------------
    A slot flagged `allows_overlap` may count enrollments that other slots
    already consumed, and does not consume what it takes. Without the flag
    no enrollment is counted twice.

    IN-PROGRESS PROJECTION:
    ----------------------
    After the completed pass, a second pass in the same order tops up each
    unsatisfied slot with in-progress enrollments. These never count toward
    `satisfied`; they only drive `projected_credits` and `is_pending`.

    ═══════════════════════════════════════════════════════════════════════════

    The engine holds no state between calls. Identical inputs give identical
    reports.
    """

    def compute_progress(self, enrollments, requirements,
                         program: Optional[Program] = None) -> ProgressReport:
        """
        Compute a progress report for one student against one program.

        Args:
            enrollments: Enrollment records in creation order
            requirements: RequirementSlot records for the program
            program: Optional Program supplying total and upper-level floors.
                     With it, every completed credit counts toward the total.
                     Without it, floors are the sums of slot minimums and only
                     credits applied to exclusive slots are earned.

        Raises:
            ValidationError: on a malformed slot or enrollment. No partial
                report is produced.
        """
        enrollments = list(enrollments)
        requirements = list(requirements)
        self.validate(enrollments, requirements)

        completed = [e for e in enrollments if e.status == EnrollmentStatus.COMPLETED]
        in_progress = [e for e in enrollments if e.status == EnrollmentStatus.IN_PROGRESS]

        # Stable sort: ties on sequence keep the given slot order
        ordered_slots = sorted(requirements, key=lambda s: s.sequence)

        consumed = set()
        pending_consumed = set()
        slot_results = []

        for slot in ordered_slots:
            result = self._allocate_completed(slot, completed, consumed)
            self._project_in_progress(slot, result, in_progress, pending_consumed)
            slot_results.append(result)

        return self._build_report(
            slot_results, ordered_slots, enrollments, completed, in_progress, consumed, program
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, enrollments: list, requirements: list):
        """Structural cross-checks. Field-level checks happen at the parsing boundary."""
        slot_ids = set()
        for slot in requirements:
            if slot.id in slot_ids:
                raise ValidationError(f"Duplicate requirement slot id: {slot.id}")
            slot_ids.add(slot.id)

            if slot.min_credits < 0:
                raise ValidationError(
                    f"Requirement {slot.code}: min_credits must be >= 0 (got {slot.min_credits})"
                )
            if slot.max_credits is not None and slot.max_credits < slot.min_credits:
                raise ValidationError(
                    f"Requirement {slot.code}: max_credits {slot.max_credits} "
                    f"is below min_credits {slot.min_credits}"
                )

        enrollment_ids = set()
        for enrollment in enrollments:
            if enrollment.id in enrollment_ids:
                raise ValidationError(f"Duplicate enrollment id: {enrollment.id}")
            enrollment_ids.add(enrollment.id)

            if enrollment.credits <= 0:
                raise ValidationError(
                    f"Enrollment {enrollment.id} ({enrollment.course_code}): "
                    f"credits must be positive (got {enrollment.credits})"
                )

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def _allocate_completed(self, slot: RequirementSlot, completed: list,
                            consumed: set) -> SlotProgress:
        taken_credits = 0
        contributing = []
        deferred = []

        for enrollment in completed:
            if taken_credits >= slot.min_credits:
                break
            if not slot.allows_overlap and enrollment.id in consumed:
                continue
            if not self.is_eligible(enrollment, slot):
                continue
            if slot.max_credits is not None and taken_credits + enrollment.credits > slot.max_credits:
                deferred.append(enrollment)
                continue

            contributing.append(enrollment.id)
            taken_credits += enrollment.credits

        # Nothing later fit under the maximum: take the first course that overflows
        if taken_credits < slot.min_credits and deferred:
            contributing.append(deferred[0].id)
            taken_credits += deferred[0].credits

        if not slot.allows_overlap:
            consumed.update(contributing)

        overflow_credits = 0
        if slot.max_credits is not None and taken_credits > slot.max_credits:
            overflow_credits = taken_credits - slot.max_credits

        credits_applied = taken_credits - overflow_credits
        overflow = overflow_credits > 0

        return SlotProgress(
            slot_id=slot.id,
            code=slot.code,
            title=slot.title,
            area=slot.area,
            min_credits=slot.min_credits,
            max_credits=slot.max_credits,
            credits_applied=credits_applied,
            credits_remaining=max(0, slot.min_credits - credits_applied),
            satisfied=credits_applied >= slot.min_credits and not overflow,
            overflow=overflow,
            overflow_credits=overflow_credits,
            contributing_enrollment_ids=contributing,
            projected_credits=credits_applied,
        )

    def _project_in_progress(self, slot: RequirementSlot, result: SlotProgress,
                             in_progress: list, pending_consumed: set):
        if result.satisfied or result.overflow:
            return

        projected = result.credits_applied
        for enrollment in in_progress:
            if projected >= slot.min_credits:
                break
            if not slot.allows_overlap and enrollment.id in pending_consumed:
                continue
            if not self.is_eligible(enrollment, slot):
                continue

            result.pending_enrollment_ids.append(enrollment.id)
            projected += enrollment.credits

        if not slot.allows_overlap:
            pending_consumed.update(result.pending_enrollment_ids)

        if slot.max_credits is not None:
            projected = min(projected, slot.max_credits)

        result.projected_credits = projected
        result.is_pending = bool(result.pending_enrollment_ids) and projected >= slot.min_credits

    @staticmethod
    def is_eligible(enrollment: Enrollment, slot: RequirementSlot) -> bool:
        """Area must match; upper-level slots only accept upper-level enrollments."""
        if not areas_match(enrollment.area, slot.area):
            return False
        if slot.is_upper_level and enrollment.is_upper_level is not True:
            return False
        return True

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def _build_report(self, slot_results: list, ordered_slots: list, enrollments: list,
                      completed: list, in_progress: list, consumed: set,
                      program: Optional[Program]) -> ProgressReport:
        exclusive = [
            r for r, s in zip(slot_results, ordered_slots) if not s.allows_overlap
        ]
        upper_earned = sum(e.credits for e in completed if e.is_upper_level is True)

        # A program floor counts every completed credit once, free electives
        # included. Without one, earned and required both come from the slots.
        if program is not None:
            total_earned = sum(e.credits for e in completed)
            total_required = program.total_required
            upper_required = program.ul_required
        else:
            total_earned = sum(r.credits_applied for r in exclusive)
            total_required = sum(s.min_credits for s in ordered_slots if not s.allows_overlap)
            upper_required = sum(
                s.min_credits for s in ordered_slots if s.is_upper_level and not s.allows_overlap
            )

        completed_credits = sum(e.credits for e in completed)
        in_progress_credits = sum(e.credits for e in in_progress)

        # Completed courses no slot could use, in ledger order
        used = set(consumed)
        for r in slot_results:
            used.update(r.contributing_enrollment_ids)
        unassigned = [e.id for e in completed if e.id not in used]

        violations = self._collect_violations(
            slot_results, total_earned, total_required, upper_earned, upper_required
        )

        report = ProgressReport(
            slots=slot_results,
            total_credits_earned=total_earned,
            total_credits_required=total_required,
            upper_level_credits_earned=upper_earned,
            upper_level_credits_required=upper_required,
            completed_credits=completed_credits,
            in_progress_credits=in_progress_credits,
            projected_credits=completed_credits + in_progress_credits,
            credits_remaining=max(0, total_required - total_earned),
            unassigned_enrollment_ids=unassigned,
            violations=violations,
        )

        logger.debug(
            "Progress computed: enrollments=%d slots=%d earned=%d/%d upper=%d/%d violations=%d",
            len(enrollments), len(slot_results), total_earned, total_required,
            upper_earned, upper_required, len(violations),
        )
        return report

    @staticmethod
    def _collect_violations(slot_results: list, total_earned: int, total_required: int,
                            upper_earned: int, upper_required: int) -> list:
        violations = []

        for r in slot_results:
            if r.overflow:
                violations.append(ConstraintViolation(
                    kind=OVERFLOW,
                    slot_id=r.slot_id,
                    credits=r.overflow_credits,
                    message=f"{r.code}: {r.overflow_credits} credit(s) over the {r.max_credits}-credit maximum",
                ))
            if r.credits_remaining > 0:
                violations.append(ConstraintViolation(
                    kind=UNMET_MINIMUM,
                    slot_id=r.slot_id,
                    credits=r.credits_remaining,
                    message=f"{r.code}: {r.credits_remaining} more credit(s) needed in {r.area}",
                ))

        if upper_earned < upper_required:
            shortfall = upper_required - upper_earned
            violations.append(ConstraintViolation(
                kind=UPPER_LEVEL_SHORTFALL,
                credits=shortfall,
                message=f"{shortfall} more upper-level credit(s) needed",
            ))

        if total_earned < total_required:
            shortfall = total_required - total_earned
            violations.append(ConstraintViolation(
                kind=TOTAL_SHORTFALL,
                credits=shortfall,
                message=f"{shortfall} more credit(s) needed for the program",
            ))

        return violations


def areas_match(enrollment_area: Optional[str], slot_area: str) -> bool:
    """Case- and whitespace-insensitive area comparison. A missing area never matches."""
    if not enrollment_area or not slot_area:
        return False
    return " ".join(enrollment_area.split()).casefold() == " ".join(slot_area.split()).casefold()
