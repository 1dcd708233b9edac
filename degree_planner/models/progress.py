"""
Progress report data models.

Contains the dataclasses returned by the matching engine. Reports are
computed on demand and never persisted.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional


# Violation kinds surfaced in ProgressReport.violations
OVERFLOW = "overflow"
UNMET_MINIMUM = "unmet_minimum"
UPPER_LEVEL_SHORTFALL = "upper_level_shortfall"
TOTAL_SHORTFALL = "total_shortfall"


@dataclass
class SlotProgress:
    """
    Result of matching enrollments against one requirement slot.

    Example for a 6-credit Math slot with one completed 3-credit course and
    one in-progress 3-credit course:
        credits_applied: 3
        credits_remaining: 3
        satisfied: False
        projected_credits: 6
        is_pending: True (will be satisfied if the in-progress course completes)
    """
    slot_id: str
    code: str
    title: str
    area: str
    min_credits: int
    max_credits: Optional[int]
    credits_applied: int                       # Completed credits counted, capped at max_credits
    credits_remaining: int                     # max(0, min_credits - credits_applied)
    satisfied: bool                            # credits_applied >= min_credits and not overflow
    overflow: bool                             # Completed credits exceeded max_credits
    overflow_credits: int = 0                  # Credits past max_credits, reported not counted
    contributing_enrollment_ids: list = field(default_factory=list)
    projected_credits: int = 0                 # credits_applied + matched in-progress credits
    pending_enrollment_ids: list = field(default_factory=list)
    is_pending: bool = False                   # Projection reaches min_credits


@dataclass
class ConstraintViolation:
    """
    A non-fatal constraint problem, reported as data.

    kind is one of: overflow, unmet_minimum, upper_level_shortfall,
    total_shortfall. slot_id is None for program-level violations.
    """
    kind: str
    message: str
    credits: int
    slot_id: Optional[str] = None


@dataclass
class ProgressReport:
    """
    Program-wide progress for one student snapshot.

    total_credits_earned sums credits_applied over exclusive slots;
    upper_level_credits_earned counts every completed upper-level course no
    matter which slot (if any) consumed it.
    """
    slots: list                                # SlotProgress, in slot processing order
    total_credits_earned: int
    total_credits_required: int
    upper_level_credits_earned: int
    upper_level_credits_required: int
    completed_credits: int = 0                 # All completed credits, assigned or not
    in_progress_credits: int = 0
    projected_credits: int = 0                 # completed_credits + in_progress_credits
    credits_remaining: int = 0
    unassigned_enrollment_ids: list = field(default_factory=list)
    violations: list = field(default_factory=list)

    @property
    def overall_satisfied(self) -> bool:
        return (
            all(s.satisfied for s in self.slots)
            and self.total_credits_earned >= self.total_credits_required
            and self.upper_level_credits_earned >= self.upper_level_credits_required
        )

    def slot(self, slot_id: str) -> Optional[SlotProgress]:
        for s in self.slots:
            if s.slot_id == slot_id:
                return s
        return None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["overall_satisfied"] = self.overall_satisfied
        return data
