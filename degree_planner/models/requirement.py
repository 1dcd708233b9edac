"""
Requirement model.

Static description of a program's structure: the program record and its
ordered requirement slots.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import (
    DEFAULT_TOTAL_REQUIRED,
    DEFAULT_UL_REQUIRED,
)


@dataclass(frozen=True)
class RequirementSlot:
    """
    One named, bounded credit bucket within a program.

    Example for an upper-level math bucket:
        code: "MATH-UL"
        title: "Upper-Level Mathematics"
        area: "Math"
        min_credits: 6
        max_credits: 12
        is_upper_level: True
        sequence: 3

    Slots are mutually exclusive consumers of an enrollment. A slot with
    `allows_overlap` may also count enrollments another slot already used.
    """
    id: str
    program_id: str
    code: str
    title: str
    area: str
    min_credits: int
    max_credits: Optional[int] = None
    is_upper_level: bool = False
    sequence: int = 0
    allows_overlap: bool = False


@dataclass(frozen=True)
class Program:
    """A degree program for one catalog year and its program-level credit floors."""
    id: str
    title: str
    catalog_year: int
    total_required: int = DEFAULT_TOTAL_REQUIRED
    ul_required: int = DEFAULT_UL_REQUIRED
