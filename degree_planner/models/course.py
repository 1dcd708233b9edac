"""
Catalog course data models.

Contains the CanonicalCourse dataclass produced by the catalog normalizer
and the CourseLevel enum used for upper-level credit counting.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import LOWER_LEVEL_MIN, UPPER_LEVEL_MIN

# A standalone course number such as 101, 301 or 111L
COURSE_NUMBER_RE = re.compile(r"\b([1-9]\d\d)l?\b", re.IGNORECASE)


class CourseLevel(Enum):
    """
    Division of a course within the catalog.

    LOWER: numbered 100-299
    UPPER: numbered 300 and above (counts toward upper-level floors)
    UNKNOWN: no number could be inferred
    """
    LOWER = "lower"
    UPPER = "upper"
    UNKNOWN = "unknown"

    @classmethod
    def from_number(cls, number: Optional[int]) -> "CourseLevel":
        if number is None:
            return cls.UNKNOWN
        if number >= UPPER_LEVEL_MIN:
            return cls.UPPER
        if number >= LOWER_LEVEL_MIN:
            return cls.LOWER
        return cls.UNKNOWN


def extract_course_number(text: str) -> Optional[int]:
    """Return the first 3-digit course number in `text`, or None."""
    match = COURSE_NUMBER_RE.search(text or "")
    if not match:
        return None
    return int(match.group(1))


def infer_upper_level(course_code: str) -> Optional[bool]:
    """
    Infer the upper-level flag from a course code like "MATH 301".

    Returns None when the code carries no number, so callers can tell
    "not upper-level" apart from "unknown".
    """
    level = CourseLevel.from_number(extract_course_number(course_code))
    if level == CourseLevel.UNKNOWN:
        return None
    return level == CourseLevel.UPPER


@dataclass(frozen=True)
class CanonicalCourse:
    """
    A provider catalog entry after normalization.

    Attributes:
        provider: Course provider name (e.g., "Study.com")
        subject: Canonical subject (mapped through SUBJECT_MAP)
        title: Title with its embedded number aligned to the URL
        url: Course URL without query string
        level: CourseLevel inferred from the URL slug
        course_number: The 3-digit number behind `level`, if any
        credit_value: Recommended credits (defaults to 3)
        credit_type: Credit recommendation body (defaults to "ACE")
        has_lab: True for lab courses (e.g., "Biology 111L")
        description: Free-text description, passed through
    """
    provider: str
    subject: Optional[str]
    title: str
    url: str
    level: CourseLevel
    course_number: Optional[int]
    credit_value: int
    credit_type: str
    has_lab: bool
    description: Optional[str] = None

    @property
    def is_upper_level(self) -> bool:
        return self.level == CourseLevel.UPPER

    @property
    def code_key(self) -> str:
        """Lookup key from the title head, e.g. "math 201" for "Math 201: Calculus"."""
        return self.title.split(":", 1)[0].strip().casefold()

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "subject": self.subject,
            "title": self.title,
            "url": self.url,
            "level": self.level.value,
            "course_number": self.course_number,
            "credit_value": self.credit_value,
            "credit_type": self.credit_type,
            "has_lab": self.has_lab,
            "description": self.description,
        }
