"""
Course template data models.

A template is a named, reusable bundle of courses that an advisor (or the
student) bulk-assigns to a ledger.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TemplateCourse:
    """A single course line inside a template."""
    provider_id: str
    course_code: str
    title: str
    credits: int
    area: Optional[str] = None
    is_upper_level: Optional[bool] = None
    course_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "provider_id": self.provider_id,
            "course_code": self.course_code,
            "title": self.title,
            "credits": self.credits,
            "area": self.area,
            "is_upper_level": self.is_upper_level,
            "course_url": self.course_url,
        }


@dataclass(frozen=True)
class CourseTemplate:
    id: str
    name: str
    is_default: bool = False
    courses: tuple = field(default_factory=tuple)  # Ordered TemplateCourse entries
