"""
Data models for the degree planner.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between the loaders, the engines and the display.
"""

from .course import CanonicalCourse, CourseLevel, extract_course_number, infer_upper_level
from .enrollment import Enrollment, EnrollmentStatus, EnrollmentSource
from .requirement import RequirementSlot, Program
from .template import TemplateCourse, CourseTemplate
from .progress import SlotProgress, ConstraintViolation, ProgressReport
from .plan import SkippedCourse, AssignmentPlan
from .ledger import EnrollmentLedger

__all__ = [
    # Catalog models
    "CanonicalCourse",
    "CourseLevel",
    "extract_course_number",
    "infer_upper_level",
    # Enrollment models
    "Enrollment",
    "EnrollmentStatus",
    "EnrollmentSource",
    "EnrollmentLedger",
    # Requirement model
    "RequirementSlot",
    "Program",
    # Templates
    "TemplateCourse",
    "CourseTemplate",
    # Results
    "SlotProgress",
    "ConstraintViolation",
    "ProgressReport",
    "SkippedCourse",
    "AssignmentPlan",
]
