"""
Degree Planner Package
======================

Requirement matching and progress tracking for adult-learner degree plans.
Students earn credits from third-party course providers against a program
made of typed requirement slots.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                          ENGINE LAYER                                    │
│        (Pure logic - returns data structures, NO I/O or printing)        │
│                                                                         │
│  ┌──────────────────┐  ┌──────────────────┐  ┌──────────────────────┐  │
│  │ CourseNormalizer │  │  MatchingEngine  │  │   TemplatePlanner    │  │
│  │ (catalog batch)  │  │ (slot allocation)│  │ (dry-run assignment) │  │
│  └──────────────────┘  └──────────────────┘  └──────────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                     DegreePlanner (orchestrator)                         │
│      DataLoader (JSON files) -> engines -> TerminalDisplay               │
└─────────────────────────────────────────────────────────────────────────┘

DATA FLOW
---------

raw catalog -> CourseNormalizer -> canonical catalog
template + ledger -> TemplatePlanner -> AssignmentPlan -> EnrollmentLedger
ledger + requirement slots -> MatchingEngine -> ProgressReport

PACKAGE STRUCTURE
-----------------

degree_planner/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── errors.py            # ValidationError
├── planner.py           # DegreePlanner orchestrator
├── cli.py               # Command-line interface
├── models/              # Dataclasses, enums, EnrollmentLedger
├── data/                # DataLoader, RecordParser
├── engines/             # CourseNormalizer, MatchingEngine, TemplatePlanner
└── ui/                  # TerminalDisplay

USAGE
-----

    from degree_planner import MatchingEngine, TemplatePlanner

    report = MatchingEngine().compute_progress(enrollments, slots, program)
    plan = TemplatePlanner().plan_assignment(template, enrollments, "student-1")

Running from command line:

    python -m degree_planner progress --student student-1 --program bs-business

"""

# Version
__version__ = "1.0.0"

# Main exports
from .planner import DegreePlanner
from .cli import main
from .errors import ValidationError

# Model exports
from .models import (
    CanonicalCourse,
    CourseLevel,
    Enrollment,
    EnrollmentStatus,
    EnrollmentSource,
    EnrollmentLedger,
    RequirementSlot,
    Program,
    TemplateCourse,
    CourseTemplate,
    SlotProgress,
    ConstraintViolation,
    ProgressReport,
    SkippedCourse,
    AssignmentPlan,
)

# Engine exports
from .engines import (
    CourseNormalizer,
    MatchingEngine,
    TemplatePlanner,
    choose_template,
)

# Data exports
from .data import DataLoader, RecordParser

# UI exports
from .ui import TerminalDisplay

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "DegreePlanner",
    "main",
    "ValidationError",
    # Models
    "CanonicalCourse",
    "CourseLevel",
    "Enrollment",
    "EnrollmentStatus",
    "EnrollmentSource",
    "EnrollmentLedger",
    "RequirementSlot",
    "Program",
    "TemplateCourse",
    "CourseTemplate",
    "SlotProgress",
    "ConstraintViolation",
    "ProgressReport",
    "SkippedCourse",
    "AssignmentPlan",
    # Engines
    "CourseNormalizer",
    "MatchingEngine",
    "TemplatePlanner",
    "choose_template",
    # Data
    "DataLoader",
    "RecordParser",
    # UI
    "TerminalDisplay",
]
