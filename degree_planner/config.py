"""
Configuration constants for the degree planner.

This module contains all configuration values and constants used throughout
the matching engine, the template planner and the catalog normalizer.
Centralizing these makes it easy to adjust behavior as program policies
change.
"""

import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Base data directory (relative to this file's location unless overridden)
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DEGREE_PLANNER_DATA_DIR", BASE_DIR / "data"))
ENROLLMENTS_DIR_NAME = "enrollments"

RAW_CATALOG_FILE = "catalog_raw.json"
CLEAN_CATALOG_FILE = "catalog_clean.json"

# Where scripts/fetch_catalog.py downloads the raw provider catalog from
CATALOG_SOURCE_URL = os.getenv("CATALOG_SOURCE_URL", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# CATALOG NORMALIZATION
# =============================================================================

# Provider subject labels -> canonical subject names.
# Subjects missing from this table pass through unchanged.
SUBJECT_MAP = {
    "Education & Teaching": "Education",
    "Social Science": "Social Science",
    "Science": "Science",
    "Business": "Business",
    "Psychology": "Psychology",
    "Math": "Math",
    "Computer Science": "Computer Science",
    "History": "History",
    "Geography": "Geography",
}

DEFAULT_PROVIDER = "Study.com"

# Credit recommendation body used when a catalog entry omits one
DEFAULT_CREDIT_VALUE = 3
DEFAULT_CREDIT_TYPE = "ACE"

# Course numbering: 100-299 is lower division, 300 and up is upper division
LOWER_LEVEL_MIN = 100
UPPER_LEVEL_MIN = 300


# =============================================================================
# ENROLLMENTS
# =============================================================================

# Field-level bounds enforced at the parsing boundary
MIN_ENROLLMENT_CREDITS = 1
MAX_ENROLLMENT_CREDITS = 6

# Allowed lifecycle moves for an enrollment status.
# Enrollments are never removed by the ledger; "dropped" is the soft state
# and may be reinstated to "todo".
STATUS_TRANSITIONS = {
    "todo": {"in_progress", "completed", "dropped"},
    "in_progress": {"todo", "completed", "dropped"},
    "completed": {"in_progress", "dropped"},
    "dropped": {"todo"},
}


# =============================================================================
# PROGRAM DEFAULTS
# =============================================================================

# Bachelor's degree totals used when a program record omits them
DEFAULT_TOTAL_REQUIRED = 120
DEFAULT_UL_REQUIRED = 24


# =============================================================================
# TEMPLATE PLANNING
# =============================================================================

SKIP_ALREADY_ENROLLED = "already enrolled"
SKIP_DUPLICATE_IN_TEMPLATE = "duplicate in template"
