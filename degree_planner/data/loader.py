"""
Data loading and caching.

This module handles loading the planner's JSON files with caching to prevent
repeated file I/O, and hands parsed model records to the engines.
"""

import json
import logging
from pathlib import Path

from ..config import DATA_DIR, CLEAN_CATALOG_FILE, ENROLLMENTS_DIR_NAME
from ..errors import ValidationError
from .parser import RecordParser

logger = logging.getLogger(__name__)


class DataLoader:
    """
    Loads and caches the planner's data files.

    WHY LAZY LOADING: Properties only load files when first accessed. A
    template listing never touches the catalog, and a progress run never
    touches the templates.

    DATA SOURCES (all under data_dir):
    - programs.json: Program records (catalog year, credit floors)
    - requirements.json: RequirementSlot records for every program
    - templates.json: CourseTemplate records
    - catalog_clean.json: Output of the catalog normalizer (optional; used
      to fill in missing enrollment areas and levels)
    - enrollments/<student_id>.json: One student's ledger, in creation order

    The engines never read these files themselves. Everything they need is
    passed in explicitly, so a test can build the same inputs in memory.

    Usage:
        loader = DataLoader()
        program = loader.get_program("bs-business")
        slots = loader.load_requirements("bs-business")
        enrollments = loader.load_enrollments("student-1")
    """

    def __init__(self, data_dir=None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        # Private cache variables - None means "not loaded yet"
        self._programs = None
        self._requirements = None
        self._templates = None
        self._catalog = None
        self._parser = None

    def _read_json(self, filename: str):
        filepath = self.data_dir / filename
        if not filepath.exists():
            raise FileNotFoundError(f"Data file not found: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    @property
    def catalog(self) -> list:
        """
        Canonical catalog courses.

        Missing catalog is not an error: enrichment simply has nothing to
        look up.
        """
        if self._catalog is None:
            try:
                rows = self._read_json(CLEAN_CATALOG_FILE)
            except FileNotFoundError:
                logger.info("No canonical catalog at %s; enrollment enrichment disabled",
                            self.data_dir / CLEAN_CATALOG_FILE)
                rows = []
            self._catalog = [RecordParser.parse_canonical_course(r) for r in rows]
        return self._catalog

    @property
    def catalog_index(self) -> dict:
        """Catalog keyed by title head ("math 201"); the first entry wins."""
        index = {}
        for course in self.catalog:
            index.setdefault(course.code_key, course)
        return index

    @property
    def parser(self) -> RecordParser:
        if self._parser is None:
            self._parser = RecordParser(self.catalog_index)
        return self._parser

    @property
    def programs(self) -> dict:
        if self._programs is None:
            rows = self._read_json("programs.json")
            self._programs = {}
            for row in rows:
                program = self.parser.parse_program(row)
                self._programs[program.id] = program
        return self._programs

    @property
    def requirements(self) -> list:
        if self._requirements is None:
            rows = self._read_json("requirements.json")
            self._requirements = [self.parser.parse_slot(r) for r in rows]
        return self._requirements

    @property
    def templates(self) -> list:
        if self._templates is None:
            rows = self._read_json("templates.json")
            self._templates = [self.parser.parse_template(r) for r in rows]
        return self._templates

    def get_program(self, program_id: str):
        """Return the Program, or None when the id is unknown."""
        return self.programs.get(program_id)

    def list_programs(self) -> list:
        return sorted(self.programs.values(), key=lambda p: (p.title, p.catalog_year))

    def load_requirements(self, program_id: str) -> list:
        """Requirement slots for one program, in file order."""
        return [s for s in self.requirements if s.program_id == program_id]

    def _enrollments_path(self, student_id: str) -> Path:
        if not student_id or "/" in student_id or "\\" in student_id:
            raise ValidationError(f"Invalid student id: {student_id!r}")
        return self.data_dir / ENROLLMENTS_DIR_NAME / f"{student_id}.json"

    def load_enrollments(self, student_id: str) -> list:
        """
        Load one student's ledger.

        A student with no file yet has an empty ledger. Not cached: ledgers
        change between calls.
        """
        filepath = self._enrollments_path(student_id)
        if not filepath.exists():
            return []
        with open(filepath, "r", encoding="utf-8") as f:
            rows = json.load(f)

        enrollments = [self.parser.parse_enrollment(r) for r in rows]
        for e in enrollments:
            if e.student_id != student_id:
                raise ValidationError(
                    f"Enrollment {e.id} belongs to {e.student_id}, not {student_id}"
                )
        return enrollments

    def save_enrollments(self, student_id: str, enrollments) -> Path:
        """Write a student's ledger back, preserving order."""
        filepath = self._enrollments_path(student_id)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump([e.to_dict() for e in enrollments], f, indent=2)
        logger.info("Saved %d enrollment(s) for %s", len(enrollments), student_id)
        return filepath
