"""
Degree Planner - Main Orchestrator.

This module contains the DegreePlanner class that connects the data files,
the engines and the presentation layer.
"""

import logging
from pathlib import Path

from .config import RAW_CATALOG_FILE, CLEAN_CATALOG_FILE
from .data import DataLoader
from .engines import CourseNormalizer, MatchingEngine, TemplatePlanner, choose_template
from .errors import ValidationError
from .models import Enrollment, EnrollmentLedger, ProgressReport, AssignmentPlan
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


class DegreePlanner:
    """
    Main interface for the degree planner.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    1. Loads records through DataLoader (the only component doing file I/O)
    2. Passes explicit, immutable snapshots to the engines
    3. Hands the returned data to the display

    The engines stay pure; this class owns the load -> compute -> save cycle.
    Its only writes are ledger saves (a committed plan or a manually added
    course), and they assume a single writer per student.

    TO CHANGE THE UI:
    -----------------
    Pass a different display object, or call the `*_data` methods and
    serialize the returned dataclasses yourself.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        planner = DegreePlanner()
        report = planner.run_progress("student-1", "bs-business")
        plan = planner.run_template_plan("student-1", template_id="business-core")
    """

    def __init__(self, data_dir=None, display=None):
        self.loader = DataLoader(data_dir)
        self.normalizer = CourseNormalizer()
        self.matching_engine = MatchingEngine()
        self.template_planner = TemplatePlanner()
        self.display = display if display is not None else TerminalDisplay()

    # -------------------------------------------------------------------------
    # Data-only entry points
    # -------------------------------------------------------------------------

    def progress_data(self, student_id: str, program_id: str) -> ProgressReport:
        program = self.loader.get_program(program_id)
        if program is None:
            raise ValidationError(f"Unknown program: {program_id}")

        requirements = self.loader.load_requirements(program_id)
        enrollments = self.loader.load_enrollments(student_id)

        logger.info("Computing progress: student=%s program=%s enrollments=%d slots=%d",
                    student_id, program_id, len(enrollments), len(requirements))
        return self.matching_engine.compute_progress(enrollments, requirements, program)

    def template_plan_data(self, student_id: str, template_id: str = None,
                           assigned_by: str = None) -> tuple:
        """Return (template, plan, ledger) without writing anything."""
        template = choose_template(self.loader.templates, template_id)
        if template is None:
            wanted = template_id if template_id else "default template"
            raise ValidationError(f"Template not found: {wanted}")

        ledger = EnrollmentLedger(self.loader.load_enrollments(student_id))
        plan = self.template_planner.plan_assignment(
            template, ledger.snapshot(), student_id, assigned_by
        )
        return template, plan, ledger

    # -------------------------------------------------------------------------
    # Display entry points
    # -------------------------------------------------------------------------

    def run_progress(self, student_id: str, program_id: str) -> ProgressReport:
        report = self.progress_data(student_id, program_id)
        program = self.loader.get_program(program_id)
        self.display.print_progress_report(report, program.title)
        return report

    def run_template_plan(self, student_id: str, template_id: str = None,
                          assigned_by: str = None, commit: bool = False) -> AssignmentPlan:
        """
        Preview (and optionally commit) a template assignment.

        On commit the new enrollments are appended to the student's ledger
        file. Progress is not recomputed here; run `run_progress` afterwards.
        """
        template, plan, ledger = self.template_plan_data(student_id, template_id, assigned_by)

        if commit and plan.to_create:
            ledger.commit(plan)
            self.loader.save_enrollments(student_id, ledger.snapshot())

        self.display.print_assignment_plan(plan, template, committed=commit)
        return plan

    def run_add_enrollment(self, student_id: str, record: dict) -> Enrollment:
        """
        Manually add one course to a student's ledger.

        `record` uses the same fields as an enrollment file row, minus `id`
        and `student_id`, which are filled in here. It goes through the same
        field validation and catalog enrichment as loaded records.
        """
        ledger = EnrollmentLedger(self.loader.load_enrollments(student_id))
        enrollment = self.loader.parser.parse_enrollment({
            **record,
            "id": self.template_planner.id_factory(),
            "student_id": student_id,
        })

        ledger.add(enrollment)
        self.loader.save_enrollments(student_id, ledger.snapshot())

        self.display.print_enrollment_added(enrollment)
        return enrollment

    def list_programs(self) -> list:
        programs = self.loader.list_programs()
        self.display.print_programs(programs)
        return programs

    def list_templates(self) -> list:
        templates = sorted(self.loader.templates, key=lambda t: (not t.is_default, t.name))
        self.display.print_templates(templates)
        return templates

    def run_normalize(self, input_path=None, output_path=None) -> list:
        """Offline batch: raw catalog file -> canonical catalog file."""
        input_path = Path(input_path) if input_path else self.loader.data_dir / RAW_CATALOG_FILE
        output_path = Path(output_path) if output_path else self.loader.data_dir / CLEAN_CATALOG_FILE
        return self.normalizer.normalize_file(input_path, output_path)
