"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the degree_planner package.

To create a different UI (web, API, PDF), create a new class with the same
method signatures but different output handling. ProgressReport.to_dict()
and AssignmentPlan.summary() already give the plain structured data an API
response needs.
"""

from ..models import (
    Enrollment,
    SlotProgress,
    ProgressReport,
    AssignmentPlan,
    CourseTemplate,
)


class TerminalDisplay:
    """
    Pretty terminal output for progress reports and template plans.
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_RED = "\033[41m"

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def status_badge(cls, satisfied: bool, pending: bool = False, overflow: bool = False) -> str:
        """Return a colored status badge."""
        if overflow:
            return f"{cls.BG_RED}{cls.WHITE} ⚠ OVERFLOW {cls.RESET}"
        if satisfied:
            return f"{cls.BG_GREEN}{cls.WHITE} ✓ COMPLETE {cls.RESET}"
        elif pending:
            return f"{cls.BG_YELLOW}{cls.WHITE} ⏳ PENDING {cls.RESET}"
        else:
            return f"{cls.BG_RED}{cls.WHITE} ✗ MISSING {cls.RESET}"

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    @classmethod
    def print_progress_report(cls, report: ProgressReport, program_title: str = ""):
        """Print the per-slot table followed by program totals and violations."""
        cls.print_header(f"DEGREE PROGRESS: {program_title.upper()}" if program_title else "DEGREE PROGRESS")

        print(f"\n  {cls.BOLD}Overall Status:{cls.RESET} {cls.status_badge(report.overall_satisfied)}")
        print(f"  {cls.BOLD}Credits:{cls.RESET} {report.total_credits_earned}/{report.total_credits_required}"
              f" {cls.DIM}({report.credits_remaining} remaining){cls.RESET}")
        print(f"  {cls.BOLD}Upper-Level:{cls.RESET} {report.upper_level_credits_earned}/{report.upper_level_credits_required}")
        print(f"  {cls.BOLD}In Progress:{cls.RESET} {report.in_progress_credits} credit(s)"
              f" {cls.DIM}(projected {report.projected_credits}){cls.RESET}")

        print(f"\n  {cls.BOLD}{'CODE':<12} {'AREA':<20} {'CREDITS':<12} {'STATUS'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
        for slot in report.slots:
            cls._print_slot(slot)

        if report.unassigned_enrollment_ids:
            print(f"\n  {cls.DIM}Completed but not applied to any requirement: "
                  f"{', '.join(report.unassigned_enrollment_ids)}{cls.RESET}")

        if report.violations:
            cls.print_subheader("Needs Attention")
            for v in report.violations:
                color = cls.RED if v.kind == "overflow" else cls.YELLOW
                print(f"  {color}•{cls.RESET} {v.message}")
        print()

    @classmethod
    def _print_slot(cls, slot: SlotProgress):
        bound = f"{slot.min_credits}" if slot.max_credits is None else f"{slot.min_credits}-{slot.max_credits}"
        credits = f"{slot.credits_applied}/{bound}"

        if slot.overflow:
            code_color = cls.RED
            status = f"{cls.RED}⚠ +{slot.overflow_credits} over max{cls.RESET}"
        elif slot.satisfied:
            code_color = cls.GREEN
            status = f"{cls.GREEN}✓ Done{cls.RESET}"
        elif slot.is_pending:
            code_color = cls.YELLOW
            status = f"{cls.YELLOW}⏳ Pending ({slot.projected_credits}){cls.RESET}"
        else:
            code_color = cls.RED
            status = f"{cls.RED}✗ Need {slot.credits_remaining}{cls.RESET}"

        print(f"  {code_color}{slot.code:<12}{cls.RESET} {slot.area:<20} {credits:<12} {status}")

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    @classmethod
    def print_templates(cls, templates: list):
        cls.print_header("COURSE TEMPLATES")
        for t in templates:
            marker = f" {cls.GREEN}(default){cls.RESET}" if t.is_default else ""
            total = sum(c.credits for c in t.courses)
            print(f"  {cls.BOLD}{t.id}{cls.RESET} {t.name}{marker} {cls.DIM}- {len(t.courses)} course(s), {total} credit(s){cls.RESET}")
        print()

    @classmethod
    def print_assignment_plan(cls, plan: AssignmentPlan, template: CourseTemplate, committed: bool = False):
        """Print what a template assignment would create and what it skips, with reasons."""
        title = "TEMPLATE ASSIGNED" if committed else "TEMPLATE PREVIEW"
        cls.print_header(f"{title}: {template.name.upper()}")

        summary = plan.summary()
        print(f"\n  {cls.GREEN}Assigned:{cls.RESET} {summary['assigned']}")
        print(f"  {cls.YELLOW}Skipped:{cls.RESET} {summary['skipped']}")

        if plan.to_create:
            cls.print_subheader("New Courses")
            for e in plan.to_create:
                print(f"  {cls.GREEN}+{cls.RESET} {e.course_code:<12} {e.title} {cls.DIM}({e.credits} cr, {e.provider_id}){cls.RESET}")

        if plan.to_skip:
            cls.print_subheader("Skipped")
            for item in summary["skipped_courses"]:
                print(f"  {cls.YELLOW}-{cls.RESET} {item['course_code']:<12} {item['title']} {cls.DIM}({item['reason']}){cls.RESET}")

        if not committed and plan.to_create:
            print(f"\n  {cls.DIM}Dry run. Re-run with --commit to add these courses.{cls.RESET}")
        print()

    @classmethod
    def print_programs(cls, programs: list):
        cls.print_header("PROGRAMS")
        for p in programs:
            print(f"  {cls.BOLD}{p.id}{cls.RESET} {p.title} {cls.DIM}({p.catalog_year}) - {p.total_required} credit(s), {p.ul_required} upper-level{cls.RESET}")
        print()

    @classmethod
    def print_enrollment_added(cls, enrollment: Enrollment):
        cls.print_header("ENROLLMENT ADDED")
        level = {True: "upper", False: "lower"}.get(enrollment.is_upper_level, "unknown")
        print(f"\n  {cls.GREEN}+{cls.RESET} {enrollment.course_code:<12} {enrollment.title} {cls.DIM}({enrollment.credits} cr, {enrollment.provider_id}){cls.RESET}")
        print(f"    {cls.DIM}id {enrollment.id}, status {enrollment.status.value}, area {enrollment.area or '-'}, level {level}{cls.RESET}")
        print()

    @classmethod
    def print_error(cls, message: str):
        print(f"\n  {cls.RED}Error: {message}{cls.RESET}\n")
