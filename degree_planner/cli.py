"""
Command-Line Interface for the Degree Planner.

COMMANDS:
---------
1. progress   Match a student's enrollments against a program
2. plan       Preview (or --commit) a course template for a student
3. templates  List available course templates
4. programs   List degree programs
5. add        Manually add a course to a student's ledger
6. normalize  Offline batch: raw provider catalog -> canonical catalog

Run from the project root:
    python -m degree_planner progress --student student-1 --program bs-business
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from .errors import ValidationError
from .logging_setup import configure_logging
from .models import EnrollmentStatus
from .planner import DegreePlanner
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="degree_planner",
        description="Degree planning: requirement matching, template assignment, catalog normalization.",
    )
    parser.add_argument("--data-dir", help="Directory holding programs.json, requirements.json, ...")
    parser.add_argument("--log-level", help="Logging level (default from LOG_LEVEL or INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("progress", help="Show progress against a program")
    p.add_argument("--student", required=True, help="Student id")
    p.add_argument("--program", required=True, help="Program id")

    p = sub.add_parser("plan", help="Preview or commit a course template")
    p.add_argument("--student", required=True, help="Student id")
    p.add_argument("--template", help="Template id (default template if omitted)")
    p.add_argument("--assigned-by", help="Advisor id for advisor assignments")
    p.add_argument("--commit", action="store_true", help="Write the new enrollments to the ledger")

    sub.add_parser("templates", help="List course templates")
    sub.add_parser("programs", help="List degree programs")

    p = sub.add_parser("add", help="Manually add a course to a student's ledger")
    p.add_argument("--student", required=True, help="Student id")
    p.add_argument("--provider", required=True, help="Provider id (e.g. study_com)")
    p.add_argument("--code", required=True, help="Course code (e.g. 'BUS 305')")
    p.add_argument("--title", default="", help="Course title")
    p.add_argument("--credits", required=True, type=int, help="Credit value (1-6)")
    p.add_argument("--area", help="Requirement area (looked up in the catalog if omitted)")
    p.add_argument("--status", default="todo", choices=[s.value for s in EnrollmentStatus],
                   help="Initial status (default: todo)")
    p.add_argument("--upper-level", action="store_true", default=None,
                   help="Mark as upper-level (inferred from the code if omitted)")
    p.add_argument("--url", help="Course URL")

    p = sub.add_parser("normalize", help="Normalize a raw provider catalog file")
    p.add_argument("--input", help="Raw catalog JSON (default: <data-dir>/catalog_raw.json)")
    p.add_argument("--output", help="Canonical catalog JSON (default: <data-dir>/catalog_clean.json)")

    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or os.getenv("LOG_LEVEL"))

    planner = DegreePlanner(data_dir=args.data_dir or os.getenv("DEGREE_PLANNER_DATA_DIR"))

    try:
        if args.command == "progress":
            planner.run_progress(args.student, args.program)
        elif args.command == "plan":
            planner.run_template_plan(
                args.student,
                template_id=args.template,
                assigned_by=args.assigned_by,
                commit=args.commit,
            )
        elif args.command == "templates":
            planner.list_templates()
        elif args.command == "programs":
            planner.list_programs()
        elif args.command == "add":
            planner.run_add_enrollment(args.student, {
                "provider_id": args.provider,
                "course_code": args.code,
                "title": args.title,
                "credits": args.credits,
                "area": args.area,
                "status": args.status,
                "is_upper_level": args.upper_level,
                "course_url": args.url,
            })
        elif args.command == "normalize":
            cleaned = planner.run_normalize(args.input, args.output)
            print(f"Normalized {len(cleaned)} course(s)")
    except (ValidationError, FileNotFoundError, json.JSONDecodeError) as e:
        logger.error("%s failed: %s", args.command, e)
        TerminalDisplay.print_error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
