"""Command line interface for roster comparison.

Usage:
    python -m api.cli compare OLD.pdf NEW.pdf [--json] [--courses]
    python -m api.cli parse ROSTER.pdf [--json]
"""

import argparse
import os
from typing import List, Optional

from comparison import course_risk, filter_students
from shared.config import RosterConfig, load_config
from shared.exceptions import EmptyRosterError, ExtractionError

from ..formatters import ResponseFormatter
from ..use_cases import CompareRostersUseCase
from ..validators import RequestValidator, ValidationError

EXIT_OK = 0
EXIT_EXTRACTION = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="roster-continuity",
        description="Find students from an earlier roster PDF who did not re-enroll",
    )
    ap.add_argument("--backend", help="PDF decoder: pymupdf or pdfminer (env PDF_BACKEND)")
    ap.add_argument("--verbose", action="store_true", help="Print extraction and parsing progress")
    sub = ap.add_subparsers(dest="command", required=True)

    cmp_ = sub.add_parser("compare", help="Compare an earlier roster against the current one")
    cmp_.add_argument("old", help="Earlier period roster PDF")
    cmp_.add_argument("new", help="Current period roster PDF")
    cmp_.add_argument("--terminal-level", help="Level treated as graduated (default L19, env TERMINAL_LEVEL)")
    cmp_.add_argument("--search", default="", help="Filter lost students by name, id, email or phone")
    cmp_.add_argument("--category", help="Filter lost students by category")
    cmp_.add_argument("--level", help="Filter lost students by normalized level (e.g. L05)")
    cmp_.add_argument("--schedule", help="Filter lost students by schedule block")
    cmp_.add_argument("--courses", action="store_true", help="Show headcount and risk per course of the current roster")
    cmp_.add_argument("--json", action="store_true", help="Emit JSON")

    parse_ = sub.add_parser("parse", help="Parse a single roster and list its students")
    parse_.add_argument("pdf", help="Roster PDF")
    parse_.add_argument("--json", action="store_true", help="Emit JSON")
    return ap


def build_config(args: argparse.Namespace) -> RosterConfig:
    config = load_config()
    config.pdf_backend = RequestValidator.validate_backend(args.backend or config.pdf_backend)
    if args.verbose:
        config.verbose = True
    terminal_level = getattr(args, "terminal_level", None)
    if terminal_level:
        config.terminal_level = RequestValidator.validate_terminal_level(terminal_level)
    return config


def run_compare(args: argparse.Namespace, config: RosterConfig) -> int:
    RequestValidator.validate_pdf_path(args.old)
    RequestValidator.validate_pdf_path(args.new)

    use_case = CompareRostersUseCase(config)
    result = use_case.execute(args.old, args.new)

    lost = filter_students(
        result.lost,
        query=args.search,
        category=args.category,
        level=args.level,
        schedule=args.schedule,
    )
    courses = course_risk(result.new_students) if args.courses else None

    if args.json:
        print(ResponseFormatter.result_json(result, lost, courses))
        return EXIT_OK

    print(ResponseFormatter.result_text(result, lost))
    if courses is not None:
        print()
        print(ResponseFormatter.courses_text(courses))
    return EXIT_OK


def run_parse(args: argparse.Namespace, config: RosterConfig) -> int:
    RequestValidator.validate_pdf_path(args.pdf)

    use_case = CompareRostersUseCase(config)
    students = use_case.parse_document(args.pdf)
    if not students:
        print(f"[warn] No students found in {os.path.basename(args.pdf)} (scanned PDF or different format?)")

    if args.json:
        print(ResponseFormatter.students_json(students))
        return EXIT_OK

    for s in students:
        print(ResponseFormatter.student_line(s))
    print(f"[done] {len(students)} students")
    return EXIT_OK


def run_cli(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
        if args.command == "parse":
            return run_parse(args, config)
        return run_compare(args, config)
    except ValidationError as e:
        print(f"[ERR] {e}")
        return EXIT_USAGE
    except EmptyRosterError as e:
        print(f"[ERR] {e}")
        return EXIT_USAGE
    except ExtractionError as e:
        print(f"[ERR] {e}")
        return EXIT_EXTRACTION


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    return run_cli(args)


__all__ = ["create_parser", "run_cli", "main"]
