#!/usr/bin/env python3
"""Course timetable builder.

Picks sections from the course-outlines catalog into a conflict-free
weekly timetable and exports it as an iCalendar (.ics) file.
"""

import argparse
import getpass
import logging
import sys
from datetime import date, datetime, timedelta
from typing import Optional

from catalog import CatalogClient, CourseLoader, Term
from scheduler import (
    Added,
    AssociationStatus,
    ComponentType,
    SectionRecord,
    TimetableController,
    find_all_conflicts,
)
from scheduler.persistence import JsonScheduleRepository
from scheduler.store import Schedule
from scheduler.times import format_minutes
from scheduler.views import hour_labels, layout_grid
from transformer import ICalTransformer

TERM_MONTHS = {
    "spring": (1, 4),
    "summer": (5, 8),
    "fall": (9, 12),
}


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def parse_term(term_str: str) -> Term:
    try:
        term = Term.parse(term_str)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    if term.season not in TERM_MONTHS:
        raise argparse.ArgumentTypeError(
            f"Unknown season '{term.season}'. Expected one of: {', '.join(TERM_MONTHS)}."
        )
    return term


def parse_course_ref(text: str, with_section: bool) -> tuple[str, ...]:
    """Split "CMPT 120 D100" into its parts."""
    parts = text.replace("-", " ").split()
    expected = 3 if with_section else 2
    if len(parts) != expected:
        example = "CMPT 120 D100" if with_section else "CMPT 120"
        raise argparse.ArgumentTypeError(f"Expected something like '{example}', got '{text}'.")
    return tuple(part.upper() for part in parts)


def get_default_term_dates(term: Term) -> tuple[date, date]:
    """First and last day of a term's teaching months.

    Spring runs January-April, summer May-August and fall
    September-December.
    """
    first_month, last_month = TERM_MONTHS[term.season]
    year = int(term.year)
    start = date(year, first_month, 1)
    if last_month == 12:
        end = date(year, 12, 31)
    else:
        end = date(year, last_month + 1, 1) - timedelta(days=1)
    return start, end


def describe_section(section: SectionRecord) -> str:
    times = []
    for block in section.blocks:
        if not block.is_scheduled:
            times.append("TBA")
            continue
        days = "/".join(day.short_name for day in sorted(block.days))
        times.append(
            f"{days} {format_minutes(block.start_minutes)}-{format_minutes(block.end_minutes)}"
        )
    when = ", ".join(times) or "no meeting times"
    suffix = "" if section.detailed else " (details unavailable)"
    return f"{section.section_label:<6} {section.component_type.value:<9} {when}{suffix}"


class TimetableSession:
    """Wires the catalog loader to the controller for one CLI run."""

    def __init__(self, term: Term, loader: CourseLoader, controller: TimetableController) -> None:
        self.term = term
        self._loader = loader
        self.controller = controller
        self._courses: dict[tuple[str, str], list[SectionRecord]] = {}

    def sections(self, dept: str, number: str) -> list[SectionRecord]:
        key = (dept, number)
        if key not in self._courses:
            self._courses[key] = self._loader.load_course(self.term, dept, number) or []
        return self._courses[key]

    def list_course(self, dept: str, number: str) -> None:
        sections = self.sections(dept, number)
        if not sections:
            print(f"No sections found for {dept} {number} in {self.term}.")
            return

        print(f"\n{dept} {number} ({self.term})")
        for section in sections:
            print(f"  {describe_section(section)}")

        result = self.controller.associated_sections(f"{dept} {number}", sections)
        if result.status is AssociationStatus.NO_LECTURE_SELECTED:
            print(f"  {result.advisory.message}.")
        elif result.status is AssociationStatus.FALLBACK_ALL:
            print("  No exact lab/tutorial match for the chosen lecture, showing all.")
        elif result.sections:
            labels = ", ".join(s.section_label for s in result.sections)
            print(f"  Goes with your lecture: {labels}")

    def add(self, dept: str, number: str, label: str) -> bool:
        sections = self.sections(dept, number)
        section = next((s for s in sections if s.section_label == label), None)
        if section is None:
            print(f"Error: {dept} {number} has no section {label}.", file=sys.stderr)
            return False

        if section.component_type is not ComponentType.LECTURE:
            result = self.controller.associated_sections(section.course_code, sections)
            if result.status is AssociationStatus.NO_LECTURE_SELECTED:
                print(f"Warning: {result.advisory.message}.", file=sys.stderr)
                return False
            if result.status is AssociationStatus.MATCHED and section not in result.sections:
                print(
                    f"Warning: {label} is not paired with your {section.course_code} lecture.",
                    file=sys.stderr,
                )

        outcome = self.controller.add(section)
        if isinstance(outcome, Added):
            print(outcome.message)
            return True
        print(f"Rejected: {outcome.message}", file=sys.stderr)
        return False


def print_schedule(schedule: Schedule) -> None:
    if not len(schedule):
        print("\nYour schedule is empty.")
        return

    print(f"\nYour courses ({len(schedule)}):")
    for entry in schedule:
        print(f"  {entry.course_code:<10} {describe_section(entry.section)}")

    grid = layout_grid(schedule)
    first, last = hour_labels()[0], hour_labels()[-1]
    print(f"\nWeek ({first} - {last}):")
    for day, cells in grid.items():
        blocks = ", ".join(
            f"{cell.label} {format_minutes(cell.block.start_minutes)}" for cell in cells
        )
        print(f"  {day.short_name}: {blocks or '-'}")


def main() -> None:
    """Main entry point for the timetable builder."""
    parser = argparse.ArgumentParser(
        description="Build a conflict-free class timetable and export it to iCalendar.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 timetable_builder.py --term 2025/spring --list "CMPT 120"
  python3 timetable_builder.py --term 2025/spring --add "CMPT 120 D100" --add "CMPT 120 D101" -o spring.ics
  python3 timetable_builder.py --term 2025/spring --schedule-dir ~/.timetables --remove "CMPT 120 D101"
        """
    )

    parser.add_argument(
        "--term",
        type=parse_term,
        required=True,
        help="Term to build a timetable for (format: YEAR/SEASON, e.g. 2025/spring)"
    )

    parser.add_argument(
        "--list",
        action="append",
        default=[],
        type=lambda text: parse_course_ref(text, with_section=False),
        metavar="COURSE",
        help="Show the sections of a course, e.g. 'CMPT 120'"
    )

    parser.add_argument(
        "--add",
        action="append",
        default=[],
        type=lambda text: parse_course_ref(text, with_section=True),
        metavar="SECTION",
        help="Add a section, e.g. 'CMPT 120 D100' (repeatable, applied in order)"
    )

    parser.add_argument(
        "--remove",
        action="append",
        default=[],
        type=lambda text: parse_course_ref(text, with_section=True),
        metavar="SECTION",
        help="Remove a section from a saved schedule"
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Start from an empty schedule even if one is saved"
    )

    parser.add_argument(
        "--schedule-dir",
        default=None,
        help="Directory where schedules are saved between runs"
    )

    parser.add_argument(
        "--user",
        default=None,
        help="Name the saved schedule belongs to (default: current login)"
    )

    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=None,
        help="First day of classes (format: YYYY-MM-DD). Default: first day of the term"
    )

    parser.add_argument(
        "--end-date",
        type=parse_date,
        default=None,
        help="Last day of classes (format: YYYY-MM-DD). Default: last day of the term"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the schedule to this .ics file"
    )

    parser.add_argument(
        "--catalog-url",
        default=None,
        help="Course-outlines endpoint (default: $SFU_OUTLINES_URL or the public SFU feed)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show catalog and engine log messages (repeat for debug output)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    default_start, default_end = get_default_term_dates(args.term)
    start_date = args.start_date or default_start
    end_date = args.end_date or default_end

    if start_date >= end_date:
        print("Error: Start date must be before end date.", file=sys.stderr)
        sys.exit(1)

    output_path: Optional[str] = args.output
    if output_path and not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    user = args.user or getpass.getuser()
    repository = JsonScheduleRepository(args.schedule_dir) if args.schedule_dir else None

    try:
        schedule = Schedule()
        if repository and not args.clear:
            schedule = repository.load(user, str(args.term))
            for entry, conflict in find_all_conflicts(schedule):
                print(
                    f"Warning: saved {entry.course_code} {entry.section_label} "
                    f"overlaps {conflict}.",
                    file=sys.stderr,
                )

        controller = TimetableController(schedule)
        loader = CourseLoader(CatalogClient(base_url=args.catalog_url))
        session = TimetableSession(args.term, loader, controller)

        for dept, number, label in args.remove:
            if controller.remove(f"{dept} {number}", label):
                print(f"Removed {dept} {number} {label}")

        for dept, number, label in args.add:
            session.add(dept, number, label)

        for dept, number in args.list:
            session.list_course(dept, number)

        print_schedule(controller.schedule)
        print(f"Total credits: {controller.total_credits}")

        if repository:
            repository.save(user, str(args.term), controller.schedule)

        if output_path:
            ICalTransformer().export(controller.schedule, start_date, end_date, output_path)

            print(f"Schedule saved to: {output_path}")
            print(f"Period: {start_date} to {end_date}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
