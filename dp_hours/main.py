"""Main module for the DP Hours application."""
import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from dp_hours.core.date_range import DateRange
from dp_hours.core.time_utils import format_display_date, format_time, parse_user_date
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import OperationType
from dp_hours.exceptions import DPHoursError, RecordNotFoundError
from dp_hours.i18n import _
from dp_hours.infrastructure.config import Config
from dp_hours.services import (
    DPHoursService,
    MutationResult,
    format_duration,
    session_stats,
)

logger = logging.getLogger(__name__)


def parse_entry(value: str) -> tuple[str, OperationType]:
    """Parse a ``TIME=TYPE`` command line entry."""
    time_text, separator, type_label = value.partition("=")
    if not separator:
        raise argparse.ArgumentTypeError(f"Expected TIME=TYPE, got {value!r}")
    try:
        return time_text.strip(), OperationType.parse(type_label.strip())
    except DPHoursError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_date_argument(value: str) -> date:
    """Parse a date typed on the command line."""
    try:
        return parse_user_date(value)
    except DPHoursError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_window_argument(value: str) -> TimeWindow:
    """Parse a ``HH:MM-HH:MM`` window typed on the command line."""
    try:
        return TimeWindow.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.
    """
    parser = argparse.ArgumentParser(description="DP Hours")
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration",
        type=Path,
        required=True,
    )
    sub_parser = parser.add_subparsers(dest="command", required=True)

    list_parser = sub_parser.add_parser("list", help="List the operation records")
    list_parser.add_argument(
        "date",
        help="Only list the records of this date",
        type=parse_date_argument,
        nargs="?",
    )

    add_parser = sub_parser.add_parser("add", help="Add operations at a location")
    add_parser.add_argument(
        "date", help="Date of the operations", type=parse_date_argument
    )
    add_parser.add_argument("location", help="Location of the operations")
    add_parser.add_argument(
        "entries",
        help="Operations as TIME=TYPE, e.g. 08:00=setup 20:00=off",
        type=parse_entry,
        nargs="+",
    )
    add_parser.add_argument(
        "--leave-open",
        help="Allow the location to stay without a closing DP OFF",
        action="store_true",
    )

    delete_parser = sub_parser.add_parser("delete", help="Delete operation records")
    delete_parser.add_argument("record_ids", help="IDs of the records", nargs="+")

    sessions_parser = sub_parser.add_parser("sessions", help="List the DP sessions")
    shifts_parser = sub_parser.add_parser(
        "shifts", help="Break the DP sessions down by shift"
    )
    for range_parser in (sessions_parser, shifts_parser):
        range_parser.add_argument(
            "start_date", help="First day of the report", type=parse_date_argument
        )
        range_parser.add_argument(
            "end_date", help="Last day of the report", type=parse_date_argument
        )
    sessions_parser.add_argument(
        "--window",
        help="Only consider operations inside HH:MM-HH:MM",
        type=parse_window_argument,
    )
    return parser


def create_service(config: Config) -> DPHoursService:
    """Build the service from the configuration."""
    return DPHoursService(
        repository=config.create_repository(),
        validator=config.create_validator(),
        shift_calculator=config.create_shift_calculator(),
    )


def print_mutation(result: MutationResult, verb: str) -> int:
    """Print the outcome of a mutation and return the exit status."""
    if not result.is_applied:
        print(_("Rejected: {message}").format(message=result.validation.message))
        return 1
    print(f"{verb} {len(result.records)} record(s)")
    for record in result.records:
        print(f"  {record.record_id}  {record}")
    return 0


def list_records(service: DPHoursService, day: date | None) -> int:
    """Print the records, grouped by date (newest first), location and cycle."""
    store = service.get_store()
    days = (day,) if day is not None else store.dates_with_records()
    for current_day in days:
        print(format_display_date(current_day))
        for location in store.locations_on(current_day):
            print(f"  {location}")
            for index, cycle in enumerate(store.cycles_on(current_day, location), 1):
                print(f"    #{index}")
                for record in cycle:
                    print(
                        f"      {format_time(record.operation_time)} "
                        f"{record.operation_type.display_name:<18} {record.record_id}"
                    )
    return 0


def print_sessions(
    service: DPHoursService, date_range: DateRange, window: TimeWindow | None
) -> int:
    """Print the sessions of a date range and their statistics."""
    sessions = service.get_sessions(date_range, window)
    for session in sessions:
        print(f"{session}  {format_duration(session.duration_minutes)}")
    stats = session_stats(sessions)
    print(_("Total: {duration}").format(duration=format_duration(stats.total_minutes)))
    print(
        _("Complete: {duration}").format(
            duration=format_duration(stats.complete_minutes)
        )
    )
    print(_("Locations: {count}").format(count=stats.location_count))
    return 0


def print_shift_report(service: DPHoursService, date_range: DateRange) -> int:
    """Print the time spent in each shift, day by day."""
    for result in service.get_shift_report(date_range):
        print(
            f"{format_display_date(result.shift_date)} {result.shift.shift_id:<8} "
            f"{result.location:<12} {format_time(result.start_time)}-"
            f"{format_time(result.end_time)} {result.hours_in_shift:.2f}h"
        )
    return 0


def run(args: argparse.Namespace, service: DPHoursService) -> int:
    """Run a parsed command and return the exit status."""
    match args.command:
        case "list":
            return list_records(service, args.date)
        case "add":
            return print_mutation(
                service.record_operations(
                    args.date, args.location, args.entries, args.leave_open
                ),
                "Saved",
            )
        case "delete":
            try:
                result = service.delete_records(args.record_ids)
            except RecordNotFoundError as e:
                print(e)
                return 1
            return print_mutation(result, "Deleted")
        case "sessions":
            return print_sessions(
                service, DateRange.between(args.start_date, args.end_date), args.window
            )
        case "shifts":
            return print_shift_report(
                service, DateRange.between(args.start_date, args.end_date)
            )
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main() -> None:
    """
    Main function.
    """
    args = create_parser().parse_args()

    config = Config()
    config.parse(args.config)
    config.setup_logging()
    config.setup_i18n()

    try:
        status = run(args, create_service(config))
    except (DPHoursError, ValueError) as e:
        logger.error("Command %s failed: %s", args.command, e)
        print(e, file=sys.stderr)
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
