"""Conversion and comparison helpers for dates and times of day.

Canonical forms are ISO dates (``YYYY-MM-DD``) and ``HH:MM`` times. The
log displays dates as ``DD.MM.YYYY`` and still accepts the older
``DD/MM/YYYY`` input.
"""
import re
from datetime import date, datetime, time

from dp_hours.exceptions import InvalidDateError, InvalidTimeError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DISPLAY_DATE_FORMAT = "%d.%m.%Y"

_USER_DATE_PATTERN = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{4})$")


def parse_date(value: str | date) -> date:
    """Parse a canonical ``YYYY-MM-DD`` date.

    Raises:
        InvalidDateError: If the value is not a canonical date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(value) from e


def parse_time(value: str | time) -> time:
    """Parse a ``HH:MM`` time; seconds, if any, are dropped.

    Raises:
        InvalidTimeError: If the value is not a time of day.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    for time_format in (TIME_FORMAT, f"{TIME_FORMAT}:%S"):
        try:
            parsed = datetime.strptime(value.strip(), time_format)
            return parsed.time().replace(second=0)
        except ValueError:
            continue
    raise InvalidTimeError(value)


def parse_user_date(value: str) -> date:
    """Parse a date typed by a user.

    ``DD.MM.YYYY`` is the preferred format, ``DD/MM/YYYY`` and the
    canonical ``YYYY-MM-DD`` are accepted too.

    Raises:
        InvalidDateError: If no supported format matches.
    """
    value = value.strip()
    if (match := _USER_DATE_PATTERN.match(value)) is None:
        return parse_date(value)
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(value) from e


def format_date(value: date) -> str:
    """Format a date in its canonical form."""
    return value.strftime(DATE_FORMAT)


def format_time(value: time) -> str:
    """Format a time of day as ``HH:MM``."""
    return value.strftime(TIME_FORMAT)


def format_display_date(value: date) -> str:
    """Format a date the way the log displays it."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def combine(day: date, time_of_day: time) -> datetime:
    """Return the naive timestamp of a time of day on a given date."""
    return datetime.combine(day, time_of_day)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, negative if end precedes start."""
    return int((end - start).total_seconds() // 60)


def is_time_within_window(value: time, start: time, end: time) -> bool:
    """Check if a time of day falls inside a window, bounds included.

    A window whose start is after its end wraps around midnight: 22:00-06:00
    contains 23:30 and 05:00 but not 12:00.
    """
    if start <= end:
        return start <= value <= end
    return value >= start or value <= end
