"""Human readable session durations and session statistics."""
from typing import Iterable, NamedTuple

from dp_hours.domain.session.session import Session
from dp_hours.i18n import _


class SessionStats(NamedTuple):
    """Totals over a list of sessions."""

    total_minutes: int
    complete_minutes: int
    """Minutes of the sessions closed by an Off."""

    location_count: int
    """Number of distinct locations having a session."""


def format_duration(minutes: int) -> str:
    """Format a number of minutes as ``"5h 30m"`` or ``"1d 2h 0m"``.

    Zero is shown as in progress, the duration of an open session. A
    remainder of 58 or 59 minutes is rounded up to the next hour.
    """
    if minutes <= 0:
        return _("In progress")

    if minutes % 60 >= 58:
        minutes = (minutes // 60 + 1) * 60

    hours, mins = divmod(minutes, 60)
    if hours >= 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours}h {mins}m"
    return f"{hours}h {mins}m"


def total_minutes(sessions: Iterable[Session]) -> int:
    """Return the sum of the session durations."""
    return sum(session.duration_minutes for session in sessions)


def total_duration(sessions: Iterable[Session]) -> str:
    """Return the formatted sum of the session durations."""
    return format_duration(total_minutes(sessions))


def session_stats(sessions: Iterable[Session]) -> SessionStats:
    """Sum all sessions and the complete ones, and count their locations."""
    sessions = list(sessions)
    return SessionStats(
        total_minutes=total_minutes(sessions),
        complete_minutes=total_minutes(
            session for session in sessions if session.complete
        ),
        location_count=len({session.location for session in sessions}),
    )
