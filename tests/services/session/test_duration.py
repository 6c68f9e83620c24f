"""Tests for the duration helpers."""
from datetime import date, time

import pytest

from dp_hours.domain.session.session import Session
from dp_hours.services.session.duration import (
    SessionStats,
    format_duration,
    session_stats,
    total_duration,
    total_minutes,
)


@pytest.mark.parametrize(
    "minutes,expected",
    [
        (0, "In progress"),
        (45, "0h 45m"),
        (330, "5h 30m"),
        (357, "5h 57m"),
        (358, "6h 0m"),
        (359, "6h 0m"),
        (1440, "1d 0h 0m"),
        (1563, "1d 2h 3m"),
    ],
)
def test_format_duration(minutes: int, expected: str) -> None:
    """Durations are shown in days, hours and minutes."""
    assert format_duration(minutes) == expected


def test_total_duration() -> None:
    """Durations of several sessions add up."""
    sessions = [
        Session("Rig1", date(2024, 1, 1), time(8), date(2024, 1, 1), time(9), True, 60),
        Session("Rig1", date(2024, 1, 1), time(10), None, None, False, 0),
        Session("Rig2", date(2024, 1, 2), time(8), date(2024, 1, 2), time(9), True, 90),
    ]
    assert total_minutes(sessions) == 150
    assert total_duration(sessions) == "2h 30m"
    assert total_duration([]) == "In progress"


def test_session_stats() -> None:
    """Complete sessions and locations are counted apart from the total."""
    sessions = [
        Session("Rig1", date(2024, 1, 1), time(8), date(2024, 1, 1), time(9), True, 60),
        Session("Rig1", date(2024, 1, 1), time(10), None, None, False, 30),
        Session("Rig2", date(2024, 1, 2), time(8), date(2024, 1, 2), time(9), True, 90),
    ]
    assert session_stats(sessions) == SessionStats(
        total_minutes=180, complete_minutes=150, location_count=2
    )
    assert session_stats([]) == SessionStats(0, 0, 0)
