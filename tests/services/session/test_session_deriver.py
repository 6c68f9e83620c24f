"""Tests for the session deriver."""
from datetime import date, time

import pytest

from dp_hours.core.date_range import DateRange, SingleDay
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.services.session.session_deriver import SessionOptions, derive_sessions

SETUP = OperationType.SETUP
OFF = OperationType.OFF


def _record(
    at: str, location: str, operation_type: OperationType, day: int = 1
) -> OperationRecord:
    hour, minute = (int(part) for part in at.split(":"))
    return OperationRecord(
        f"{day}-{at}-{location}",
        date(2024, 1, day),
        time(hour, minute),
        location,
        operation_type,
    )


@pytest.fixture(name="january")
def january_fixture() -> DateRange:
    """Return the first week of January 2024."""
    return DateRange.between(date(2024, 1, 1), date(2024, 1, 7))


class TestDeriveSessions:
    """Tests for derive_sessions."""

    def test_single_session(self, january: DateRange) -> None:
        """A Setup and an Off form one complete session."""
        records = [_record("08:00", "Rig1", SETUP), _record("14:00", "Rig1", OFF)]
        sessions = derive_sessions(records, january)
        assert len(sessions) == 1
        assert sessions[0].complete
        assert sessions[0].duration_minutes == 360
        assert sessions[0].setup_id == "1-08:00-Rig1"

    def test_day_long_session(self, january: DateRange) -> None:
        """A 08:00 to 20:00 session lasts 720 minutes."""
        records = [_record("20:00", "Rig1", OFF), _record("08:00", "Rig1", SETUP)]
        sessions = derive_sessions(records, january)
        assert [(s.start_time, s.end_time, s.duration_minutes) for s in sessions] == [
            (time(8), time(20), 720)
        ]

    def test_unterminated_session(self, january: DateRange) -> None:
        """A Setup without Off gives an open session."""
        sessions = derive_sessions([_record("08:00", "Rig1", SETUP)], january)
        assert len(sessions) == 1
        assert not sessions[0].complete
        assert sessions[0].end_time is None
        assert sessions[0].end_date is None
        assert sessions[0].duration_minutes == 0

    def test_intermediate_operations_are_ignored(self, january: DateRange) -> None:
        """Only Setup and Off delimit sessions."""
        records = [
            _record("08:00", "Rig1", SETUP),
            _record("09:00", "Rig1", OperationType.MOVING_IN),
            _record("10:00", "Rig1", OperationType.HANDLING_OFFSHORE),
            _record("11:00", "Rig1", OperationType.PULLING_OUT),
            _record("12:00", "Rig1", OFF),
        ]
        sessions = derive_sessions(records, january)
        assert len(sessions) == 1
        assert sessions[0].duration_minutes == 240

    def test_overnight_session(self, january: DateRange) -> None:
        """A session may close on a later day."""
        records = [_record("20:00", "Rig1", SETUP, 1), _record("06:00", "Rig1", OFF, 2)]
        sessions = derive_sessions(records, january)
        assert sessions[0].end_date == date(2024, 1, 2)
        assert sessions[0].duration_minutes == 600

    def test_two_locations(self, january: DateRange) -> None:
        """Sessions are paired per location and sorted by start."""
        records = [
            _record("13:00", "Rig1", SETUP),
            _record("15:00", "Rig1", OFF),
            _record("08:00", "Rig2", SETUP),
            _record("10:00", "Rig2", OFF),
        ]
        sessions = derive_sessions(records, january)
        assert [session.location for session in sessions] == ["Rig2", "Rig1"]

    def test_orphan_off_is_ignored(self, january: DateRange) -> None:
        """An Off without an open session produces nothing."""
        records = [_record("07:00", "Rig1", OFF), _record("08:00", "Rig1", SETUP)]
        sessions = derive_sessions(records, january)
        assert len(sessions) == 1
        assert not sessions[0].complete

    def test_setup_closes_previous_open_session(self, january: DateRange) -> None:
        """A second Setup turns the open session into an incomplete one."""
        records = [
            _record("08:00", "Rig1", SETUP),
            _record("09:00", "Rig1", SETUP),
            _record("10:00", "Rig1", OFF),
        ]
        sessions = derive_sessions(records, january)
        assert [(s.start_time, s.complete) for s in sessions] == [
            (time(8), False),
            (time(9), True),
        ]

    def test_records_outside_range_are_ignored(self) -> None:
        """Only records dated inside the range are used."""
        records = [_record("08:00", "Rig1", SETUP, 1), _record("12:00", "Rig1", OFF, 2)]
        sessions = derive_sessions(records, SingleDay(date(2024, 1, 2)))
        assert not sessions

    def test_time_window_filters_and_estimates(self, january: DateRange) -> None:
        """With a window, open sessions are estimated up to its end."""
        records = [
            _record("06:00", "Rig1", SETUP),
            _record("09:00", "Rig1", OFF),
            _record("10:00", "Rig1", SETUP),
            _record("22:00", "Rig1", OFF),
        ]
        options = SessionOptions(time_window=TimeWindow(time(8), time(18)))
        sessions = derive_sessions(records, january, options)
        assert [(s.start_time, s.complete, s.duration_minutes) for s in sessions] == [
            (time(10), False, 480)
        ]

    def test_overnight_window_estimate(self, january: DateRange) -> None:
        """An open session in an overnight window is estimated to the next day."""
        options = SessionOptions(time_window=TimeWindow(time(20), time(8)))
        sessions = derive_sessions([_record("22:00", "Rig1", SETUP)], january, options)
        assert sessions[0].duration_minutes == 600

    def test_overnight_window_estimate_after_midnight(
        self, january: DateRange
    ) -> None:
        """A Setup after midnight is estimated to the end of the same night."""
        options = SessionOptions(time_window=TimeWindow(time(22), time(6)))
        sessions = derive_sessions(
            [_record("03:00", "Rig1", SETUP, day=2)], january, options
        )
        assert sessions[0].duration_minutes == 180

    def test_derivation_is_idempotent(self, january: DateRange) -> None:
        """Deriving twice gives the same sessions and leaves records intact."""
        records = [
            _record("08:00", "Rig1", SETUP),
            _record("12:00", "Rig1", OFF),
            _record("14:00", "Rig2", SETUP),
        ]
        snapshot = list(records)
        assert derive_sessions(records, january) == derive_sessions(records, january)
        assert records == snapshot
