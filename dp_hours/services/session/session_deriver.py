"""Derive DP sessions from operation records.

A session spans a Setup and the next Off at the same location. This is the
single session algorithm: the shift breakdown and the reports all start
from its output.
"""
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable

from dp_hours.core.date_range import DateRange
from dp_hours.core.time_utils import minutes_between
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import Location, OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.domain.session.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    """Options of a session derivation.

    Attributes:
        time_window: Only records inside this daily window are considered,
            and open sessions are estimated up to the end of the window.
    """

    time_window: TimeWindow | None = None


def derive_sessions(
    records: Iterable[OperationRecord],
    date_range: DateRange,
    options: SessionOptions | None = None,
) -> list[Session]:
    """Group operation records into sessions.

    Malformed data never raises: an Off without an open session is
    ignored, a Setup arriving while a session is open closes that session
    as incomplete, and negative durations are clamped to zero.

    Args:
        records: The operation records; they are not modified.
        date_range: Only records dated inside this range are considered.
        options: Optional time window filter.

    Returns:
        The sessions sorted by start date, start time and location.
    """
    options = options or SessionOptions()
    window = options.time_window

    selected = sorted(
        record
        for record in records
        if date_range.is_within(record.operation_date)
        and (window is None or window.contains(record.operation_time))
    )

    sessions: list[Session] = []
    by_location = sorted(selected, key=lambda record: (record.location, record))
    for location, location_records in itertools.groupby(
        by_location, key=lambda record: record.location
    ):
        sessions.extend(_scan_location(location, location_records, window))

    sessions.sort(key=Session.sort_key)
    logger.debug(
        "Derived %d session(s) from %d record(s) in %s",
        len(sessions),
        len(selected),
        date_range,
    )
    return sessions


def _scan_location(
    location: Location,
    records: Iterable[OperationRecord],
    window: TimeWindow | None,
) -> Iterable[Session]:
    opened: OperationRecord | None = None
    for record in records:
        if record.operation_type == OperationType.SETUP:
            if opened is not None:
                yield _open_session(location, opened, window)
            opened = record
        elif record.operation_type == OperationType.OFF and opened is not None:
            yield Session(
                location=location,
                start_date=opened.operation_date,
                start_time=opened.operation_time,
                end_date=record.operation_date,
                end_time=record.operation_time,
                complete=True,
                duration_minutes=max(
                    0, minutes_between(opened.timestamp, record.timestamp)
                ),
                setup_id=opened.record_id,
            )
            opened = None

    if opened is not None:
        yield _open_session(location, opened, window)


def _open_session(
    location: Location, setup: OperationRecord, window: TimeWindow | None
) -> Session:
    duration = 0
    if window is not None:
        duration = max(
            0, minutes_between(setup.timestamp, window.end_after(setup.timestamp))
        )
    return Session(
        location=location,
        start_date=setup.operation_date,
        start_time=setup.operation_time,
        end_date=None,
        end_time=None,
        complete=False,
        duration_minutes=duration,
        setup_id=setup.record_id,
    )

