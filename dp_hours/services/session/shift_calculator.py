"""Split session time across daily work shifts."""
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, NamedTuple

from dp_hours.core.date_range import DateRange
from dp_hours.core.time_utils import combine, minutes_between
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import Location, RecordId, ShiftId
from dp_hours.domain.session.session import Session

logger = logging.getLogger(__name__)


class Shift(NamedTuple):
    """A daily work shift; overnight shifts end on the next day."""

    shift_id: ShiftId
    window: TimeWindow

    @property
    def is_overnight(self) -> bool:
        """Whether the shift crosses midnight."""
        return self.window.is_overnight

    @classmethod
    def parse(cls, shift_id: ShiftId, start: str, end: str) -> "Shift":
        """Create a shift from ``HH:MM`` bounds."""
        return cls(shift_id, TimeWindow.parse(f"{start}-{end}"))


class ShiftTimeResult(NamedTuple):
    """Time a session spent inside one occurrence of a shift."""

    setup_id: RecordId | None
    """Identifier of the Setup that opened the session."""

    location: Location
    shift_date: date
    """Day the shift occurrence starts on."""

    shift: Shift
    minutes_in_shift: int
    start_time: time
    """Time the session enters the shift."""

    end_time: time
    """Time the session leaves the shift."""

    @property
    def hours_in_shift(self) -> float:
        """Minutes in shift as hours, rounded to two decimals."""
        return round(self.minutes_in_shift / 60, 2)


class ShiftCalculator:  # pylint: disable=too-few-public-methods
    """Compute how much of each session falls in each shift, day by day."""

    def __init__(self, shifts: Iterable[Shift]) -> None:
        self._shifts = tuple(shifts)

    @property
    def shifts(self) -> tuple[Shift, ...]:
        """Return the configured shifts."""
        return self._shifts

    def compute(
        self,
        sessions: Iterable[Session],
        date_range: DateRange,
        as_of: datetime | None = None,
    ) -> list[ShiftTimeResult]:
        """Break sessions down by day and shift.

        Args:
            sessions: Sessions as returned by the session deriver.
            date_range: Days whose shift occurrences are reported.
            as_of: End of the sessions still open. Defaults to the end of
                the last day of the range.

        Returns:
            One result per (session, day, shift) with time in the shift,
            sorted by day, shift start and session start.
        """
        horizon = as_of or combine(date_range.last_date + timedelta(days=1), time.min)
        results: list[ShiftTimeResult] = []
        for session in sessions:
            start = session.start
            end = session.end if session.end is not None else horizon
            if end <= start:
                continue
            for day in date_range.iterate_over_days():
                for shift in self._shifts:
                    result = self._time_in_shift(session, start, end, day, shift)
                    if result is not None:
                        results.append(result)

        results.sort(
            key=lambda result: (
                result.shift_date,
                result.shift.window.start,
                result.start_time,
                result.location,
            )
        )
        logger.debug(
            "Computed %d shift result(s) over %s for %d shift(s)",
            len(results),
            date_range,
            len(self._shifts),
        )
        return results

    @staticmethod
    def _time_in_shift(
        session: Session,
        start: datetime,
        end: datetime,
        day: date,
        shift: Shift,
    ) -> ShiftTimeResult | None:
        overlap_start = max(start, shift.window.start_on(day))
        overlap_end = min(end, shift.window.end_on(day))
        if (minutes := minutes_between(overlap_start, overlap_end)) <= 0:
            return None
        return ShiftTimeResult(
            setup_id=session.setup_id,
            location=session.location,
            shift_date=day,
            shift=shift,
            minutes_in_shift=minutes,
            start_time=overlap_start.time(),
            end_time=overlap_end.time(),
        )
