"""Time window module."""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from dp_hours.core.time_utils import (
    combine,
    format_time,
    is_time_within_window,
    parse_time,
)

_ANCHOR_DAY = date(2000, 1, 1)


@dataclass(frozen=True)
class TimeWindow:
    """A daily window between two times of day, possibly wrapping midnight."""

    start: time
    end: time

    @property
    def is_overnight(self) -> bool:
        """Whether the window crosses midnight."""
        return self.start > self.end

    @property
    def duration_minutes(self) -> int:
        """Length of one occurrence of the window in minutes."""
        start = self.start.hour * 60 + self.start.minute
        end = self.end.hour * 60 + self.end.minute
        if self.is_overnight:
            return 24 * 60 - start + end
        return end - start

    def contains(self, value: time) -> bool:
        """Check if a time of day is inside the window."""
        return is_time_within_window(value, self.start, self.end)

    def start_on(self, day: date) -> datetime:
        """Return the start of the window occurrence beginning on the given day."""
        return combine(day, self.start)

    def end_on(self, day: date) -> datetime:
        """Return the end of the window occurrence beginning on the given day.

        For an overnight window the occurrence ends on the next day.
        """
        if self.is_overnight:
            return combine(day + timedelta(days=1), self.end)
        return combine(day, self.end)

    def end_after(self, moment: datetime) -> datetime:
        """Return the end of the window occurrence a moment falls in.

        A moment in the after-midnight part of an overnight window belongs to
        the occurrence that started the day before, so it ends the same day.
        """
        if self.is_overnight and moment.time() <= self.end:
            return combine(moment.date(), self.end)
        return self.end_on(moment.date())

    @classmethod
    def parse(cls, value: str) -> "TimeWindow":
        """Parse a ``HH:MM-HH:MM`` window.

        Raises:
            ValueError: If the value has no single ``-`` separator, or
                InvalidTimeError if a bound is not a time.
        """
        bounds = value.split("-")
        if len(bounds) != 2:
            raise ValueError(f"Invalid time window: {value!r}, expected HH:MM-HH:MM")
        return cls(parse_time(bounds[0]), parse_time(bounds[1]))

    @classmethod
    def around(cls, center: time, tolerance: timedelta) -> "TimeWindow":
        """Return the window of +/- tolerance around a time, clamped to its day."""
        anchor = combine(_ANCHOR_DAY, center)
        start = max(anchor - tolerance, combine(_ANCHOR_DAY, time.min))
        end = min(anchor + tolerance, combine(_ANCHOR_DAY, time(23, 59)))
        return cls(start.time(), end.time())

    def __repr__(self) -> str:
        return f"{format_time(self.start)}-{format_time(self.end)}"
