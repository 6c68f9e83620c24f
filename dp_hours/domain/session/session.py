"""Session module."""
from dataclasses import dataclass
from datetime import date, datetime, time

from dp_hours.core.time_utils import combine, format_display_date, format_time
from dp_hours.core.types import Location, RecordId


@dataclass(frozen=True)
class Session:
    """One Setup to Off cycle at a location, derived from operation records.

    An open session has no end and ``complete`` set to False; its duration
    is either zero or an estimate up to the end of a reporting window.
    """

    location: Location
    start_date: date
    start_time: time
    end_date: date | None
    end_time: time | None
    complete: bool
    duration_minutes: int
    setup_id: RecordId | None = None

    @property
    def start(self) -> datetime:
        """Timestamp of the opening Setup."""
        return combine(self.start_date, self.start_time)

    @property
    def end(self) -> datetime | None:
        """Timestamp of the closing Off, None while the session is open."""
        if self.end_date is None or self.end_time is None:
            return None
        return combine(self.end_date, self.end_time)

    def sort_key(self) -> tuple[date, time, Location]:
        """Key ordering sessions by start then location."""
        return (self.start_date, self.start_time, self.location)

    def __str__(self) -> str:
        start = f"{format_display_date(self.start_date)} {format_time(self.start_time)}"
        if self.end_date is None or self.end_time is None:
            return f"{self.location}: {start} - ..."
        end = f"{format_display_date(self.end_date)} {format_time(self.end_time)}"
        return f"{self.location}: {start} - {end}"
