"""Date range module."""
from datetime import date, timedelta
from typing import Iterator

from dateutil.relativedelta import relativedelta


class DateRange:
    """
    A period of consecutive days defined by a start date and a duration.
    Both the start date and the last date belong to the range.
    """

    def __init__(
        self,
        start_date: date,
        duration: relativedelta,
    ) -> None:
        if start_date + duration <= start_date:
            raise ValueError(f"Duration must be positive, got {duration}")
        self._start_date = start_date
        self._duration = duration

    @classmethod
    def between(cls, start_date: date, last_date: date) -> "DateRange":
        """Create the range going from start_date to last_date, both included."""
        if last_date < start_date:
            raise ValueError(
                f"start_date must be <= last_date, got {start_date} > {last_date}"
            )
        return cls(start_date, relativedelta(days=(last_date - start_date).days + 1))

    @property
    def start_date(self) -> date:
        """Return the first day of the range."""
        return self._start_date

    @property
    def last_date(self) -> date:
        """Return the last day of the range."""
        return self._start_date + self._duration - timedelta(days=1)

    def is_within(self, target_date: date) -> bool:
        """Check if the date is within the range."""
        return self.start_date <= target_date <= self.last_date

    def iterate_over_days(self) -> Iterator[date]:
        """Iterate over the days of the range in chronological order."""
        current_date = self.start_date
        while current_date <= self.last_date:
            yield current_date
            current_date += timedelta(days=1)

    def __repr__(self) -> str:
        return f"{self.start_date} - {self.last_date}"


class SingleDay(DateRange):
    """A date range that lasts one day."""

    def __init__(self, start_date: date) -> None:
        super().__init__(start_date, relativedelta(days=1))
