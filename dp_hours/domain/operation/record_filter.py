"""Search criteria over operation records."""
from dataclasses import dataclass
from datetime import date

from dp_hours.core.time_utils import format_display_date, format_time
from dp_hours.core.types import Location
from dp_hours.domain.operation.operation_record import OperationRecord


@dataclass(frozen=True)
class RecordFilter:
    """Filter criteria for operation records.

    ``search_text`` is matched case-insensitively against the time, the
    location, the operation type label and the displayed date.
    """

    search_text: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    location: Location | None = None

    def matches(self, record: OperationRecord) -> bool:
        """Check if a record matches this filter."""
        if self.date_from is not None and record.operation_date < self.date_from:
            return False

        if self.date_to is not None and record.operation_date > self.date_to:
            return False

        if self.location is not None and record.location != self.location:
            return False

        if self.search_text and self.search_text.strip():
            query = self.search_text.strip().lower()
            searchable = (
                format_time(record.operation_time),
                record.location,
                record.operation_type.value,
                format_display_date(record.operation_date),
            )
            return any(query in field.lower() for field in searchable)

        return True
