"""Operation record module."""
from datetime import date, datetime, time
from functools import total_ordering
from typing import Any, Mapping

from dp_hours.core.time_utils import (
    combine,
    format_date,
    format_display_date,
    format_time,
    parse_date,
    parse_time,
)
from dp_hours.core.types import Location, OperationType, RecordId


@total_ordering
class OperationRecord:
    """
    A timestamped DP operation at a location.
    Records are ordered chronologically, then by location.
    """

    def __init__(
        self,
        record_id: RecordId | None,
        operation_date: date,
        operation_time: time,
        location: Location,
        operation_type: OperationType,
    ) -> None:
        self._record_id = record_id
        self._operation_date = operation_date
        self._operation_time = operation_time.replace(second=0, microsecond=0)
        self._location = location
        self._operation_type = operation_type

    @property
    def record_id(self) -> RecordId | None:
        """The identifier of the record, None until it is saved."""
        return self._record_id

    @property
    def operation_date(self) -> date:
        """The date of the operation."""
        return self._operation_date

    @property
    def operation_time(self) -> time:
        """The time of the operation, minute resolution."""
        return self._operation_time

    @property
    def location(self) -> Location:
        """The location of the operation."""
        return self._location

    @property
    def operation_type(self) -> OperationType:
        """The type of the operation."""
        return self._operation_type

    @property
    def timestamp(self) -> datetime:
        """The date and time of the operation."""
        return combine(self._operation_date, self._operation_time)

    @property
    def is_saved(self) -> bool:
        """Whether the record has been given an identifier."""
        return self._record_id is not None

    def sort_key(self) -> tuple[date, time, Location]:
        """Key ordering records by date, time then location."""
        return (self._operation_date, self._operation_time, self._location)

    def replace(self, **kwargs: Any) -> "OperationRecord":
        """Return a new record with the given parameters replaced."""
        return OperationRecord(
            record_id=kwargs.get("record_id", self._record_id),
            operation_date=kwargs.get("operation_date", self._operation_date),
            operation_time=kwargs.get("operation_time", self._operation_time),
            location=kwargs.get("location", self._location),
            operation_type=kwargs.get("operation_type", self._operation_type),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperationRecord":
        """Build a record from its serialized form.

        Raises:
            KeyError: If a mandatory field is missing.
            InvalidDateError, InvalidTimeError, InvalidOperationTypeError:
                If a field cannot be parsed.
        """
        record_id = data.get("id")
        raw_time = data["time"]
        if isinstance(raw_time, int):
            # YAML 1.1 reads unquoted HH:MM as a base 60 integer
            hours, minutes = divmod(raw_time, 60)
            raw_time = f"{hours:02d}:{minutes:02d}"
        return cls(
            record_id=str(record_id) if record_id is not None else None,
            operation_date=parse_date(data["date"]),
            operation_time=parse_time(raw_time),
            location=str(data["location"]),
            operation_type=OperationType.parse(data["operation_type"]),
        )

    def to_dict(self) -> dict[str, str | None]:
        """Return the serialized form of the record."""
        return {
            "id": self._record_id,
            "date": format_date(self._operation_date),
            "time": format_time(self._operation_time),
            "location": self._location,
            "operation_type": self._operation_type.value,
        }

    def __str__(self) -> str:
        return (
            f"{format_display_date(self._operation_date)} "
            f"{format_time(self._operation_time)} {self._location}: "
            f"{self._operation_type.display_name}"
        )

    def __repr__(self) -> str:
        return (
            f"{self._record_id} - {self._operation_date} "
            f"{format_time(self._operation_time)} {self._location} "
            f"{self._operation_type.value}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OperationRecord):
            return NotImplemented
        return (
            self._record_id == other.record_id
            and self.sort_key() == other.sort_key()
            and self._operation_type == other.operation_type
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OperationRecord):
            return NotImplemented
        return (self.sort_key(), self._operation_type.rank) < (
            other.sort_key(),
            other.operation_type.rank,
        )

    def __hash__(self) -> int:
        return hash((self._record_id, self.sort_key(), self._operation_type))
