"""In-memory snapshot of operation records."""
from datetime import date
from typing import Iterable, Iterator

from dp_hours.core.types import Location, OperationType, RecordId
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.domain.operation.record_filter import RecordFilter


class OperationRecordStore:
    """An immutable, chronologically ordered collection of operation records.

    The store is the snapshot the validator and the session deriver read.
    Every "mutating" method returns a new store and leaves this one intact.
    """

    def __init__(self, records: Iterable[OperationRecord] = ()) -> None:
        self._records = tuple(sorted(records))

    @property
    def records(self) -> tuple[OperationRecord, ...]:
        """All records sorted by date, time and location."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OperationRecord]:
        return iter(self._records)

    def filter(self, record_filter: RecordFilter) -> tuple[OperationRecord, ...]:
        """Return the records matching the filter, in chronological order."""
        return tuple(filter(record_filter.matches, self._records))

    def records_on(self, day: date) -> tuple[OperationRecord, ...]:
        """Return the records of a day in chronological order."""
        return tuple(record for record in self._records if record.operation_date == day)

    def at(self, day: date, location: Location) -> tuple[OperationRecord, ...]:
        """Return the records of a location on a day in chronological order."""
        return tuple(
            record
            for record in self._records
            if record.operation_date == day and record.location == location
        )

    def dates_with_records(self) -> tuple[date, ...]:
        """Return the days having at least one record, newest first."""
        return tuple(
            sorted({record.operation_date for record in self._records}, reverse=True)
        )

    def locations_on(self, day: date) -> tuple[Location, ...]:
        """Return the locations active on a day, sorted by their first event."""
        return tuple(dict.fromkeys(record.location for record in self.records_on(day)))

    def cycles_on(
        self, day: date, location: Location
    ) -> tuple[tuple[OperationRecord, ...], ...]:
        """Split the records of a location on a day into cycles.

        A new group starts after every ``OFF``; empty groups are dropped.
        """
        cycles: list[list[OperationRecord]] = [[]]
        for record in self.at(day, location):
            cycles[-1].append(record)
            if record.operation_type == OperationType.OFF:
                cycles.append([])
        return tuple(tuple(cycle) for cycle in cycles if cycle)

    def without(self, record_ids: Iterable[RecordId]) -> "OperationRecordStore":
        """Return a store without the records having the given identifiers."""
        excluded = frozenset(record_ids)
        return OperationRecordStore(
            record for record in self._records if record.record_id not in excluded
        )

    def __repr__(self) -> str:
        return f"OperationRecordStore({len(self._records)} records)"
