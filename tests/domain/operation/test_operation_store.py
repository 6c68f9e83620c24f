"""Tests for the OperationRecordStore and RecordFilter classes."""
from datetime import date, time

import pytest

from dp_hours.core.types import OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.domain.operation.operation_store import OperationRecordStore
from dp_hours.domain.operation.record_filter import RecordFilter


def _record(
    record_id: str, day: int, hour: int, location: str, operation_type: OperationType
) -> OperationRecord:
    return OperationRecord(
        record_id, date(2024, 1, day), time(hour), location, operation_type
    )


@pytest.fixture(name="store")
def store_fixture() -> OperationRecordStore:
    """Create a store with two days of records."""
    return OperationRecordStore(
        [
            _record("6", 2, 9, "Rig1", OperationType.SETUP),
            _record("1", 1, 8, "Rig1", OperationType.SETUP),
            _record("2", 1, 12, "Rig1", OperationType.OFF),
            _record("3", 1, 14, "Rig1", OperationType.SETUP),
            _record("4", 1, 18, "Rig1", OperationType.OFF),
            _record("5", 1, 6, "Barge", OperationType.SETUP),
        ]
    )


class TestOperationRecordStore:
    """Tests for OperationRecordStore."""

    def test_records_are_sorted(self, store: OperationRecordStore) -> None:
        """Records are kept in chronological order."""
        assert [record.record_id for record in store] == ["5", "1", "2", "3", "4", "6"]
        assert len(store) == 6

    def test_dates_with_records_newest_first(self, store: OperationRecordStore) -> None:
        """Days are listed newest first."""
        assert store.dates_with_records() == (date(2024, 1, 2), date(2024, 1, 1))

    def test_locations_on_sorted_by_first_event(
        self, store: OperationRecordStore
    ) -> None:
        """Locations of a day are ordered by their first operation."""
        assert store.locations_on(date(2024, 1, 1)) == ("Barge", "Rig1")

    def test_cycles_on(self, store: OperationRecordStore) -> None:
        """A new cycle starts after every Off."""
        cycles = store.cycles_on(date(2024, 1, 1), "Rig1")
        assert [[record.record_id for record in cycle] for cycle in cycles] == [
            ["1", "2"],
            ["3", "4"],
        ]

    def test_at_and_records_on(self, store: OperationRecordStore) -> None:
        """Records can be selected by location and day."""
        assert len(store.at(date(2024, 1, 1), "Rig1")) == 4
        assert len(store.records_on(date(2024, 1, 2))) == 1

    def test_without(self, store: OperationRecordStore) -> None:
        """A derived store leaves the original intact."""
        smaller = store.without(["1", "2"])
        assert len(smaller) == 4
        assert len(store) == 6
        assert "1" not in {record.record_id for record in smaller}


class TestRecordFilter:
    """Tests for RecordFilter."""

    def test_empty_filter_matches_everything(self, store: OperationRecordStore) -> None:
        """A filter without criteria keeps every record."""
        assert len(store.filter(RecordFilter())) == len(store)

    def test_date_bounds(self, store: OperationRecordStore) -> None:
        """Date bounds are inclusive."""
        records = store.filter(RecordFilter(date_from=date(2024, 1, 2)))
        assert [record.record_id for record in records] == ["6"]
        records = store.filter(RecordFilter(date_to=date(2024, 1, 1)))
        assert len(records) == 5

    def test_location(self, store: OperationRecordStore) -> None:
        """Location matches exactly."""
        assert len(store.filter(RecordFilter(location="Barge"))) == 1

    @pytest.mark.parametrize(
        "search_text,expected_count",
        [
            ("barge", 1),
            ("dp off", 2),
            ("14:00", 1),
            ("02.01.2024", 1),
            ("   ", 6),
            ("nothing", 0),
        ],
    )
    def test_search_text(
        self, store: OperationRecordStore, search_text: str, expected_count: int
    ) -> None:
        """Search text matches time, location, type and displayed date."""
        records = store.filter(RecordFilter(search_text=search_text))
        assert len(records) == expected_count
