"""Repository keeping operation records in memory."""
import uuid
from typing import Iterable

from dp_hours.core.types import RecordId
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.exceptions import RecordNotFoundError
from dp_hours.infrastructure.persistence.repository_interface import (
    RecordRepositoryInterface,
)


def new_record_id() -> RecordId:
    """Return a fresh record identifier."""
    return uuid.uuid4().hex


class InMemoryRecordRepository(RecordRepositoryInterface):
    """Records held in a dict, lost when the process exits."""

    def __init__(self, records: Iterable[OperationRecord] = ()) -> None:
        self._records: dict[RecordId, OperationRecord] = {}
        for record in records:
            self._insert(record)

    def get_all_records(self) -> tuple[OperationRecord, ...]:
        return tuple(sorted(self._records.values()))

    def get_record_by_id(self, record_id: RecordId) -> OperationRecord:
        if (record := self._records.get(record_id)) is None:
            raise RecordNotFoundError(record_id)
        return record

    def _insert(self, record: OperationRecord) -> RecordId:
        if record.record_id is None:
            record = record.replace(record_id=new_record_id())
        assert record.record_id is not None
        self._records[record.record_id] = record
        return record.record_id

    def upsert_record(self, record: OperationRecord) -> RecordId:
        return self._insert(record)

    def delete_record(self, record_id: RecordId) -> None:
        if self._records.pop(record_id, None) is None:
            raise RecordNotFoundError(record_id)
