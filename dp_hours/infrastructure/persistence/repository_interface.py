"""Abstract interface for operation record persistence."""

from abc import ABC, abstractmethod

from dp_hours.core.types import RecordId
from dp_hours.domain.operation.operation_record import OperationRecord


class RecordRepositoryInterface(ABC):
    """Interface for OperationRecord persistence operations.

    Repositories store records as they are given: validating them against
    the DP rules is the job of the services layer.
    """

    @abstractmethod
    def get_all_records(self) -> tuple[OperationRecord, ...]:
        """Get all operation records.

        Returns:
            All records ordered by date, time and location.
        """

    @abstractmethod
    def get_record_by_id(self, record_id: RecordId) -> OperationRecord:
        """Get a record by its ID.

        Args:
            record_id: The record ID to look up.

        Returns:
            The OperationRecord.

        Raises:
            RecordNotFoundError: If no record with the given ID exists.
        """

    @abstractmethod
    def upsert_record(self, record: OperationRecord) -> RecordId:
        """Insert or update a record.

        Args:
            record: Record to insert (id is None or unknown) or update.

        Returns:
            The ID of the inserted or updated record.
        """

    @abstractmethod
    def delete_record(self, record_id: RecordId) -> None:
        """Delete a record by its ID.

        Args:
            record_id: ID of the record to delete.

        Raises:
            RecordNotFoundError: If no record with the given ID exists.
        """
