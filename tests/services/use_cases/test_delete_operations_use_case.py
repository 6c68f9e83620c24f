"""Tests for the DeleteOperationsUseCase."""

from datetime import date, time

import pytest

from dp_hours.core.types import OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.exceptions import RecordNotFoundError
from dp_hours.infrastructure.persistence.in_memory_repository import (
    InMemoryRecordRepository,
)
from dp_hours.services.use_cases.delete_operations_use_case import (
    DeleteOperationsUseCase,
)
from dp_hours.services.validation.sequence_validator import SequenceValidator
from dp_hours.services.validation.validation_result import ValidationErrorKind


@pytest.fixture(name="repository")
def repository_fixture() -> InMemoryRecordRepository:
    """Create a repository with one full cycle at Rig1."""
    day = date(2024, 1, 1)
    return InMemoryRecordRepository(
        [
            OperationRecord("a", day, time(8), "Rig1", OperationType.SETUP),
            OperationRecord("b", day, time(9), "Rig1", OperationType.MOVING_IN),
            OperationRecord(
                "c", day, time(10), "Rig1", OperationType.HANDLING_OFFSHORE
            ),
            OperationRecord("d", day, time(12), "Rig1", OperationType.OFF),
        ]
    )


@pytest.fixture(name="use_case")
def use_case_fixture(repository: InMemoryRecordRepository) -> DeleteOperationsUseCase:
    """Create the use case over the repository."""
    return DeleteOperationsUseCase(repository, SequenceValidator())


class TestDeleteRecords:
    """Tests for delete_records."""

    def test_delete_intermediate_record(
        self, use_case: DeleteOperationsUseCase, repository: InMemoryRecordRepository
    ) -> None:
        """Deleting a step inside a cycle keeps it valid."""
        result = use_case.delete_records(["b"])

        assert result.is_applied
        assert [record.record_id for record in result.records] == ["b"]
        assert [r.record_id for r in repository.get_all_records()] == ["a", "c", "d"]

    def test_delete_closing_off(
        self, use_case: DeleteOperationsUseCase, repository: InMemoryRecordRepository
    ) -> None:
        """The location may be left open by a deletion."""
        assert use_case.delete_records(["d"]).is_applied
        assert len(repository.get_all_records()) == 3

    def test_delete_setup_is_refused(
        self, use_case: DeleteOperationsUseCase, repository: InMemoryRecordRepository
    ) -> None:
        """Removing the Setup would leave the cycle without opening."""
        result = use_case.delete_records(["a"])

        assert not result.is_applied
        assert result.validation.kind == ValidationErrorKind.MISSING_SETUP
        assert len(repository.get_all_records()) == 4

    def test_delete_whole_cycle(
        self, use_case: DeleteOperationsUseCase, repository: InMemoryRecordRepository
    ) -> None:
        """Deleting every record of a group is always possible."""
        result = use_case.delete_records(["d", "c", "b", "a", "a"])

        assert result.is_applied
        assert len(result.records) == 4
        assert not repository.get_all_records()

    def test_unknown_id_raises(
        self, use_case: DeleteOperationsUseCase, repository: InMemoryRecordRepository
    ) -> None:
        """Unknown IDs raise before anything is deleted."""
        with pytest.raises(RecordNotFoundError):
            use_case.delete_records(["b", "zz"])
        assert len(repository.get_all_records()) == 4
