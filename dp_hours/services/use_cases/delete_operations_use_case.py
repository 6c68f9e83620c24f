"""Use case for deleting operation records."""

import logging
from typing import Iterable

from dp_hours.core.types import RecordId
from dp_hours.domain.operation.operation_store import OperationRecordStore
from dp_hours.infrastructure.persistence.repository_interface import (
    RecordRepositoryInterface,
)
from dp_hours.services.use_cases.record_operations_use_case import MutationResult
from dp_hours.services.validation.sequence_validator import SequenceValidator
from dp_hours.services.validation.validation_result import (
    ValidationContext,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class DeleteOperationsUseCase:  # pylint: disable=too-few-public-methods
    """Delete records when the remaining ones still form valid sequences."""

    def __init__(
        self,
        repository: RecordRepositoryInterface,
        validator: SequenceValidator,
    ) -> None:
        self._repository = repository
        self._validator = validator

    def delete_records(self, record_ids: Iterable[RecordId]) -> MutationResult:
        """Delete records after re-validating what remains at their locations.

        The remaining records of each touched date and location are checked
        again. A location may be left without its closing Off.

        Raises:
            RecordNotFoundError: If an ID matches no record.
        """
        deleted = tuple(
            sorted(
                self._repository.get_record_by_id(record_id)
                for record_id in dict.fromkeys(record_ids)
            )
        )
        remaining = OperationRecordStore(self._repository.get_all_records()).without(
            record.record_id for record in deleted if record.record_id is not None
        )

        context = ValidationContext(permit_missing_off=True)
        touched = dict.fromkeys(
            (record.operation_date, record.location) for record in deleted
        )
        for operation_date, location in touched:
            candidates = remaining.at(operation_date, location)
            result = self._validator.validate(candidates, remaining.records, context)
            if not result.is_valid:
                logger.debug(
                    "Refused to delete %d record(s): %s", len(deleted), result
                )
                return MutationResult(result)

        for record in deleted:
            assert record.record_id is not None
            self._repository.delete_record(record.record_id)
        logger.info("Deleted %d operation record(s)", len(deleted))
        return MutationResult(ValidationResult.valid(), deleted)
