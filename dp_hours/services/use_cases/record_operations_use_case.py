"""Use case for adding and editing operation records."""

import logging
from datetime import date
from typing import Iterable, NamedTuple

from dp_hours.core.types import Location, OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.domain.operation.operation_store import OperationRecordStore
from dp_hours.infrastructure.persistence.repository_interface import (
    RecordRepositoryInterface,
)
from dp_hours.services.draft.operation_draft import OperationDraft
from dp_hours.services.validation.sequence_validator import SequenceValidator
from dp_hours.services.validation.validation_result import (
    ValidationContext,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class MutationResult(NamedTuple):
    """Outcome of a change to the stored records."""

    validation: ValidationResult
    records: tuple[OperationRecord, ...] = ()
    """Records saved or deleted; empty when the change was rejected."""

    @property
    def is_applied(self) -> bool:
        """Whether the change reached the repository."""
        return self.validation.is_valid


class RecordOperationsUseCase:
    """Validate candidate records and persist them only when they are valid."""

    def __init__(
        self,
        repository: RecordRepositoryInterface,
        validator: SequenceValidator,
    ) -> None:
        self._repository = repository
        self._validator = validator

    def add_operations(
        self,
        candidates: Iterable[OperationRecord],
        context: ValidationContext | None = None,
    ) -> MutationResult:
        """Validate and save records of a single location.

        Args:
            candidates: The records to add, or saved records to update.
            context: Optional validation flags.

        Returns:
            The verdict and, when valid, the records as saved.
        """
        candidates = tuple(sorted(candidates))
        context = context or ValidationContext()
        result = self._validator.validate(
            candidates, self._repository.get_all_records(), context
        )
        if not result.is_valid:
            return MutationResult(result)

        kept_ids = {record.record_id for record in candidates}
        for record_id in sorted(context.replaced_ids - kept_ids):
            self._repository.delete_record(record_id)

        saved = tuple(
            record.replace(record_id=self._repository.upsert_record(record))
            for record in candidates
        )
        logger.info(
            "Saved %d operation(s) at %s on %s",
            len(saved),
            saved[0].location if saved else "-",
            saved[0].operation_date if saved else "-",
        )
        return MutationResult(result, saved)

    def save_draft(self, draft: OperationDraft) -> MutationResult:
        """Validate and save the records of a draft.

        Records loaded into the draft and removed from it are deleted.

        Raises:
            IncompleteDraftError: If the draft misses a date, location or time.
            InvalidTimeError: If a time of the draft cannot be parsed.
        """
        return self.add_operations(draft.to_records(), draft.context)

    def record_operations(
        self,
        operation_date: date,
        location: Location,
        entries: Iterable[tuple[str, OperationType]],
        leave_open: bool = False,
    ) -> MutationResult:
        """Validate and save (time, type) entries at one date and location."""
        draft = OperationDraft(
            draft_date=operation_date, location=location, leave_open=leave_open
        )
        for time_text, operation_type in entries:
            draft = draft.add_entry(time_text, operation_type)
        return self.save_draft(draft)

    def edit_location(
        self,
        operation_date: date,
        location: Location,
        new_location: Location,
        new_date: date | None = None,
    ) -> MutationResult:
        """Rename the location of a group of records, or move it to another date.

        A group that was left without a closing Off may stay open.

        Raises:
            ValueError: If no record exists at this date and location.
        """
        store = OperationRecordStore(self._repository.get_all_records())
        if not (records := store.at(operation_date, location)):
            raise ValueError(
                f"No operation at {location} on {operation_date.isoformat()}"
            )
        draft = (
            OperationDraft.from_records(records)
            .with_location(new_location)
            .with_date(new_date or operation_date)
            .with_leave_open(records[-1].operation_type != OperationType.OFF)
        )
        return self.save_draft(draft)
