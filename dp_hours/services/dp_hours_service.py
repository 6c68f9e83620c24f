"""Central service orchestrating DP hour records, sessions and reports.

This module contains the DPHoursService class, the single entry point for
presentation layers (the CLI today). Every query reads a fresh snapshot
from the repository, so derived sessions always match the stored records.
"""

import logging
from datetime import date, datetime
from typing import Iterable

from dp_hours.core.date_range import DateRange
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import Location, OperationType, RecordId
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.domain.operation.operation_store import OperationRecordStore
from dp_hours.domain.operation.record_filter import RecordFilter
from dp_hours.domain.session.session import Session
from dp_hours.infrastructure.persistence.repository_interface import (
    RecordRepositoryInterface,
)
from dp_hours.services.draft.operation_draft import OperationDraft
from dp_hours.services.session.session_deriver import SessionOptions, derive_sessions
from dp_hours.services.session.shift_calculator import (
    ShiftCalculator,
    ShiftTimeResult,
)
from dp_hours.services.use_cases.delete_operations_use_case import (
    DeleteOperationsUseCase,
)
from dp_hours.services.use_cases.record_operations_use_case import (
    MutationResult,
    RecordOperationsUseCase,
)
from dp_hours.services.validation.sequence_validator import SequenceValidator

logger = logging.getLogger(__name__)


class DPHoursService:
    """Orchestrate validation, persistence and session queries.

    Mutations go through the use cases, which validate before they write.
    Queries derive their results from the records on each call and keep no
    cache.
    """

    def __init__(
        self,
        repository: RecordRepositoryInterface,
        validator: SequenceValidator,
        shift_calculator: ShiftCalculator,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Storage of the operation records.
            validator: Rule engine applied before every mutation.
            shift_calculator: Calculator of the shift breakdown.
        """
        self._repository = repository
        self._validator = validator
        self._shift_calculator = shift_calculator
        self._record_operations = RecordOperationsUseCase(repository, validator)
        self._delete_operations = DeleteOperationsUseCase(repository, validator)

    @property
    def validator(self) -> SequenceValidator:
        """Return the sequence validator."""
        return self._validator

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def get_store(self) -> OperationRecordStore:
        """Return a snapshot of every stored record."""
        return OperationRecordStore(self._repository.get_all_records())

    def get_record(self, record_id: RecordId) -> OperationRecord:
        """Return a record by its ID.

        Raises:
            RecordNotFoundError: If no record with the given ID exists.
        """
        return self._repository.get_record_by_id(record_id)

    def search_records(
        self, record_filter: RecordFilter
    ) -> tuple[OperationRecord, ...]:
        """Return the records matching a filter, chronologically."""
        return self.get_store().filter(record_filter)

    # -------------------------------------------------------------------------
    # Drafts
    # -------------------------------------------------------------------------

    def new_draft(
        self, operation_date: date | None = None, location: Location = ""
    ) -> OperationDraft:
        """Start an empty draft."""
        return OperationDraft.new(operation_date, location)

    def edit_draft(self, operation_date: date, location: Location) -> OperationDraft:
        """Load the records of a date and location into a draft.

        Raises:
            ValueError: If no record exists at this date and location.
        """
        return OperationDraft.from_records(
            self.get_store().at(operation_date, location)
        )

    def validate_draft(self, draft: OperationDraft) -> OperationDraft:
        """Return the draft carrying the verdict for the current records."""
        return draft.validate(self._validator, self._repository.get_all_records())

    def save_draft(self, draft: OperationDraft) -> MutationResult:
        """Validate and save a draft."""
        return self._record_operations.save_draft(draft)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def record_operations(
        self,
        operation_date: date,
        location: Location,
        entries: Iterable[tuple[str, OperationType]],
        leave_open: bool = False,
    ) -> MutationResult:
        """Validate and save operations at one date and location."""
        return self._record_operations.record_operations(
            operation_date, location, entries, leave_open
        )

    def edit_location(
        self,
        operation_date: date,
        location: Location,
        new_location: Location,
        new_date: date | None = None,
    ) -> MutationResult:
        """Rename or move the records of a date and location."""
        return self._record_operations.edit_location(
            operation_date, location, new_location, new_date
        )

    def delete_records(self, record_ids: Iterable[RecordId]) -> MutationResult:
        """Delete records if the remaining ones stay valid."""
        return self._delete_operations.delete_records(record_ids)

    # -------------------------------------------------------------------------
    # Sessions and reports
    # -------------------------------------------------------------------------

    def get_sessions(
        self,
        date_range: DateRange,
        time_window: TimeWindow | None = None,
    ) -> list[Session]:
        """Derive the sessions of a date range from the stored records."""
        return derive_sessions(
            self._repository.get_all_records(),
            date_range,
            SessionOptions(time_window=time_window),
        )

    def get_shift_report(
        self,
        date_range: DateRange,
        as_of: datetime | None = None,
    ) -> list[ShiftTimeResult]:
        """Break the sessions of a date range down by day and shift.

        Sessions are derived from every record, so a session crossing a bound
        of the range keeps its Setup and its Off. The calculator clips it to
        the days of the range.
        """
        records = self._repository.get_all_records()
        days = [record.operation_date for record in records]
        sessions = derive_sessions(
            records,
            DateRange.between(
                min(date_range.start_date, *days), max(date_range.last_date, *days)
            ),
        )
        logger.debug("Computing shift report over %s", date_range)
        return self._shift_calculator.compute(sessions, date_range, as_of)
