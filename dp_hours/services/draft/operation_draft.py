"""Immutable edit state for a group of operations at one date and location.

A draft is what a form holds while the user types: a date, a location and
rows of (time, operation type). Every transition returns a new draft, so a
UI keeps only the latest value and tests drive the state machine without
rendering anything::

    draft = OperationDraft.new(date(2024, 1, 1), "Rig1")
    draft = draft.update_entry("entry-1", time="08:00")
    draft = draft.add_entry("20:00", OperationType.OFF)
    draft = draft.validate(validator, store.records)
"""
import dataclasses
import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from dp_hours.core.time_utils import parse_time, parse_user_date
from dp_hours.core.types import Location, OperationType, RecordId
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.exceptions import IncompleteDraftError
from dp_hours.services.validation.sequence_validator import SequenceValidator
from dp_hours.services.validation.validation_result import (
    ValidationContext,
    ValidationResult,
)


class DraftStatus(enum.StrEnum):
    """Where a draft stands in its edit cycle."""

    EDITING = enum.auto()
    VALID = enum.auto()
    INVALID = enum.auto()


@dataclass(frozen=True)
class DraftEntry:
    """One row of a draft; ``time`` is kept as typed by the user."""

    entry_id: str
    time: str = ""
    operation_type: OperationType = OperationType.SETUP
    record_id: RecordId | None = None


@dataclass(frozen=True)
class OperationDraft:  # pylint: disable=too-many-instance-attributes
    """Operations being added or edited for one date and location.

    Attributes:
        draft_date: Date applied to every entry.
        location: Location applied to every entry.
        entries: The rows of the draft.
        replaced_ids: Existing records the draft replaces. Records loaded
            into the draft and later removed from it are deleted on save.
        leave_open: Whether the location may stay without a closing Off.
        status: EDITING after any change, VALID or INVALID after validate().
        result: Verdict of the last validation.
    """

    draft_date: date | None = None
    location: Location = ""
    entries: tuple[DraftEntry, ...] = ()
    replaced_ids: frozenset[RecordId] = field(default_factory=frozenset)
    leave_open: bool = False
    status: DraftStatus = DraftStatus.EDITING
    result: ValidationResult | None = None

    @classmethod
    def new(
        cls, draft_date: date | None = None, location: Location = ""
    ) -> "OperationDraft":
        """Start a draft with a single empty Setup row."""
        return cls(
            draft_date=draft_date,
            location=location,
            entries=(DraftEntry("entry-1"),),
        )

    @classmethod
    def from_records(cls, records: Iterable[OperationRecord]) -> "OperationDraft":
        """Load saved records of one date and location into a draft.

        Raises:
            ValueError: If the records are empty or span several dates or
                locations.
        """
        records = sorted(records)
        if not records:
            raise ValueError("Cannot edit an empty group of records")
        if len({(record.operation_date, record.location) for record in records}) > 1:
            raise ValueError("Records must share one date and one location")
        return cls(
            draft_date=records[0].operation_date,
            location=records[0].location,
            entries=tuple(
                DraftEntry(
                    entry_id=f"entry-{index}",
                    time=record.operation_time.strftime("%H:%M"),
                    operation_type=record.operation_type,
                    record_id=record.record_id,
                )
                for index, record in enumerate(records, 1)
            ),
            replaced_ids=frozenset(
                record.record_id for record in records if record.record_id is not None
            ),
        )

    def _edited(self, **changes: object) -> "OperationDraft":
        return dataclasses.replace(
            self, status=DraftStatus.EDITING, result=None, **changes
        )

    def with_location(self, location: Location) -> "OperationDraft":
        """Return the draft moved to another location."""
        return self._edited(location=location)

    def with_date(self, draft_date: date | str) -> "OperationDraft":
        """Return the draft moved to another date, typed or parsed.

        Raises:
            InvalidDateError: If a typed date cannot be parsed.
        """
        if isinstance(draft_date, str):
            draft_date = parse_user_date(draft_date)
        return self._edited(draft_date=draft_date)

    def with_leave_open(self, leave_open: bool) -> "OperationDraft":
        """Return the draft allowing, or not, a missing closing Off."""
        return self._edited(leave_open=leave_open)

    def add_entry(
        self,
        time: str = "",
        operation_type: OperationType = OperationType.SETUP,
    ) -> "OperationDraft":
        """Return the draft with a new row appended."""
        entry = DraftEntry(self._next_entry_id(), time, operation_type)
        return self._edited(entries=(*self.entries, entry))

    def update_entry(
        self,
        entry_id: str,
        *,
        time: str | None = None,
        operation_type: OperationType | None = None,
    ) -> "OperationDraft":
        """Return the draft with one row changed.

        Raises:
            KeyError: If no row has the given identifier.
        """
        self._entry(entry_id)
        changes: dict[str, object] = {}
        if time is not None:
            changes["time"] = time
        if operation_type is not None:
            changes["operation_type"] = operation_type
        return self._edited(
            entries=tuple(
                dataclasses.replace(entry, **changes)
                if entry.entry_id == entry_id
                else entry
                for entry in self.entries
            )
        )

    def remove_entry(self, entry_id: str) -> "OperationDraft":
        """Return the draft without one row; the last row is never removed.

        Raises:
            KeyError: If no row has the given identifier.
        """
        self._entry(entry_id)
        if len(self.entries) <= 1:
            return self
        return self._edited(
            entries=tuple(entry for entry in self.entries if entry.entry_id != entry_id)
        )

    def to_records(self) -> tuple[OperationRecord, ...]:
        """Build the candidate records, sorted by time.

        Raises:
            IncompleteDraftError: If the date, the location or a time is missing.
            InvalidTimeError: If a time cannot be parsed.
        """
        if self.draft_date is None or not self.location.strip():
            raise IncompleteDraftError("Please enter a date and a location")
        if any(not entry.time.strip() for entry in self.entries):
            raise IncompleteDraftError("Please enter a time for every operation")
        return tuple(
            sorted(
                OperationRecord(
                    record_id=entry.record_id,
                    operation_date=self.draft_date,
                    operation_time=parse_time(entry.time),
                    location=self.location.strip(),
                    operation_type=entry.operation_type,
                )
                for entry in self.entries
            )
        )

    @property
    def context(self) -> ValidationContext:
        """The validation flags of the draft."""
        return ValidationContext(
            permit_missing_off=self.leave_open,
            replaced_ids=self.replaced_ids,
        )

    def validate(
        self,
        validator: SequenceValidator,
        all_records: Iterable[OperationRecord],
    ) -> "OperationDraft":
        """Return the draft carrying the verdict of the validator.

        Raises:
            IncompleteDraftError, InvalidTimeError: If the draft cannot be
                turned into records.
        """
        result = validator.validate(self.to_records(), all_records, self.context)
        return dataclasses.replace(
            self,
            status=DraftStatus.VALID if result.is_valid else DraftStatus.INVALID,
            result=result,
        )

    def _entry(self, entry_id: str) -> DraftEntry:
        for entry in self.entries:
            if entry.entry_id == entry_id:
                return entry
        raise KeyError(entry_id)

    def _next_entry_id(self) -> str:
        numbers = [
            int(suffix)
            for entry in self.entries
            if (suffix := entry.entry_id.removeprefix("entry-")).isdigit()
        ]
        return f"entry-{max(numbers, default=0) + 1}"
