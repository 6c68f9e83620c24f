"""Outcome types of the sequence validator."""
import enum
from dataclasses import dataclass, field

from dp_hours.core.types import Location, RecordId
from dp_hours.domain.operation.operation_record import OperationRecord


class ValidationErrorKind(enum.StrEnum):
    """Machine-checkable kind of a rejected candidate set."""

    DUPLICATE_OPERATION = "DuplicateOperation"
    MISSING_SETUP = "MissingSetup"
    INVALID_SEQUENCE = "InvalidSequence"
    MISSING_CLOSING_OFF = "MissingClosingOff"
    TIME_OVERLAP = "TimeOverlap"
    LOCATION_NOT_RELEASED = "LocationNotReleased"


@dataclass(frozen=True)
class ValidationContext:
    """Per-call flags of a validation.

    Attributes:
        permit_missing_off: Skip the closure check, so the location may be
            left without a closing Off (deletion flows, cycles left open on
            purpose).
        replaced_ids: Identifiers of existing records the candidates replace;
            they are ignored by every check.
    """

    permit_missing_off: bool = False
    replaced_ids: frozenset[RecordId] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of a validation: valid, or the first rule that failed."""

    kind: ValidationErrorKind | None = None
    message: str = ""
    offending_records: tuple[OperationRecord, ...] = ()
    location: Location | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the candidate records satisfy every rule."""
        return self.kind is None

    @classmethod
    def valid(cls) -> "ValidationResult":
        """Return the verdict of an accepted candidate set."""
        return cls()

    @classmethod
    def invalid(
        cls,
        kind: ValidationErrorKind,
        message: str,
        offending_records: tuple[OperationRecord, ...] = (),
        location: Location | None = None,
    ) -> "ValidationResult":
        """Return the verdict of a rejected candidate set."""
        return cls(kind, message, offending_records, location)

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid"
        return f"{self.kind}: {self.message}"
