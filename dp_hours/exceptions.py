"""Custom exception hierarchy for DP hours.

Domain-rule violations are never raised: the sequence validator returns
them as validation results. These exceptions signal malformed input or
infrastructure failures.
"""

from pathlib import Path


class DPHoursError(Exception):
    """Base exception for all DP hours errors."""


class InvalidDateError(DPHoursError, ValueError):
    """A date could not be parsed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid date: {value!r}")
        self.value = value


class InvalidTimeError(DPHoursError, ValueError):
    """A time of day could not be parsed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid time: {value!r}, expected HH:MM")
        self.value = value


class InvalidOperationTypeError(DPHoursError, ValueError):
    """An operation type label matches no known operation type."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid operation type: {value!r}")
        self.value = value


class RecordNotFoundError(DPHoursError):
    """No operation record with the given ID exists."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Operation record not found: {record_id}")
        self.record_id = record_id


class IncompleteDraftError(DPHoursError):
    """A draft cannot be submitted because some fields are missing."""


class PersistenceError(DPHoursError):
    """The record file could not be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
