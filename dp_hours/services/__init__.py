"""Services layer for DP hours.

This module provides the business logic usable by any presentation layer:
validation of operation sequences, session derivation and shift reports.
"""

from dp_hours.services.dp_hours_service import DPHoursService
from dp_hours.services.draft.operation_draft import (
    DraftEntry,
    DraftStatus,
    OperationDraft,
)
from dp_hours.services.session.duration import (
    SessionStats,
    format_duration,
    session_stats,
    total_duration,
)
from dp_hours.services.session.session_deriver import SessionOptions, derive_sessions
from dp_hours.services.session.shift_calculator import (
    Shift,
    ShiftCalculator,
    ShiftTimeResult,
)
from dp_hours.services.use_cases import MutationResult
from dp_hours.services.validation.sequence_validator import (
    SequenceValidator,
    validate,
)
from dp_hours.services.validation.validation_result import (
    ValidationContext,
    ValidationErrorKind,
    ValidationResult,
)

__all__ = [
    "DPHoursService",
    "DraftEntry",
    "DraftStatus",
    "MutationResult",
    "OperationDraft",
    "SequenceValidator",
    "SessionOptions",
    "SessionStats",
    "Shift",
    "ShiftCalculator",
    "ShiftTimeResult",
    "ValidationContext",
    "ValidationErrorKind",
    "ValidationResult",
    "derive_sessions",
    "format_duration",
    "session_stats",
    "total_duration",
    "validate",
]
