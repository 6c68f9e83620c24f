"""Use cases changing the stored operation records."""

from dp_hours.services.use_cases.delete_operations_use_case import (
    DeleteOperationsUseCase,
)
from dp_hours.services.use_cases.record_operations_use_case import (
    MutationResult,
    RecordOperationsUseCase,
)

__all__ = [
    "DeleteOperationsUseCase",
    "MutationResult",
    "RecordOperationsUseCase",
]
