"""Module containing custom types for the dp_hours package."""
import enum

from dp_hours.exceptions import InvalidOperationTypeError
from dp_hours.i18n import _

RecordId = str
"""Opaque identifier of a persisted operation record."""

ShiftId = str
"""Identifier of a work shift."""

Location = str
"""Free-text identifier of an operational site."""


class OperationType(enum.StrEnum):
    """The kind of a DP operation.

    Members are declared in their sequence order: a cycle opens with
    ``SETUP`` and closes with ``OFF``. The enum *value* is the label stored
    by the log and is used for persistence.
    """

    SETUP = "DP Setup"
    MOVING_IN = "Moving in"
    HANDLING_OFFSHORE = "Handling Offshore"
    PULLING_OUT = "Pulling Out"
    OFF = "DP OFF"

    @property
    def rank(self) -> int:
        """Position of the operation type in a cycle, starting at 1."""
        return _RANKS[self]

    @property
    def is_boundary(self) -> bool:
        """Whether the operation type opens or closes a cycle."""
        return self in (OperationType.SETUP, OperationType.OFF)

    @property
    def display_name(self) -> str:
        """Return the translated display name for this operation type."""
        return _(self.value)

    @classmethod
    def parse(cls, label: "str | OperationType") -> "OperationType":
        """Parse an operation type from its label or its member name.

        Matching is case-insensitive, so ``"DP Setup"``, ``"setup"`` and
        ``"SETUP"`` all give ``OperationType.SETUP``.

        Raises:
            InvalidOperationTypeError: If the label matches no operation type.
        """
        if isinstance(label, OperationType):
            return label
        normalized = label.strip().lower()
        for member in cls:
            if normalized in (member.value.lower(), member.name.lower()):
                return member
        raise InvalidOperationTypeError(label)


_RANKS: dict[OperationType, int] = {
    operation_type: rank for rank, operation_type in enumerate(OperationType, 1)
}
