"""Tests for the OperationType enum."""
import pytest

from dp_hours.core.types import OperationType
from dp_hours.exceptions import InvalidOperationTypeError


class TestOperationType:
    """Tests for OperationType."""

    def test_ranks_follow_the_cycle(self) -> None:
        """Ranks increase from Setup to Off."""
        ranks = [operation_type.rank for operation_type in OperationType]
        assert ranks == [1, 2, 3, 4, 5]
        assert OperationType.SETUP.rank < OperationType.OFF.rank

    def test_values_are_the_stored_labels(self) -> None:
        """Enum values are the labels written to the record file."""
        assert OperationType.SETUP == "DP Setup"
        assert OperationType.OFF == "DP OFF"

    def test_boundaries(self) -> None:
        """Only Setup and Off open or close a cycle."""
        assert {t for t in OperationType if t.is_boundary} == {
            OperationType.SETUP,
            OperationType.OFF,
        }

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("DP Setup", OperationType.SETUP),
            ("dp setup", OperationType.SETUP),
            ("SETUP", OperationType.SETUP),
            ("moving_in", OperationType.MOVING_IN),
            (" Handling Offshore ", OperationType.HANDLING_OFFSHORE),
            ("pulling out", OperationType.PULLING_OUT),
            ("off", OperationType.OFF),
            (OperationType.OFF, OperationType.OFF),
        ],
    )
    def test_parse(self, label: str, expected: OperationType) -> None:
        """Labels and member names are parsed case-insensitively."""
        assert OperationType.parse(label) == expected

    def test_parse_unknown_label_raises(self) -> None:
        """Unknown labels raise InvalidOperationTypeError."""
        with pytest.raises(InvalidOperationTypeError):
            OperationType.parse("Anchored")
