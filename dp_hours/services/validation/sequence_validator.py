"""Rule engine checking candidate operation records before they are saved.

The checks run in a fixed order and stop at the first failure, so a
candidate set violating several rules always reports the same error:

1. duplicate (date, time, location)
2. a cycle must open with a Setup
3. operation types must follow the cycle order
4. a location that has ever been switched off must end with an Off
5. no simultaneous operations at two locations
6. a Setup cannot start while another location is still running
"""
import itertools
import logging
from datetime import timedelta
from typing import Iterable, NamedTuple

from dp_hours.core.time_utils import format_date, format_time
from dp_hours.core.time_window import TimeWindow
from dp_hours.core.types import Location, OperationType
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.i18n import _
from dp_hours.services.validation.validation_result import (
    ValidationContext,
    ValidationErrorKind,
    ValidationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = timedelta(minutes=1)
"""Two operations closer than this at different locations are simultaneous."""

DEFAULT_COOLDOWN = timedelta(minutes=60)
"""Minimum delay between an Off and a new Setup at the same location."""


class _ValidationInput(NamedTuple):
    """The records a single validation call works on."""

    location: Location
    candidates: tuple[OperationRecord, ...]
    existing: tuple[OperationRecord, ...]
    context: ValidationContext

    def existing_at_location(self) -> tuple[OperationRecord, ...]:
        """Existing records of the candidates' location, chronologically."""
        return tuple(
            sorted(
                record for record in self.existing if record.location == self.location
            )
        )

    def location_timeline(self) -> list[tuple[OperationRecord, bool]]:
        """Existing and candidate records of the location, flagged as candidate."""
        return sorted(
            itertools.chain(
                ((record, False) for record in self.existing_at_location()),
                ((record, True) for record in self.candidates),
            ),
            key=lambda item: item[0],
        )


def _describe(record: OperationRecord) -> str:
    return (
        f"{record.operation_type.display_name} "
        f"({format_date(record.operation_date)} {format_time(record.operation_time)})"
    )


class SequenceValidator:
    """Validate candidate operation records against the existing ones.

    The validator is stateless: it never mutates the records it is given
    and only returns a verdict. Callers persist the candidates only when
    the verdict is valid.
    """

    def __init__(
        self,
        tolerance: timedelta = DEFAULT_TOLERANCE,
        cooldown: timedelta = DEFAULT_COOLDOWN,
    ) -> None:
        """Initialize the validator.

        Args:
            tolerance: Time delta within which operations at two different
                locations conflict.
            cooldown: Minimum time between an Off and a new Setup at the same
                location on the same day.
        """
        if tolerance < timedelta():
            raise ValueError(f"tolerance must not be negative, got {tolerance}")
        if cooldown < timedelta():
            raise ValueError(f"cooldown must not be negative, got {cooldown}")
        self._tolerance = tolerance
        self._cooldown = cooldown

    @property
    def tolerance(self) -> timedelta:
        """Return the cross-location tolerance window."""
        return self._tolerance

    @property
    def cooldown(self) -> timedelta:
        """Return the cool-down between two cycles at one location."""
        return self._cooldown

    def validate(
        self,
        candidates: Iterable[OperationRecord],
        all_records: Iterable[OperationRecord],
        context: ValidationContext | None = None,
    ) -> ValidationResult:
        """Check candidate records of one location against the existing records.

        Args:
            candidates: Records being introduced or edited, all at one location.
            all_records: The existing records. Records replaced by the
                candidates (same identifier, or listed in the context) are
                ignored.
            context: Optional per-call flags.

        Returns:
            A valid result, or the first rule violation found.

        Raises:
            ValueError: If the candidates span several locations.
        """
        context = context or ValidationContext()
        candidate_records = tuple(sorted(candidates))
        if not candidate_records:
            return ValidationResult.valid()

        if len(locations := {record.location for record in candidate_records}) > 1:
            raise ValueError(
                f"Candidate records must share one location, got {sorted(locations)}"
            )

        replaced_ids = context.replaced_ids | {
            record.record_id
            for record in candidate_records
            if record.record_id is not None
        }
        validation_input = _ValidationInput(
            location=candidate_records[0].location,
            candidates=candidate_records,
            existing=tuple(
                record
                for record in all_records
                if record.record_id is None or record.record_id not in replaced_ids
            ),
            context=context,
        )

        checks = (
            self._check_duplicates,
            self._check_bracketing,
            self._check_ordering,
            self._check_closure,
            self._check_overlap,
            self._check_hand_off,
        )
        for check in checks:
            if not (result := check(validation_input)).is_valid:
                logger.debug(
                    "Rejected %d candidate(s) at %s: %s",
                    len(candidate_records),
                    validation_input.location,
                    result,
                )
                return result

        logger.debug(
            "Accepted %d candidate(s) at %s",
            len(candidate_records),
            validation_input.location,
        )
        return ValidationResult.valid()

    @staticmethod
    def _check_duplicates(validation_input: _ValidationInput) -> ValidationResult:
        seen = {
            (record.operation_date, record.operation_time): record
            for record in validation_input.existing_at_location()
        }
        for candidate in validation_input.candidates:
            key = (candidate.operation_date, candidate.operation_time)
            if (other := seen.get(key)) is not None:
                return ValidationResult.invalid(
                    ValidationErrorKind.DUPLICATE_OPERATION,
                    _(
                        "Duplicate: an operation at {time} already exists "
                        "for location {location} on {date}"
                    ).format(
                        time=format_time(candidate.operation_time),
                        location=candidate.location,
                        date=format_date(candidate.operation_date),
                    ),
                    (candidate, other),
                    candidate.location,
                )
            seen[key] = candidate
        return ValidationResult.valid()

    @staticmethod
    def _check_bracketing(validation_input: _ValidationInput) -> ValidationResult:
        first = validation_input.candidates[0]
        if first.operation_type == OperationType.SETUP:
            return ValidationResult.valid()

        previous_boundary = next(
            (
                record
                for record in reversed(validation_input.existing_at_location())
                if record.operation_type.is_boundary
                and record.timestamp < first.timestamp
            ),
            None,
        )
        if (
            previous_boundary is not None
            and previous_boundary.operation_type == OperationType.SETUP
        ):
            return ValidationResult.valid()

        return ValidationResult.invalid(
            ValidationErrorKind.MISSING_SETUP,
            _(
                "First operation for location {location} must be DP Setup, "
                "but found {operation_type}"
            ).format(
                location=first.location,
                operation_type=first.operation_type.display_name,
            ),
            (first,),
            first.location,
        )

    def _check_ordering(self, validation_input: _ValidationInput) -> ValidationResult:
        for (current, current_is_candidate), (following, following_is_candidate) in (
            itertools.pairwise(validation_input.location_timeline())
        ):
            if not (current_is_candidate or following_is_candidate):
                continue
            if self._is_valid_transition(current, following):
                continue

            if (
                current.operation_type == OperationType.OFF
                and following.operation_type == OperationType.SETUP
            ):
                message = _(
                    "Invalid operation sequence: a new DP Setup at {location} "
                    "must come at least {minutes} minutes after DP OFF at "
                    "{time} on {date}"
                ).format(
                    location=following.location,
                    minutes=int(self._cooldown.total_seconds() // 60),
                    time=format_time(current.operation_time),
                    date=format_date(following.operation_date),
                )
            else:
                message = _(
                    "Invalid operation sequence: {current} cannot be followed "
                    "by {following} on {date}"
                ).format(
                    current=_describe(current),
                    following=_describe(following),
                    date=format_date(following.operation_date),
                )
            return ValidationResult.invalid(
                ValidationErrorKind.INVALID_SEQUENCE,
                message,
                (current, following),
                validation_input.location,
            )
        return ValidationResult.valid()

    def _is_valid_transition(
        self, current: OperationRecord, following: OperationRecord
    ) -> bool:
        if (
            current.operation_type == OperationType.OFF
            and following.operation_type == OperationType.SETUP
        ):
            return (
                following.operation_date != current.operation_date
                or following.timestamp - current.timestamp >= self._cooldown
            )
        return following.operation_type.rank > current.operation_type.rank

    @staticmethod
    def _check_closure(validation_input: _ValidationInput) -> ValidationResult:
        if validation_input.context.permit_missing_off:
            return ValidationResult.valid()

        timeline = [item[0] for item in validation_input.location_timeline()]
        if not any(record.operation_type == OperationType.OFF for record in timeline):
            return ValidationResult.valid()

        if (last := timeline[-1]).operation_type == OperationType.OFF:
            return ValidationResult.valid()

        return ValidationResult.invalid(
            ValidationErrorKind.MISSING_CLOSING_OFF,
            _(
                "DP OFF must be the last operation for location {location}, "
                "but found {operation}"
            ).format(location=last.location, operation=_describe(last)),
            (last,),
            last.location,
        )

    def _check_overlap(self, validation_input: _ValidationInput) -> ValidationResult:
        others = [
            record
            for record in validation_input.existing
            if record.location != validation_input.location
        ]
        for candidate in validation_input.candidates:
            window = TimeWindow.around(candidate.operation_time, self._tolerance)
            for other in others:
                if other.operation_date != candidate.operation_date:
                    continue
                if window.contains(other.operation_time):
                    return ValidationResult.invalid(
                        ValidationErrorKind.TIME_OVERLAP,
                        _(
                            "Time conflict: the operation at {time} on {date} "
                            "overlaps with an operation at {other_time} at "
                            "location {other_location}"
                        ).format(
                            time=format_time(candidate.operation_time),
                            date=format_date(candidate.operation_date),
                            other_time=format_time(other.operation_time),
                            other_location=other.location,
                        ),
                        (candidate, other),
                        other.location,
                    )
        return ValidationResult.valid()

    @staticmethod
    def _check_hand_off(validation_input: _ValidationInput) -> ValidationResult:
        setups = [
            candidate
            for candidate in validation_input.candidates
            if candidate.operation_type == OperationType.SETUP
        ]
        if not setups:
            return ValidationResult.valid()

        open_cycles = {
            location: last_event
            for location, last_event in (
                (location, _last_event_of_open_cycle(records))
                for location, records in _group_by_location(validation_input.existing)
                if location != validation_input.location
            )
            if last_event is not None
        }
        for setup in setups:
            for location, last_event in sorted(open_cycles.items()):
                if last_event.timestamp < setup.timestamp:
                    return ValidationResult.invalid(
                        ValidationErrorKind.LOCATION_NOT_RELEASED,
                        _(
                            'Previous location "{location}" has no DP OFF before '
                            'starting at "{new_location}". Last operation was '
                            "{operation}"
                        ).format(
                            location=location,
                            new_location=setup.location,
                            operation=_describe(last_event),
                        ),
                        (setup, last_event),
                        location,
                    )
        return ValidationResult.valid()


def _group_by_location(
    records: Iterable[OperationRecord],
) -> Iterable[tuple[Location, list[OperationRecord]]]:
    by_location = sorted(records, key=lambda record: (record.location, record))
    for location, group in itertools.groupby(by_location, key=lambda r: r.location):
        yield location, list(group)


def _last_event_of_open_cycle(
    records: list[OperationRecord],
) -> OperationRecord | None:
    """Return the last record of a location whose latest cycle is still open."""
    last_boundary = next(
        (record for record in reversed(records) if record.operation_type.is_boundary),
        None,
    )
    if last_boundary is None or last_boundary.operation_type != OperationType.SETUP:
        return None
    return records[-1]


def validate(
    candidates: Iterable[OperationRecord],
    all_records: Iterable[OperationRecord],
    context: ValidationContext | None = None,
) -> ValidationResult:
    """Validate candidates with the default tolerance and cool-down."""
    return SequenceValidator().validate(candidates, all_records, context)
