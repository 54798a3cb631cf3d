"""Pure validation of device candidates and patch field maps."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional

from device_registry.core.time import as_utc

from .devices import DeviceCandidate, DeviceField, DevicePatch
from .exceptions import FieldViolation, IllegalArgumentError, ValidationError


def _check_text(field: str, value: object) -> Optional[FieldViolation]:
    if value is None:
        return FieldViolation(field, "is required")
    if not isinstance(value, str):
        return FieldViolation(field, "wrong type, expected string")
    if not value:
        return FieldViolation(field, "must not be empty")
    return None


def parse_timestamp(value: object) -> Optional[datetime]:
    """Accept datetimes and ISO-8601 strings; ``None`` for anything else."""
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


def _check_timestamp(field: str, value: datetime, now: datetime) -> Optional[FieldViolation]:
    if value > as_utc(now):
        return FieldViolation(field, "must not be in the future")
    return None


def validate_candidate(candidate: DeviceCandidate, now: datetime) -> tuple[FieldViolation, ...]:
    """Return every violation in ``candidate``; an empty tuple means valid.

    ``creation_time`` is optional here: the registry fills in the clock's
    value when it is missing.
    """
    violations = [
        violation
        for violation in (
            _check_text(DeviceField.NAME.value, candidate.name),
            _check_text(DeviceField.BRAND.value, candidate.brand),
        )
        if violation is not None
    ]

    if candidate.creation_time is not None:
        parsed = parse_timestamp(candidate.creation_time)
        if parsed is None:
            violations.append(
                FieldViolation(DeviceField.CREATION_TIME.value, "wrong type, expected timestamp")
            )
        elif (violation := _check_timestamp(DeviceField.CREATION_TIME.value, parsed, now)):
            violations.append(violation)

    return tuple(violations)


def parse_patch(
    field_map: Mapping[str, object], now: datetime
) -> DevicePatch | IllegalArgumentError | ValidationError:
    """Resolve a raw field map into a typed patch without mutating anything.

    Unknown keys are reported before any value is inspected, so a bad key
    anywhere in the map rejects the whole patch.
    """
    resolved: list[tuple[DeviceField, object]] = []
    for key, value in field_map.items():
        field = DeviceField.lookup(key)
        if field is None:
            return IllegalArgumentError(key)
        resolved.append((field, value))

    changes: dict[str, object] = {}
    violations: list[FieldViolation] = []
    for field, value in resolved:
        if field is DeviceField.CREATION_TIME:
            parsed = parse_timestamp(value)
            if parsed is None:
                violations.append(FieldViolation(field.value, "wrong type, expected timestamp"))
                continue
            violation = _check_timestamp(field.value, parsed, now)
            value = parsed
        elif value is None:
            violation = FieldViolation(field.value, "must not be null")
        else:
            violation = _check_text(field.value, value)
        if violation is not None:
            violations.append(violation)
            continue
        changes[field.attribute] = value

    if violations:
        return ValidationError(tuple(violations))
    return DevicePatch(**changes)
