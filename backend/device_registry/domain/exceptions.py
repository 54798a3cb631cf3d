"""Domain-level error vocabulary.

Registry operations return these inside ``Err`` rather than raising them;
the HTTP layer translates each kind to a status code (see ``api/errors.py``).
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainError:
    """Base type for service-layer failures."""

    kind: str = "domain"

    @property
    def message(self) -> str:
        return "Domain error"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class NotFoundError(DomainError):
    """No record exists at the given id."""

    device_id: int
    kind = "not_found"

    @property
    def message(self) -> str:
        return f"Device not found with id: {self.device_id}"


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single structural problem with one field."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ValidationError(DomainError):
    """Supplied data violates a structural constraint."""

    violations: tuple[FieldViolation, ...]
    kind = "validation"

    @classmethod
    def single(cls, field: str, reason: str) -> ValidationError:
        return cls((FieldViolation(field, reason),))

    @property
    def field(self) -> str:
        return self.violations[0].field

    @property
    def reason(self) -> str:
        return self.violations[0].reason

    @property
    def message(self) -> str:
        return "Validation error: " + "; ".join(str(v) for v in self.violations)


@dataclass(frozen=True, slots=True)
class IllegalArgumentError(DomainError):
    """A patch referenced a field name outside the recognized set."""

    field: str
    kind = "illegal_argument"

    @property
    def message(self) -> str:
        return f"Invalid field: {self.field}"


@dataclass(frozen=True, slots=True)
class ServiceError(DomainError):
    """Unexpected failure from the persistence collaborator."""

    operation: str
    cause: BaseException
    kind = "service"

    @property
    def message(self) -> str:
        return f"Error {self.operation}"
