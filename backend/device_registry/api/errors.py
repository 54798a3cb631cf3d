"""Utilities for translating domain errors to HTTP responses."""

from fastapi import HTTPException, status

from device_registry.domain.exceptions import (
    DomainError,
    IllegalArgumentError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from device_registry.domain.result import Err, Ok, Result

GENERIC_ERROR_DETAIL = "An unexpected error occurred"


def to_http(exc: DomainError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, IllegalArgumentError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, ServiceError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=GENERIC_ERROR_DETAIL
    )


def unwrap(result: Result):
    """Return the success value or raise the mapped ``HTTPException``."""
    match result:
        case Ok(value=value):
            return value
        case Err(error=error):
            raise to_http(error)
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")
