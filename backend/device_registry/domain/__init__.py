"""Domain layer primitives (records, validation, results, errors)."""

from . import devices, exceptions, validation
from .result import Err, Ok, Result

__all__ = ["Ok", "Err", "Result", "devices", "exceptions", "validation"]
