"""API module initialization."""

from . import devices, errors, metrics

__all__ = ["devices", "errors", "metrics"]
