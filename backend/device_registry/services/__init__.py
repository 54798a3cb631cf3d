"""Service layer entry points."""

from .device_registry import DeviceRegistry

__all__ = ["DeviceRegistry"]
