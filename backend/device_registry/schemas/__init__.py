"""Schemas module initialization."""

from .device import DeviceCreate, DeviceResponse, DeviceUpdate

__all__ = [
    "DeviceCreate",
    "DeviceUpdate",
    "DeviceResponse",
]
