"""Repository layer for persistence access."""

from .device_repository import DeviceStore, SqlDeviceStore

__all__ = ["DeviceStore", "SqlDeviceStore"]
