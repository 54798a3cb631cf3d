"""Shared FastAPI dependency factories."""

from fastapi import Depends
from sqlalchemy.orm import Session

from device_registry.core.time import Clock, utcnow
from device_registry.db import get_db
from device_registry.repositories import DeviceStore, SqlDeviceStore
from device_registry.services import DeviceRegistry


def get_session(db: Session = Depends(get_db)) -> Session:
    """Expose the SQLAlchemy session (alias for clarity)."""
    return db


def get_clock() -> Clock:
    return utcnow


def get_device_store(session: Session = Depends(get_session)) -> DeviceStore:
    return SqlDeviceStore(session)


def get_device_registry(
    store: DeviceStore = Depends(get_device_store),
    clock: Clock = Depends(get_clock),
) -> DeviceRegistry:
    return DeviceRegistry(store, clock=clock)
