"""Device-specific domain types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from device_registry.core.time import as_utc


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    """A device as held by the store; ``id`` is ``None`` until first saved."""

    name: str
    brand: str
    creation_time: datetime
    id: Optional[int] = None

    @classmethod
    def from_orm(cls, instance) -> DeviceRecord:
        return cls(
            id=instance.id,
            name=instance.name,
            brand=instance.brand,
            creation_time=as_utc(instance.creation_time),
        )


@dataclass(frozen=True, slots=True)
class DeviceCandidate:
    """Caller-supplied data for create and full update.

    Fields are loosely typed on purpose: the validator reports missing or
    mistyped values instead of the constructor rejecting them.
    """

    name: object = None
    brand: object = None
    creation_time: object = None


class DeviceField(str, Enum):
    """Mutable fields a patch may name, keyed by their wire names."""

    NAME = "name"
    BRAND = "brand"
    CREATION_TIME = "creationTime"

    @property
    def attribute(self) -> str:
        return _ATTRIBUTES[self]

    @classmethod
    def lookup(cls, key: str) -> Optional[DeviceField]:
        try:
            return cls(key)
        except ValueError:
            return None


_ATTRIBUTES = {
    DeviceField.NAME: "name",
    DeviceField.BRAND: "brand",
    DeviceField.CREATION_TIME: "creation_time",
}


@dataclass(frozen=True, slots=True)
class DevicePatch:
    """A validated set of field changes; ``None`` means "leave as is"."""

    name: Optional[str] = None
    brand: Optional[str] = None
    creation_time: Optional[datetime] = None

    def apply(self, record: DeviceRecord) -> DeviceRecord:
        changes = {
            attr: value
            for attr in ("name", "brand", "creation_time")
            if (value := getattr(self, attr)) is not None
        }
        return replace(record, **changes)

    @property
    def fields(self) -> list[str]:
        return [
            field.value
            for field in DeviceField
            if getattr(self, field.attribute) is not None
        ]
