"""Device schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from device_registry.domain.devices import DeviceCandidate, DeviceRecord
from device_registry.domain.validation import parse_timestamp


class DeviceBase(BaseModel):
    """Base device schema.

    Emptiness and future timestamps are checked by the registry so that
    HTTP and direct callers get the same validation.
    """

    name: str
    brand: str
    creation_time: Optional[datetime] = Field(None, alias="creationTime")

    model_config = {"populate_by_name": True}

    @field_validator("creation_time", mode="before")
    @classmethod
    def parse_creation_time(cls, value):
        """Accept datetimes and ISO-8601 strings only; epoch numbers are not timestamps."""
        if value is None:
            return None
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError("wrong type, expected timestamp")
        return parsed

    def to_candidate(self) -> DeviceCandidate:
        return DeviceCandidate(
            name=self.name,
            brand=self.brand,
            creation_time=self.creation_time,
        )


class DeviceCreate(DeviceBase):
    """Device creation schema."""


class DeviceUpdate(DeviceBase):
    """Full replacement schema; an omitted ``creationTime`` resets it to now."""


class DeviceResponse(BaseModel):
    """Device response schema."""

    id: int
    name: str
    brand: str
    creation_time: datetime = Field(..., alias="creationTime")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @classmethod
    def from_record(cls, record: DeviceRecord) -> "DeviceResponse":
        return cls(
            id=record.id,
            name=record.name,
            brand=record.brand,
            creation_time=record.creation_time,
        )
