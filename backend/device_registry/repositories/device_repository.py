"""Device persistence: the store protocol the registry needs and its SQLAlchemy implementation."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from sqlalchemy import delete, exists, select
from sqlalchemy.orm import Session

from device_registry.db import Device
from device_registry.domain.devices import DeviceRecord
from device_registry.repositories.base import SQLAlchemyRepository


class DeviceStore(Protocol):
    """Durable keyed storage for device records. Every method may raise."""

    def save(self, record: DeviceRecord) -> DeviceRecord:
        ...

    def find_by_id(self, device_id: int) -> Optional[DeviceRecord]:
        ...

    def find_all(self) -> Sequence[DeviceRecord]:
        ...

    def exists_by_id(self, device_id: int) -> bool:
        ...

    def delete_by_id(self, device_id: int) -> None:
        ...

    def find_by_brand(self, brand: str) -> Sequence[DeviceRecord]:
        ...


class SqlDeviceStore(SQLAlchemyRepository[Device]):
    """Encapsulates all direct Device ORM access."""

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def save(self, record: DeviceRecord) -> DeviceRecord:
        """Insert when ``record.id`` is None, otherwise overwrite the existing row."""
        with self.unit_of_work() as session:
            if record.id is None:
                model = Device()
                session.add(model)
            else:
                model = session.get(Device, record.id)
                if model is None:
                    raise LookupError(f"Device row {record.id} vanished before save")
            model.name = record.name
            model.brand = record.brand
            model.creation_time = record.creation_time
        self.session.refresh(model)
        return DeviceRecord.from_orm(model)

    def find_by_id(self, device_id: int) -> Optional[DeviceRecord]:
        model = self.session.get(Device, device_id)
        return DeviceRecord.from_orm(model) if model else None

    def find_all(self) -> list[DeviceRecord]:
        models = self.session.scalars(select(Device).order_by(Device.id.asc()))
        return [DeviceRecord.from_orm(model) for model in models]

    def exists_by_id(self, device_id: int) -> bool:
        return bool(self.session.scalar(select(exists().where(Device.id == device_id))))

    def delete_by_id(self, device_id: int) -> None:
        with self.unit_of_work() as session:
            session.execute(delete(Device).where(Device.id == device_id))

    def find_by_brand(self, brand: str) -> list[DeviceRecord]:
        stmt = select(Device).where(Device.brand == brand).order_by(Device.id.asc())
        return [DeviceRecord.from_orm(model) for model in self.session.scalars(stmt)]
