"""Device registry: the business rules for device lifecycle operations."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Mapping, TypeVar

from device_registry.core.logging import get_logger
from device_registry.core.metrics import record_device_operation
from device_registry.core.time import Clock, as_utc, utcnow
from device_registry.domain.devices import DeviceCandidate, DevicePatch, DeviceRecord
from device_registry.domain.exceptions import (
    DomainError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from device_registry.domain.result import Err, Ok, Result
from device_registry.domain.validation import parse_patch, parse_timestamp, validate_candidate
from device_registry.repositories import DeviceStore

logger = get_logger(__name__)

T = TypeVar("T")


class _StoreFailure(Exception):
    """Carries a wrapped store exception out of ``_call``."""

    def __init__(self, error: ServiceError) -> None:
        super().__init__(error.message)
        self.error = error


class DeviceRegistry:
    """Create, read, update, patch, delete and search device records.

    Every operation returns ``Ok(value)`` or ``Err(error)``. The registry
    keeps no state of its own and re-reads the store on each call, so a
    single instance may serve concurrent callers. Concurrent writes to the
    same id are last-write-wins at the store.
    """

    def __init__(self, store: DeviceStore, clock: Clock = utcnow) -> None:
        self.store = store
        self.clock = clock

    # -------------------------------------------------------------------------
    # Queries

    def get_by_id(self, device_id: int) -> Result[DeviceRecord]:
        try:
            record = self._call("retrieving device", self.store.find_by_id, device_id)
        except _StoreFailure as failure:
            return self._fail("get_by_id", failure.error)
        if record is None:
            return self._fail("get_by_id", NotFoundError(device_id))
        return self._ok("get_by_id", record)

    def get_all(self) -> Result[list[DeviceRecord]]:
        try:
            records = self._call("retrieving devices", self.store.find_all)
        except _StoreFailure as failure:
            return self._fail("get_all", failure.error)
        return self._ok("get_all", list(records))

    def search_by_brand(self, brand: str) -> Result[list[DeviceRecord]]:
        """Exact, case-sensitive brand match; no matches is ``Ok([])``."""
        try:
            records = self._call("finding devices by brand", self.store.find_by_brand, brand)
        except _StoreFailure as failure:
            return self._fail("search_by_brand", failure.error)
        return self._ok("search_by_brand", list(records))

    # -------------------------------------------------------------------------
    # Mutations

    def create(self, candidate: DeviceCandidate) -> Result[DeviceRecord]:
        now = self.clock()
        violations = validate_candidate(candidate, now)
        if violations:
            return self._fail("create", ValidationError(violations))

        record = self._record_from(candidate, now)
        try:
            saved = self._call("adding device", self.store.save, record)
        except _StoreFailure as failure:
            return self._fail("create", failure.error)

        logger.info(
            "Device created",
            extra={"operation": "create", "device_id": saved.id, "brand": saved.brand},
        )
        return self._ok("create", saved)

    def update(self, device_id: int, replacement: DeviceCandidate) -> Result[DeviceRecord]:
        """Replace name, brand and creation time; a missing creation time becomes now."""
        try:
            current = self._call("retrieving device", self.store.find_by_id, device_id)
            if current is None:
                return self._fail("update", NotFoundError(device_id))

            now = self.clock()
            violations = validate_candidate(replacement, now)
            if violations:
                return self._fail("update", ValidationError(violations))

            updated = replace(self._record_from(replacement, now), id=current.id)
            saved = self._call("updating device", self.store.save, updated)
        except _StoreFailure as failure:
            return self._fail("update", failure.error)

        logger.info(
            "Device updated",
            extra={"operation": "update", "device_id": saved.id, "brand": saved.brand},
        )
        return self._ok("update", saved)

    def update_partial(
        self, device_id: int, field_map: Mapping[str, object]
    ) -> Result[DeviceRecord]:
        """Apply only the supplied fields.

        The whole map is resolved and type-checked before the record is
        touched: an unknown field or a bad value rejects the patch and the
        store is never written.
        """
        try:
            current = self._call("retrieving device", self.store.find_by_id, device_id)
            if current is None:
                return self._fail("update_partial", NotFoundError(device_id))

            patch = parse_patch(field_map, self.clock())
            if not isinstance(patch, DevicePatch):
                return self._fail("update_partial", patch)

            saved = self._call("partially updating device", self.store.save, patch.apply(current))
        except _StoreFailure as failure:
            return self._fail("update_partial", failure.error)

        logger.info(
            "Device patched",
            extra={
                "operation": "update_partial",
                "device_id": saved.id,
                "fields": patch.fields,
            },
        )
        return self._ok("update_partial", saved)

    def delete(self, device_id: int) -> Result[None]:
        """Remove the record; a second delete of the same id is ``NotFoundError``."""
        try:
            if not self._call("checking device", self.store.exists_by_id, device_id):
                return self._fail("delete", NotFoundError(device_id))
            self._call("deleting device", self.store.delete_by_id, device_id)
        except _StoreFailure as failure:
            return self._fail("delete", failure.error)

        logger.info("Device deleted", extra={"operation": "delete", "device_id": device_id})
        return self._ok("delete", None)

    # -------------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _record_from(candidate: DeviceCandidate, now: datetime) -> DeviceRecord:
        """Build a record from an already validated candidate."""
        if candidate.creation_time is None:
            creation_time = as_utc(now)
        else:
            creation_time = parse_timestamp(candidate.creation_time)
        return DeviceRecord(
            name=candidate.name,
            brand=candidate.brand,
            creation_time=creation_time,
        )

    @staticmethod
    def _call(action: str, fn: Callable[..., T], *args) -> T:
        try:
            return fn(*args)
        except Exception as exc:
            logger.error("Device store failure while %s", action, exc_info=True)
            raise _StoreFailure(ServiceError(action, exc)) from exc

    @staticmethod
    def _ok(operation: str, value: T) -> Ok[T]:
        record_device_operation(operation, "success")
        return Ok(value)

    @staticmethod
    def _fail(operation: str, error: DomainError) -> Err:
        record_device_operation(operation, error.kind)
        if not isinstance(error, ServiceError):
            logger.info("Device %s rejected: %s", operation, error.message)
        return Err(error)
