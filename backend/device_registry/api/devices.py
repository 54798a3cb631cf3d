"""Device API endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from device_registry.api.errors import unwrap
from device_registry.dependencies import get_device_registry
from device_registry.schemas.device import DeviceCreate, DeviceResponse, DeviceUpdate
from device_registry.services import DeviceRegistry

router = APIRouter(prefix="/devices", tags=["devices"])


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(
    payload: DeviceCreate,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> DeviceResponse:
    """Create a new device."""
    device = unwrap(registry.create(payload.to_candidate()))
    return DeviceResponse.from_record(device)


@router.get("", response_model=list[DeviceResponse])
def list_devices(
    registry: DeviceRegistry = Depends(get_device_registry),
) -> list[DeviceResponse]:
    """List all devices in store order."""
    devices = unwrap(registry.get_all())
    return [DeviceResponse.from_record(device) for device in devices]


@router.get("/search/brand/{brand}", response_model=list[DeviceResponse])
def search_devices_by_brand(
    brand: str,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> list[DeviceResponse]:
    """Search devices by exact brand; no matches is a 404."""
    devices = unwrap(registry.search_by_brand(brand))
    if not devices:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No devices found for brand: {brand}",
        )
    return [DeviceResponse.from_record(device) for device in devices]


@router.get("/{device_id}", response_model=DeviceResponse)
def get_device(
    device_id: int,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> DeviceResponse:
    """Get device by ID."""
    device = unwrap(registry.get_by_id(device_id))
    return DeviceResponse.from_record(device)


@router.put("/{device_id}", response_model=DeviceResponse)
def update_device(
    device_id: int,
    payload: DeviceUpdate,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> DeviceResponse:
    """Replace every mutable field of a device."""
    device = unwrap(registry.update(device_id, payload.to_candidate()))
    return DeviceResponse.from_record(device)


@router.patch("/{device_id}", response_model=DeviceResponse)
def update_device_partially(
    device_id: int,
    fields: dict[str, Any] = Body(...),
    registry: DeviceRegistry = Depends(get_device_registry),
) -> DeviceResponse:
    """Update only the supplied fields (name, brand, creationTime)."""
    device = unwrap(registry.update_partial(device_id, fields))
    return DeviceResponse.from_record(device)


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_device(
    device_id: int,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> None:
    """Delete a device."""
    unwrap(registry.delete(device_id))
