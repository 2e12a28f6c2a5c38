"""Device registry endpoints."""
from fastapi import APIRouter, Depends, status

from ..auth import get_call_context
from ..context import CallContext
from ..dependencies import PathInt, get_device_registry
from ..schemas import (
    DeviceCreate,
    DeviceResponse,
    DeviceStatusUpdate,
    DeviceTransfer,
    ValueResponse,
)
from ..services.device_registry import DeviceRegistry

router = APIRouter(prefix="/devices", tags=["devices"])


@router.post("", response_model=ValueResponse[int], status_code=status.HTTP_201_CREATED)
def register_device(
    data: DeviceCreate,
    ctx: CallContext = Depends(get_call_context),
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """Register a device owned by the caller."""
    result = registry.register_device(ctx, **data.model_dump())
    return {"value": result.unwrap()}


@router.get("/{device_id}", response_model=ValueResponse[DeviceResponse])
def get_device(
    device_id: PathInt,
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """Get device by ID; unknown ids yield a null value."""
    return {"value": registry.get_device(device_id).unwrap()}


@router.get("/{device_id}/owner", response_model=ValueResponse[str])
def get_device_owner(
    device_id: PathInt,
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """Get current device owner."""
    return {"value": registry.get_device_owner(device_id).unwrap()}


@router.patch("/{device_id}/status", response_model=ValueResponse[bool])
def update_device_status(
    device_id: PathInt,
    data: DeviceStatusUpdate,
    ctx: CallContext = Depends(get_call_context),
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """Change device status (owner only)."""
    result = registry.update_device_status(ctx, device_id, data.status)
    return {"value": result.unwrap()}


@router.post("/{device_id}/transfer", response_model=ValueResponse[bool])
def transfer_device(
    device_id: PathInt,
    data: DeviceTransfer,
    ctx: CallContext = Depends(get_call_context),
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """Transfer device ownership (owner only)."""
    result = registry.transfer_device(ctx, device_id, data.new_owner)
    return {"value": result.unwrap()}
