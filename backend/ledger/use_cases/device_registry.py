"""Device registry use-cases: registration, status and ownership transfer."""
from __future__ import annotations

from sqlalchemy.orm import Session

from ..context import CallContext
from ..domain_errors import forbidden, not_found
from ..models import (
    DEVICE_SEQUENCE,
    DEVICE_STATUS_ACTIVE,
    Device,
    DeviceOwner,
    fits_integer_column,
)
from ..store import next_sequence_value


def _get_device_or_404(*, db: Session, device_id: int) -> Device:
    device = get_device_use_case(db=db, device_id=device_id)
    if not device:
        raise not_found(
            "DEVICE_NOT_FOUND",
            "Device not found",
            device_id=device_id,
        )
    return device


def _get_ownership(*, db: Session, device_id: int) -> DeviceOwner | None:
    if not fits_integer_column(device_id):
        return None
    return db.query(DeviceOwner).filter(DeviceOwner.device_id == device_id).first()


def register_device_use_case(
    *,
    db: Session,
    ctx: CallContext,
    name: str,
    model: str,
    serial_number: str,
    manufacturer: str,
    purchase_date: int,
    warranty_expiry: int,
    department: str,
) -> Device:
    """Create an active device owned by the caller under the next sequential id."""
    device_id = next_sequence_value(db, DEVICE_SEQUENCE)
    device = Device(
        id=device_id,
        name=name,
        model=model,
        serial_number=serial_number,
        manufacturer=manufacturer,
        purchase_date=purchase_date,
        warranty_expiry=warranty_expiry,
        department=department,
        status=DEVICE_STATUS_ACTIVE,
    )
    db.add(device)
    db.add(DeviceOwner(device_id=device_id, owner=ctx.caller))
    db.flush()
    return device


def get_device_use_case(*, db: Session, device_id: int) -> Device | None:
    if not fits_integer_column(device_id):
        return None
    return db.query(Device).filter(Device.id == device_id).first()


def get_device_owner_use_case(*, db: Session, device_id: int) -> str | None:
    ownership = _get_ownership(db=db, device_id=device_id)
    return ownership.owner if ownership else None


def update_device_status_use_case(
    *,
    db: Session,
    ctx: CallContext,
    device_id: int,
    new_status: str,
) -> Device:
    """Overwrite the status of a device owned by the caller."""
    device = _get_device_or_404(db=db, device_id=device_id)

    ownership = _get_ownership(db=db, device_id=device_id)
    if ownership is None or ownership.owner != ctx.caller:
        raise forbidden(
            "DEVICE_NOT_OWNED",
            "Only the device owner can change its status",
            device_id=device_id,
        )

    device.status = new_status
    db.flush()
    return device


def transfer_device_use_case(
    *,
    db: Session,
    ctx: CallContext,
    device_id: int,
    new_owner: str,
) -> DeviceOwner:
    """Hand the device over to ``new_owner``; effective immediately."""
    ownership = _get_ownership(db=db, device_id=device_id)
    if ownership is None:
        raise not_found(
            "DEVICE_OWNER_NOT_FOUND",
            "Device has no ownership record",
            device_id=device_id,
        )
    if ownership.owner != ctx.caller:
        raise forbidden(
            "DEVICE_NOT_OWNED",
            "Only the device owner can transfer it",
            device_id=device_id,
        )

    ownership.owner = new_owner
    db.flush()
    return ownership
