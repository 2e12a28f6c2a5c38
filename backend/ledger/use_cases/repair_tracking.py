"""Repair ticket use-cases. Authorization is borrowed from device ownership."""
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from ..context import CallContext
from ..domain_errors import forbidden, not_found
from ..models import (
    REPAIR_SEQUENCE,
    REPAIR_STATUS_REPORTED,
    Repair,
    RepairAction,
    fits_integer_column,
)
from ..store import next_sequence_value


def _get_repair_or_404(*, db: Session, repair_id: int) -> Repair:
    repair = get_repair_use_case(db=db, repair_id=repair_id)
    if not repair:
        raise not_found(
            "REPAIR_NOT_FOUND",
            "Repair not found",
            repair_id=repair_id,
        )
    return repair


def report_issue_use_case(
    *,
    db: Session,
    ctx: CallContext,
    device_id: int,
    issue_description: str,
    priority: str,
) -> Repair:
    """Open a repair ticket. The device reference is not validated here."""
    repair_id = next_sequence_value(db, REPAIR_SEQUENCE)
    repair = Repair(
        id=repair_id,
        device_id=device_id,
        reported_by=ctx.caller,
        issue_description=issue_description,
        priority=priority,
        reported_date=ctx.clock,
        status=REPAIR_STATUS_REPORTED,
    )
    db.add(repair)
    db.flush()
    return repair


def get_repair_use_case(*, db: Session, repair_id: int) -> Repair | None:
    if not fits_integer_column(repair_id):
        return None
    return db.query(Repair).filter(Repair.id == repair_id).first()


def update_repair_status_use_case(
    *,
    db: Session,
    ctx: CallContext,
    repair_id: int,
    new_status: str,
    get_device_owner: Callable[[int], str | None],
) -> Repair:
    """Overwrite repair status; only the current owner of the device may do so."""
    repair = _get_repair_or_404(db=db, repair_id=repair_id)

    owner = get_device_owner(repair.device_id)
    if owner is None:
        raise not_found(
            "REPAIR_DEVICE_OWNER_NOT_FOUND",
            "Device for this repair has no owner",
            repair_id=repair_id,
            device_id=repair.device_id,
        )
    if owner != ctx.caller:
        raise forbidden(
            "REPAIR_NOT_DEVICE_OWNER",
            "Only the device owner can change repair status",
            repair_id=repair_id,
            device_id=repair.device_id,
        )

    repair.status = new_status
    db.flush()
    return repair


def add_repair_action_use_case(
    *,
    db: Session,
    ctx: CallContext,
    repair_id: int,
    action_description: str,
    parts_replaced: str,
    cost: int,
) -> RepairAction:
    """Log work at the current clock tick.

    Any caller may log an action. A second action at the same tick replaces
    the first one.
    """
    _get_repair_or_404(db=db, repair_id=repair_id)

    action = db.merge(
        RepairAction(
            repair_id=repair_id,
            timestamp=ctx.clock,
            performed_by=ctx.caller,
            action_description=action_description,
            parts_replaced=parts_replaced,
            cost=cost,
        )
    )
    db.flush()
    return action


def get_repair_action_use_case(*, db: Session, repair_id: int, timestamp: int) -> RepairAction | None:
    if not (fits_integer_column(repair_id) and fits_integer_column(timestamp)):
        return None
    return db.query(RepairAction).filter(
        RepairAction.repair_id == repair_id,
        RepairAction.timestamp == timestamp,
    ).first()
