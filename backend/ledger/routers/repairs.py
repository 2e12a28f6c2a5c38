"""Repair tracking endpoints."""
from fastapi import APIRouter, Depends, status

from ..auth import get_call_context
from ..context import CallContext
from ..dependencies import PathInt, get_repair_tracking
from ..schemas import (
    RepairActionCreate,
    RepairActionResponse,
    RepairCreate,
    RepairResponse,
    RepairStatusUpdate,
    ValueResponse,
)
from ..services.repair_tracking import RepairTracking

router = APIRouter(prefix="/repairs", tags=["repairs"])


@router.post("", response_model=ValueResponse[int], status_code=status.HTTP_201_CREATED)
def report_issue(
    data: RepairCreate,
    ctx: CallContext = Depends(get_call_context),
    tracking: RepairTracking = Depends(get_repair_tracking),
):
    """Report an issue against a device."""
    result = tracking.report_issue(
        ctx,
        device_id=data.device_id,
        issue_description=data.issue_description,
        priority=data.priority,
    )
    return {"value": result.unwrap()}


@router.get("/{repair_id}", response_model=ValueResponse[RepairResponse])
def get_repair(
    repair_id: PathInt,
    tracking: RepairTracking = Depends(get_repair_tracking),
):
    """Get repair by ID; unknown ids yield a null value."""
    return {"value": tracking.get_repair(repair_id).unwrap()}


@router.patch("/{repair_id}/status", response_model=ValueResponse[bool])
def update_repair_status(
    repair_id: PathInt,
    data: RepairStatusUpdate,
    ctx: CallContext = Depends(get_call_context),
    tracking: RepairTracking = Depends(get_repair_tracking),
):
    """Change repair status (current device owner only)."""
    result = tracking.update_repair_status(ctx, repair_id, data.status)
    return {"value": result.unwrap()}


@router.post("/{repair_id}/actions", response_model=ValueResponse[bool])
def add_repair_action(
    repair_id: PathInt,
    data: RepairActionCreate,
    ctx: CallContext = Depends(get_call_context),
    tracking: RepairTracking = Depends(get_repair_tracking),
):
    """Log a repair action at the request's clock tick. Open to any caller."""
    result = tracking.add_repair_action(
        ctx,
        repair_id,
        action_description=data.action_description,
        parts_replaced=data.parts_replaced,
        cost=data.cost,
    )
    return {"value": result.unwrap()}


@router.get("/{repair_id}/actions/{timestamp}", response_model=ValueResponse[RepairActionResponse])
def get_repair_action(
    repair_id: PathInt,
    timestamp: PathInt,
    tracking: RepairTracking = Depends(get_repair_tracking),
):
    """Get the action recorded for a repair at an exact clock tick."""
    return {"value": tracking.get_repair_action(repair_id, timestamp).unwrap()}
