"""FastAPI dependencies exposing the registries wired in create_app()."""
from typing import Annotated

from fastapi import Path, Request

from .clock import LogicalClock
from .models import INTEGER_COLUMN_MAX
from .services.device_registry import DeviceRegistry
from .services.repair_tracking import RepairTracking

# Ids and clock ticks in the path are non-negative and must fit a 64-bit column.
PathInt = Annotated[int, Path(ge=0, le=INTEGER_COLUMN_MAX)]


def get_device_registry(request: Request) -> DeviceRegistry:
    return request.app.state.device_registry


def get_repair_tracking(request: Request) -> RepairTracking:
    return request.app.state.repair_tracking


def get_clock(request: Request) -> LogicalClock:
    return request.app.state.clock
