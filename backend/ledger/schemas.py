"""Pydantic schemas for API."""
from typing import Annotated, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    DEVICE_STATUS_ACTIVE,
    DEVICE_STATUS_INACTIVE,
    DEVICE_STATUS_MAINTENANCE,
    INTEGER_COLUMN_MAX,
    INTEGER_COLUMN_MIN,
)

T = TypeVar("T")

DeviceStatus = Literal[DEVICE_STATUS_ACTIVE, DEVICE_STATUS_MAINTENANCE, DEVICE_STATUS_INACTIVE]

# Request integers must fit the signed 64-bit columns they are stored in.
StoredInt = Annotated[int, Field(ge=INTEGER_COLUMN_MIN, le=INTEGER_COLUMN_MAX)]
EntityId = Annotated[int, Field(ge=0, le=INTEGER_COLUMN_MAX)]


class ValueResponse(BaseModel, Generic[T]):
    """Success envelope; ``value`` is null for read misses."""
    value: Optional[T] = None


# Device schemas
class DeviceBase(BaseModel):
    name: str
    model: str
    serial_number: str
    manufacturer: str
    purchase_date: StoredInt
    warranty_expiry: StoredInt
    department: str


class DeviceCreate(DeviceBase):
    pass


class DeviceResponse(DeviceBase):
    id: int
    status: str
    model_config = ConfigDict(from_attributes=True)


class DeviceStatusUpdate(BaseModel):
    status: DeviceStatus


class DeviceTransfer(BaseModel):
    new_owner: str = Field(min_length=1)


# Repair schemas
class RepairCreate(BaseModel):
    device_id: EntityId
    issue_description: str
    priority: str


class RepairResponse(BaseModel):
    id: int
    device_id: int
    reported_by: str
    issue_description: str
    reported_date: int
    status: str
    priority: str
    model_config = ConfigDict(from_attributes=True)


class RepairStatusUpdate(BaseModel):
    status: str = Field(min_length=1)


class RepairActionCreate(BaseModel):
    action_description: str
    parts_replaced: str
    cost: int = Field(ge=0, le=INTEGER_COLUMN_MAX)


class RepairActionResponse(BaseModel):
    repair_id: int
    timestamp: int
    performed_by: str
    action_description: str
    parts_replaced: str
    cost: int
    model_config = ConfigDict(from_attributes=True)


# System schemas
class ClockResponse(BaseModel):
    clock: int


class ClockAdvanceRequest(BaseModel):
    steps: int = Field(default=1, ge=1, le=INTEGER_COLUMN_MAX)
