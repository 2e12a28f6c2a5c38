"""SQLAlchemy models for the device registry and repair ledger."""
from sqlalchemy import (
    BigInteger, Column, ForeignKey, Integer, String, Text
)
from .database import Base

DEVICE_STATUS_ACTIVE = "active"
DEVICE_STATUS_MAINTENANCE = "maintenance"
DEVICE_STATUS_INACTIVE = "inactive"

REPAIR_STATUS_REPORTED = "reported"

DEVICE_SEQUENCE = "device"
REPAIR_SEQUENCE = "repair"

# Integer columns are signed 64-bit.
INTEGER_COLUMN_MIN = -(2**63)
INTEGER_COLUMN_MAX = 2**63 - 1


def fits_integer_column(value: int) -> bool:
    return INTEGER_COLUMN_MIN <= value <= INTEGER_COLUMN_MAX


class LedgerSequence(Base):
    """Named monotonic id counter (last issued value)."""
    __tablename__ = "ledger_sequences"
    
    name = Column(String(64), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)


class Device(Base):
    """Physical asset record. Never deleted."""
    __tablename__ = "devices"
    
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(Text, nullable=False)
    model = Column(Text, nullable=False)
    serial_number = Column(Text, nullable=False)
    manufacturer = Column(Text, nullable=False)
    purchase_date = Column(BigInteger, nullable=False)
    warranty_expiry = Column(BigInteger, nullable=False)
    department = Column(Text, nullable=False)
    # Open string; only the DEVICE_STATUS_* values are written through the API.
    status = Column(String(50), nullable=False, default=DEVICE_STATUS_ACTIVE)


class DeviceOwner(Base):
    """Current owner of a device, exactly one row per device."""
    __tablename__ = "device_owners"
    
    device_id = Column(Integer, ForeignKey("devices.id"), primary_key=True)
    owner = Column(String(255), nullable=False, index=True)


class Repair(Base):
    """Service ticket raised against a device."""
    __tablename__ = "repairs"
    
    id = Column(Integer, primary_key=True, autoincrement=False)
    # Deliberately not a foreign key: the device is only checked through ownership lookups.
    device_id = Column(Integer, nullable=False, index=True)
    reported_by = Column(String(255), nullable=False)
    issue_description = Column(Text, nullable=False)
    priority = Column(Text, nullable=False)
    reported_date = Column(BigInteger, nullable=False)
    status = Column(Text, nullable=False, default=REPAIR_STATUS_REPORTED)


class RepairAction(Base):
    """Work logged against a repair, keyed by (repair_id, timestamp)."""
    __tablename__ = "repair_actions"
    
    repair_id = Column(Integer, ForeignKey("repairs.id"), primary_key=True, autoincrement=False)
    timestamp = Column(BigInteger, primary_key=True, autoincrement=False)
    performed_by = Column(String(255), nullable=False)
    action_description = Column(Text, nullable=False)
    parts_replaced = Column(Text, nullable=False)
    cost = Column(BigInteger, nullable=False)
