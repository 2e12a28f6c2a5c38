"""Seed a ledger store with demo data."""
from ledger.config import settings
from ledger.context import CallContext
from ledger.services.device_registry import DeviceRegistry
from ledger.services.repair_tracking import RepairTracking
from ledger.store import LedgerStore

HOSPITAL = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
TECHNICIAN = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


def seed(store: LedgerStore | None = None) -> LedgerStore:
    """Seed store with demo data."""
    store = store or LedgerStore.from_url(settings.DATABASE_URL)
    devices = DeviceRegistry(store)
    repairs = RepairTracking(store, devices.ownership())
    
    owner = CallContext(caller=HOSPITAL, clock=100000)
    device_id = devices.register_device(
        owner,
        name="MRI Scanner",
        model="Model XYZ-123",
        serial_number="SN-456789",
        manufacturer="Medical Imaging Corp",
        purchase_date=1643673600,
        warranty_expiry=1706745600,
        department="Radiology",
    ).unwrap()
    
    repair_id = repairs.report_issue(
        owner,
        device_id=device_id,
        issue_description="Display showing artifacts",
        priority="high",
    ).unwrap()
    devices.update_device_status(owner, device_id, "maintenance").unwrap()
    repairs.update_repair_status(owner, repair_id, "in-progress").unwrap()
    
    technician = CallContext(caller=TECHNICIAN, clock=100001)
    repairs.add_repair_action(
        technician,
        repair_id,
        action_description="Replaced display module",
        parts_replaced="Display module v2",
        cost=500,
    ).unwrap()
    
    print("✅ Ledger seeded successfully!")
    print(f"  device #{device_id} owned by {HOSPITAL}")
    print(f"  repair #{repair_id} with one action at clock {technician.clock}")
    return store


if __name__ == "__main__":
    seed()
