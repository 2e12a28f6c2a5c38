from __future__ import annotations

from ledger.context import CallContext
from ledger.services.device_registry import DeviceRegistry
from ledger.services.repair_tracking import RepairTracking
from ledger.store import LedgerStore

OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
REPORTER = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
NEW_OWNER = "ST3PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
CLOCK = 100000


class _FixedOwners:
    def __init__(self, owners):
        self.owners = owners

    def get_device_owner(self, device_id):
        return self.owners.get(device_id)


def _ledger() -> tuple[DeviceRegistry, RepairTracking]:
    store = LedgerStore.from_url("sqlite+pysqlite:///:memory:")
    devices = DeviceRegistry(store)
    return devices, RepairTracking(store, devices.ownership())


def _ctx(caller=OWNER, clock=CLOCK):
    return CallContext(caller=caller, clock=clock)


def _register(devices: DeviceRegistry, ctx: CallContext) -> int:
    return devices.register_device(
        ctx,
        name="Infusion Pump",
        model="IP-9",
        serial_number="SN-1",
        manufacturer="Acme Medical",
        purchase_date=1,
        warranty_expiry=2,
        department="ICU",
    ).unwrap()


def test_report_issue_records_reporter_clock_and_initial_status() -> None:
    _, repairs = _ledger()

    repair_id = repairs.report_issue(
        _ctx(REPORTER),
        device_id=1,
        issue_description="Display showing artifacts",
        priority="high",
    ).value

    assert repair_id == 1
    assert repairs.get_repair(repair_id).value.model_dump() == {
        "id": 1,
        "device_id": 1,
        "reported_by": REPORTER,
        "issue_description": "Display showing artifacts",
        "reported_date": CLOCK,
        "status": "reported",
        "priority": "high",
    }


def test_repair_ids_are_independent_of_device_ids() -> None:
    devices, repairs = _ledger()
    _register(devices, _ctx())
    _register(devices, _ctx())

    first = repairs.report_issue(_ctx(), device_id=1, issue_description="Issue 1", priority="low").value
    second = repairs.report_issue(_ctx(), device_id=2, issue_description="Issue 2", priority="medium").value

    assert (first, second) == (1, 2)


def test_report_issue_accepts_unregistered_device() -> None:
    _, repairs = _ledger()

    result = repairs.report_issue(_ctx(), device_id=404, issue_description="ghost", priority="low")

    assert result.ok
    assert repairs.get_repair(result.value).value.device_id == 404


def test_get_repair_miss_is_null() -> None:
    _, repairs = _ledger()

    assert repairs.get_repair(999).as_payload() == {"value": None}


def test_update_status_error_precedence() -> None:
    devices, repairs = _ledger()
    _register(devices, _ctx())
    repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="high")
    orphan_id = repairs.report_issue(_ctx(), device_id=77, issue_description="?", priority="low").value

    assert repairs.update_repair_status(_ctx(), 999, "in-progress").error_code == 404
    # No owner record for device 77: not found wins over the caller check.
    assert repairs.update_repair_status(_ctx(REPORTER), orphan_id, "in-progress").error_code == 404
    assert repairs.update_repair_status(_ctx(REPORTER), 1, "in-progress").error_code == 403
    assert repairs.get_repair(1).value.status == "reported"

    assert repairs.update_repair_status(_ctx(), 1, "in-progress").as_payload() == {"value": True}
    assert repairs.get_repair(1).value.status == "in-progress"


def test_device_transfer_moves_repair_authority_to_new_owner() -> None:
    devices, repairs = _ledger()
    device_id = _register(devices, _ctx())
    repair_id = repairs.report_issue(
        _ctx(OWNER), device_id=device_id, issue_description="leak", priority="high"
    ).value

    devices.transfer_device(_ctx(), device_id, NEW_OWNER)

    assert repairs.update_repair_status(_ctx(OWNER), repair_id, "in-progress").error_code == 403
    assert repairs.update_repair_status(_ctx(REPORTER), repair_id, "in-progress").error_code == 403
    assert repairs.update_repair_status(_ctx(NEW_OWNER), repair_id, "in-progress").ok


def test_authority_comes_from_injected_lookup_only() -> None:
    store = LedgerStore.from_url("sqlite+pysqlite:///:memory:")
    owners = _FixedOwners({1: "ST-LOOKUP"})
    repairs = RepairTracking(store, owners)
    repair_id = repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="low").value

    assert repairs.update_repair_status(_ctx(OWNER), repair_id, "closed").error_code == 403
    assert repairs.update_repair_status(_ctx("ST-LOOKUP"), repair_id, "closed").ok

    owners.owners.clear()
    assert repairs.update_repair_status(_ctx("ST-LOOKUP"), repair_id, "reopened").error_code == 404


def test_action_is_recorded_at_current_clock_and_exact_key_lookup() -> None:
    _, repairs = _ledger()
    repair_id = repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="high").value

    result = repairs.add_repair_action(
        _ctx(), repair_id, action_description="replaced seal", parts_replaced="seal-kit", cost=50
    )

    assert result.as_payload() == {"value": True}
    action = repairs.get_repair_action(repair_id, CLOCK).value
    assert action.performed_by == OWNER
    assert action.action_description == "replaced seal"
    assert action.parts_replaced == "seal-kit"
    assert action.cost == 50
    assert repairs.get_repair_action(repair_id, CLOCK + 1).as_payload() == {"value": None}
    assert repairs.get_repair_action(999, CLOCK).value is None


def test_any_caller_may_log_an_action() -> None:
    devices, repairs = _ledger()
    _register(devices, _ctx())
    repair_id = repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="high").value

    result = repairs.add_repair_action(
        _ctx("ST-CONTRACTOR"), repair_id, action_description="inspected", parts_replaced="", cost=0
    )

    assert result.ok
    assert repairs.get_repair_action(repair_id, CLOCK).value.performed_by == "ST-CONTRACTOR"


def test_action_for_unknown_repair_is_not_found() -> None:
    _, repairs = _ledger()

    result = repairs.add_repair_action(_ctx(), 999, action_description="Action", parts_replaced="Parts", cost=100)

    assert result.as_payload() == {"error": 404}
    assert repairs.get_repair_action(999, CLOCK).value is None


def test_second_action_at_same_tick_overwrites_first() -> None:
    _, repairs = _ledger()
    repair_id = repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="high").value

    repairs.add_repair_action(_ctx(), repair_id, action_description="first", parts_replaced="a", cost=10)
    repairs.add_repair_action(_ctx(REPORTER), repair_id, action_description="second", parts_replaced="b", cost=20)
    repairs.add_repair_action(_ctx(clock=CLOCK + 1), repair_id, action_description="later", parts_replaced="c", cost=30)

    at_tick = repairs.get_repair_action(repair_id, CLOCK).value
    assert (at_tick.action_description, at_tick.performed_by, at_tick.cost) == ("second", REPORTER, 20)
    assert repairs.get_repair_action(repair_id, CLOCK + 1).value.action_description == "later"


def test_keys_beyond_integer_columns_are_misses_not_failures() -> None:
    _, repairs = _ledger()
    repair_id = repairs.report_issue(_ctx(), device_id=1, issue_description="leak", priority="high").value

    assert repairs.get_repair(2**63).as_payload() == {"value": None}
    assert repairs.get_repair_action(repair_id, 2**64).as_payload() == {"value": None}
    assert repairs.get_repair_action(2**63, CLOCK).value is None
    assert repairs.update_repair_status(_ctx(), 2**63, "closed").error_code == 404
    assert repairs.add_repair_action(
        _ctx(), 2**63, action_description="a", parts_replaced="p", cost=1
    ).error_code == 404
