"""Device registry facade: serialized writes, errors returned as values."""
from __future__ import annotations

import logging

from ..context import CallContext
from ..domain_errors import DomainError
from ..results import Result, capture
from ..schemas import DeviceResponse
from ..store import LedgerStore
from ..use_cases.device_registry import (
    get_device_owner_use_case,
    get_device_use_case,
    register_device_use_case,
    transfer_device_use_case,
    update_device_status_use_case,
)

logger = logging.getLogger(__name__)


class DeviceOwnershipView:
    """Narrow read-only view handed to other registries."""

    def __init__(self, store: LedgerStore):
        self._store = store

    def get_device_owner(self, device_id: int) -> str | None:
        with self._store.read() as db:
            return get_device_owner_use_case(db=db, device_id=device_id)


class DeviceRegistry:
    def __init__(self, store: LedgerStore):
        self._store = store
        self._ownership = DeviceOwnershipView(store)

    def ownership(self) -> DeviceOwnershipView:
        return self._ownership

    def register_device(
        self,
        ctx: CallContext,
        *,
        name: str,
        model: str,
        serial_number: str,
        manufacturer: str,
        purchase_date: int,
        warranty_expiry: int,
        department: str,
    ) -> Result[int]:
        with self._store.write() as db:
            device = register_device_use_case(
                db=db,
                ctx=ctx,
                name=name,
                model=model,
                serial_number=serial_number,
                manufacturer=manufacturer,
                purchase_date=purchase_date,
                warranty_expiry=warranty_expiry,
                department=department,
            )
            device_id = device.id
        logger.info("device.registered id=%s owner=%s", device_id, ctx.caller)
        return Result.success(device_id)

    def get_device(self, device_id: int) -> Result[DeviceResponse]:
        with self._store.read() as db:
            device = get_device_use_case(db=db, device_id=device_id)
            return Result.success(DeviceResponse.model_validate(device) if device else None)

    def get_device_owner(self, device_id: int) -> Result[str]:
        return Result.success(self._ownership.get_device_owner(device_id))

    def update_device_status(self, ctx: CallContext, device_id: int, new_status: str) -> Result[bool]:
        def _update() -> bool:
            with self._store.write() as db:
                update_device_status_use_case(db=db, ctx=ctx, device_id=device_id, new_status=new_status)
            return True

        result = capture(_update)
        self._log_outcome("device.status_updated", result, device_id=device_id, caller=ctx.caller)
        return result

    def transfer_device(self, ctx: CallContext, device_id: int, new_owner: str) -> Result[bool]:
        def _transfer() -> bool:
            with self._store.write() as db:
                transfer_device_use_case(db=db, ctx=ctx, device_id=device_id, new_owner=new_owner)
            return True

        result = capture(_transfer)
        self._log_outcome("device.transferred", result, device_id=device_id, caller=ctx.caller)
        return result

    @staticmethod
    def _log_outcome(event: str, result: Result, **fields: object) -> None:
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        if result.ok:
            logger.info("%s %s", event, rendered)
            return
        error: DomainError = result.error  # type: ignore[assignment]
        logger.info("%s denied code=%s status=%s %s", event, error.code, error.http_status, rendered)
