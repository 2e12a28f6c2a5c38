"""Repair tracking facade. Knows devices only through an ownership lookup."""
from __future__ import annotations

import logging

from ..context import CallContext
from ..results import Result, capture
from ..schemas import RepairActionResponse, RepairResponse
from ..store import LedgerStore
from ..use_cases.repair_tracking import (
    add_repair_action_use_case,
    get_repair_action_use_case,
    get_repair_use_case,
    report_issue_use_case,
    update_repair_status_use_case,
)
from .ownership import OwnershipLookup

logger = logging.getLogger(__name__)


class RepairTracking:
    def __init__(self, store: LedgerStore, ownership: OwnershipLookup):
        self._store = store
        self._ownership = ownership

    def report_issue(
        self,
        ctx: CallContext,
        *,
        device_id: int,
        issue_description: str,
        priority: str,
    ) -> Result[int]:
        with self._store.write() as db:
            repair = report_issue_use_case(
                db=db,
                ctx=ctx,
                device_id=device_id,
                issue_description=issue_description,
                priority=priority,
            )
            repair_id = repair.id
        logger.info(
            "repair.reported id=%s device_id=%s reported_by=%s clock=%s",
            repair_id,
            device_id,
            ctx.caller,
            ctx.clock,
        )
        return Result.success(repair_id)

    def get_repair(self, repair_id: int) -> Result[RepairResponse]:
        with self._store.read() as db:
            repair = get_repair_use_case(db=db, repair_id=repair_id)
            return Result.success(RepairResponse.model_validate(repair) if repair else None)

    def update_repair_status(self, ctx: CallContext, repair_id: int, new_status: str) -> Result[bool]:
        def _update() -> bool:
            # The ownership lookup runs inside the write so it sees the committed owner.
            with self._store.write() as db:
                update_repair_status_use_case(
                    db=db,
                    ctx=ctx,
                    repair_id=repair_id,
                    new_status=new_status,
                    get_device_owner=self._ownership.get_device_owner,
                )
            return True

        result = capture(_update)
        if result.ok:
            logger.info("repair.status_updated id=%s status=%s caller=%s", repair_id, new_status, ctx.caller)
        else:
            logger.info(
                "repair.status_update denied code=%s status=%s id=%s caller=%s",
                result.error.code,
                result.error_code,
                repair_id,
                ctx.caller,
            )
        return result

    def add_repair_action(
        self,
        ctx: CallContext,
        repair_id: int,
        *,
        action_description: str,
        parts_replaced: str,
        cost: int,
    ) -> Result[bool]:
        def _add() -> bool:
            with self._store.write() as db:
                add_repair_action_use_case(
                    db=db,
                    ctx=ctx,
                    repair_id=repair_id,
                    action_description=action_description,
                    parts_replaced=parts_replaced,
                    cost=cost,
                )
            return True

        result = capture(_add)
        if result.ok:
            logger.info("repair.action_added id=%s clock=%s caller=%s", repair_id, ctx.clock, ctx.caller)
        else:
            logger.info("repair.action_add denied code=%s id=%s", result.error.code, repair_id)
        return result

    def get_repair_action(self, repair_id: int, timestamp: int) -> Result[RepairActionResponse]:
        with self._store.read() as db:
            action = get_repair_action_use_case(db=db, repair_id=repair_id, timestamp=timestamp)
            return Result.success(RepairActionResponse.model_validate(action) if action else None)
