"""Caller identity and logical clock resolution for HTTP requests.

Identity is asserted by an upstream gateway through the ``X-Caller`` header;
this service only compares identities, it does not authenticate them.
"""
from typing import Optional
import logging

from fastapi import Header, HTTPException, Request, status

from .clock import LogicalClock
from .context import CallContext
from .models import INTEGER_COLUMN_MAX

logger = logging.getLogger(__name__)


def get_current_caller(x_caller: Optional[str] = Header(default=None)) -> str:
    """Get the identity invoking this request."""
    caller = (x_caller or "").strip()
    if not caller:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Caller identity header is required",
        )
    return caller


def get_call_context(
    request: Request,
    x_caller: Optional[str] = Header(default=None),
    x_logical_clock: Optional[int] = Header(default=None, le=INTEGER_COLUMN_MAX),
) -> CallContext:
    """Build the per-call context; clock falls back to the application clock."""
    caller = get_current_caller(x_caller)
    if x_logical_clock is None:
        clock: LogicalClock = request.app.state.clock
        tick = clock.current
    else:
        if x_logical_clock < 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Logical clock must be non-negative",
            )
        tick = x_logical_clock
    return CallContext(caller=caller, clock=tick)
