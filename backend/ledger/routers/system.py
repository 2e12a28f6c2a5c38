"""System endpoints: health and logical clock control."""
from fastapi import APIRouter, Depends

from ..clock import LogicalClock
from ..dependencies import get_clock
from ..schemas import ClockAdvanceRequest, ClockResponse

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": "1.0.0"}


@router.get("/clock", response_model=ClockResponse)
def get_clock_value(clock: LogicalClock = Depends(get_clock)):
    """Current logical clock tick."""
    return {"clock": clock.current}


@router.post("/clock/advance", response_model=ClockResponse)
def advance_clock(data: ClockAdvanceRequest, clock: LogicalClock = Depends(get_clock)):
    """Move the logical clock forward."""
    return {"clock": clock.advance(data.steps)}
