"""Explicit per-call execution context."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallContext:
    """Who is invoking the operation and at which logical clock tick."""

    caller: str
    clock: int = 0
