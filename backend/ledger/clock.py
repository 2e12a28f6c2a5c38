"""Monotonic logical clock used as the ambient timestamp source."""
from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class LogicalClock:
    """Externally driven tick counter; registries only read it."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("Logical clock cannot start below zero")
        self._value = start
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        with self._lock:
            return self._value

    def advance(self, steps: int = 1) -> int:
        if steps <= 0:
            raise ValueError("Logical clock can only move forward")
        with self._lock:
            self._value += steps
            value = self._value
        logger.debug("clock.advanced steps=%s value=%s", steps, value)
        return value
