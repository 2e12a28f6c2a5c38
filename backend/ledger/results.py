"""Value-or-error results returned by the registry facades.

Use cases raise :class:`DomainError`; the facades capture it so callers get
``{"value": ...}`` / ``{"error": code}`` without exception handling.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from .domain_errors import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: DomainError | None = None

    @classmethod
    def success(cls, value: T | None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> int | None:
        """HTTP-style code of the failure (404 / 403), ``None`` on success."""
        return self.error.http_status if self.error is not None else None

    def unwrap(self) -> T | None:
        """Return the value or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value

    def as_payload(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error.http_status}
        value: Any = self.value
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return {"value": value}


def capture(operation: Callable[[], T]) -> Result[T]:
    """Run ``operation`` and turn a raised DomainError into a failed Result."""
    try:
        return Result.success(operation())
    except DomainError as exc:
        return Result.failure(exc)
