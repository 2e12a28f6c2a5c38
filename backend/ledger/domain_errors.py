"""Domain-level exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

HTTP_NOT_FOUND = 404
HTTP_FORBIDDEN = 403


@dataclass(eq=False)
class DomainError(Exception):
    """Use-case level error with stable code and HTTP mapping."""

    code: str
    http_status: int
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


def not_found(code: str, message: str, **details: Any) -> DomainError:
    """Referenced entity (or its ownership record) does not exist."""
    return DomainError(
        code=code,
        http_status=HTTP_NOT_FOUND,
        message=message,
        details=details or None,
    )


def forbidden(code: str, message: str, **details: Any) -> DomainError:
    """Caller failed an owner-equality check."""
    return DomainError(
        code=code,
        http_status=HTTP_FORBIDDEN,
        message=message,
        details=details or None,
    )
