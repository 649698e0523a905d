"""
Typed errors for the availability API.

Every failure reaches callers as one ``DomainError`` subclass. ``code`` is the
RPC-style error code used in the response envelope and ``http_status`` is the
status the API layer answers with.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    validation = "VALIDATION"
    upstream = "UPSTREAM"
    system = "SYSTEM"


# Envelope codes
CODE_BAD_REQUEST = "BAD_REQUEST"
CODE_CONFLICT = "CONFLICT"
CODE_BAD_GATEWAY = "BAD_GATEWAY"
CODE_INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class DomainError(Exception):
    code: str = CODE_INTERNAL_SERVER_ERROR
    category: ErrorCategory = ErrorCategory.system
    http_status: int = 500

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def to_dict(self) -> dict[str, str]:
        """Error envelope returned to API callers."""
        return {"code": self.code, "message": self.message}


class ValidationError(DomainError):
    """Malformed availability query or domain entity."""

    code = CODE_BAD_REQUEST
    category = ErrorCategory.validation
    http_status = 400


class ConflictError(DomainError):
    """The requested change clashes with the current state of an entity."""

    code = CODE_CONFLICT
    category = ErrorCategory.validation
    http_status = 409


class ProviderError(DomainError):
    """An upstream availability system was unreachable or answered with an invalid payload."""

    code = CODE_BAD_GATEWAY
    category = ErrorCategory.upstream
    http_status = 502

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        ctx = {"provider": provider}
        if status_code is not None:
            ctx["status_code"] = status_code
        ctx.update(context or {})
        super().__init__(message, context=ctx)
        self.provider = provider
        self.status_code = status_code


class AggregationError(DomainError):
    """Availability could not be aggregated because a provider failed."""

    code = CODE_INTERNAL_SERVER_ERROR
    category = ErrorCategory.system
    http_status = 500

    def __init__(
        self,
        provider: str,
        cause: BaseException | None = None,
        *,
        message: str = "Failed to check availability",
        context: dict[str, Any] | None = None,
    ):
        ctx: dict[str, Any] = {"provider": provider}
        if cause is not None:
            ctx["cause"] = str(cause)
        ctx.update(context or {})
        super().__init__(message, context=ctx)
        self.provider = provider
        self.cause = cause
