"""ServiceResult and ServiceError — the non-raising assignment contract.

INVARIANT: Service methods return ServiceResult for every expected failure
(invalid input, forbidden attributes, unknown attribute). Errors raised
inside a legitimate setter still propagate.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Stable codes for the three assignment failure kinds."""

    INVALID_INPUT = "INVALID_INPUT"
    FORBIDDEN_ATTRIBUTES = "FORBIDDEN_ATTRIBUTES"
    UNKNOWN_ATTRIBUTE = "UNKNOWN_ATTRIBUTE"
    UNPERMITTED_PARAMETERS = "UNPERMITTED_PARAMETERS"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"assign_attributes"``).
        data: Operation-specific payload; on failure it still reports the
            keys applied before the error.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail or {})
        return cls(ok=False, op=op, data=data or {}, error=error)
