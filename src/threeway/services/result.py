"""The value every service method hands back to its caller.

Services never raise for expected failures (bad operands, invalid
options); they return a ``ServiceResult`` with ``ok=False`` and a
:class:`ServiceError` carrying a machine-readable code.  The CLI renders
results; library callers can inspect them directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a service call failed: a stable ``code``, a human ``message`` and context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: False when the call failed; ``error`` then says why.
        op: Operation name, ``"compare"``, ``"bench"`` or ``"laws"``.
        data: The answer, shaped per operation.
        warnings: Things the caller should know about that did not stop the call.
        error: Set exactly when ``ok`` is False.
        meta: Extras shown under ``--verbose``, such as the telemetry span tree.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def fail(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """A failed result for *op*; keyword arguments become the error detail."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
