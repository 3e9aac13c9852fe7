"""The envelope every NodeService operation returns to the CLI.

The bootstrap library itself raises typed exceptions; NodeService catches
them and reports them as a failed ServiceResult, so every command renders
success and failure through the same path.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from lndclient.errors import LndClientError

# Error attributes copied into ServiceError.detail when present.
_DETAIL_ATTRS = ("domain", "expected", "actual", "missing", "cancelled")


class ServiceError(BaseModel):
    """Why an operation failed: a stable code, a message, extra detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: LndClientError) -> ServiceError:
        """Describe *exc*; ``detail`` always holds its ``category``."""
        detail: dict[str, Any] = {"category": exc.category.value}
        for attr in _DETAIL_ATTRS:
            if hasattr(exc, attr):
                detail[attr] = getattr(exc, attr)
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one NodeService operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"status"``, ``"version"``, ``"wait_sync"``).
        data: Node summary on success.
        warnings: Non-fatal findings, e.g. clients disabled for lack of a
            macaroon.
        error: Set exactly when ``ok`` is False.
        meta: Timing information.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: LndClientError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
