"""ServiceResult, ServiceError, StatusMessage — the service contract.

INVARIANT: All service-layer operations return ServiceResult. Expected
failures (bad name, missing template, collision, I/O errors during a clone)
are errors inside the result, never exceptions escaping the service.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from scaffoldctl.services._helpers import now_iso


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_project"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues; also carried on failures (e.g. a
            cleanup that could not finish).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


class StatusMessage(BaseModel):
    """A timestamped progress notice shown while an operation runs."""

    model_config = {"frozen": True}

    kind: Literal["info", "error", "success"]
    text: str
    timestamp: str = Field(default_factory=now_iso)


Notifier = Callable[[StatusMessage], None]
