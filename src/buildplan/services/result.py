"""Return types shared by every service operation.

Services never raise for expected failures (unknown task, unsafe delete,
evaluation cycle); they return a ServiceResult with ``ok=False`` and a
ServiceError whose ``code`` the CLI and tests can match on.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code`` plus a readable message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, used to pick a renderer (e.g. ``"clean"``).
        data: Operation payload; list-shaped results use ``items``/``count``.
        warnings: Non-fatal notes, printed to stderr.
        error: Set when ``ok`` is False.
        meta: Extras such as ``timing`` under ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """A failed result carrying a single :class:`ServiceError`."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
