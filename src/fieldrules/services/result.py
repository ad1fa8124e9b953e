"""Result contract between the validation service and the CLI output layer.

INVARIANT: Service methods return a :class:`ServiceResult`. A value that
fails its rules is an ``ok=False`` result carrying the failure map in
``error.detail["failures"]``; it is never raised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Error codes carried by failed results."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_RULE = "INVALID_RULE"
    RULE_FAILED = "RULE_FAILED"


class ServiceError(BaseModel):
    """Why an operation did not succeed."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``op`` names the operation (``validate``, ``list_rules``,
    ``list_catalog``, ``check_rule``) and selects the human renderer.
    ``data`` is filled for failed validations too, so JSON consumers see
    what was checked alongside the error.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any] | None = None,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @property
    def failures(self) -> dict[str, list[str]]:
        """Per-field failure messages, empty unless a validation failed."""
        if self.error is None:
            return {}
        found = self.error.detail.get("failures")
        return found if isinstance(found, dict) else {}
