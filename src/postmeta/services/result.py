"""ServiceResult and ServiceError — what every editing operation returns.

INVARIANT: User-recoverable failures never escape ArticleService as
exceptions. The CLI (or any other front end) renders ``result.error`` and
the session, with its unchanged article, stays usable.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation was refused: a stable ``code`` plus the offending values."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one session operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"save_article"``, ``"add_tag"``, ...).
        data: The article fields or file location the operation produced.
        warnings: Skipped inputs that did not fail the operation.
        error: Set when ``ok`` is False.
        meta: File-system facts about a save or load (``output_dir``,
            ``bytes``, ``duration_ms``); shown under ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any] | None = None,
        *,
        warnings: list[str] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=warnings or [], meta=meta)

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, detail: dict[str, Any] | None = None
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    def with_warnings(self, warnings: list[str]) -> ServiceResult:
        """Copy with *warnings* placed ahead of this result's own."""
        if not warnings:
            return self
        return self.model_copy(update={"warnings": [*warnings, *self.warnings]})
