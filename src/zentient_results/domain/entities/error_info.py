# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
ErrorInfo Entity

Purpose:
    Immutable description of one failure cause, optionally nesting further
    causes. Produced by application logic, consumed by the problem document
    builder (no I/O).

Layer: domain/entities
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from zentient_results.domain.enums.error_category import ErrorCategory

from .base import BaseEntity


@dataclass(frozen=True, slots=True)
class ErrorInfo(BaseEntity):
    """Structured failure cause.

    Args:
        category: Classification used for status and problem-type inference.
        code: Optional stable short code (e.g. ``"PRODUCT_NOT_FOUND"``).
        message: Human-readable description.
        data: Optional opaque value. For validation errors a string here names
            the offending field.
        inner_errors: Ordered nested causes. Any iterable is normalized to a
            tuple so the value stays hashable and immutable.

    Raises:
        TypeError: If ``category`` is not an :class:`ErrorCategory` or a nested
            cause is not an :class:`ErrorInfo`.
    """

    category: ErrorCategory
    code: str | None
    message: str
    data: Any = None
    inner_errors: tuple[ErrorInfo, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.category, ErrorCategory):
            raise TypeError(f"category must be an ErrorCategory, got {self.category!r}")
        if not isinstance(self.inner_errors, tuple):
            object.__setattr__(self, "inner_errors", tuple(self.inner_errors))
        for inner in self.inner_errors:
            if not isinstance(inner, ErrorInfo):
                raise TypeError(f"inner_errors must contain ErrorInfo, got {inner!r}")

    @classmethod
    def validation(cls, message: str, *, field_name: str | None = None, code: str | None = None) -> ErrorInfo:
        """Build a validation error keyed by ``field_name`` when given."""
        return cls(ErrorCategory.VALIDATION, code, message, data=field_name)

    @classmethod
    def not_found(cls, message: str, *, code: str | None = None) -> ErrorInfo:
        return cls(ErrorCategory.NOT_FOUND, code, message)

    @classmethod
    def conflict(cls, message: str, *, code: str | None = None) -> ErrorInfo:
        return cls(ErrorCategory.CONFLICT, code, message)

    def with_inner(self, inner: Iterable[ErrorInfo]) -> ErrorInfo:
        """Return a copy carrying ``inner`` appended to the nested causes."""
        return ErrorInfo(
            self.category,
            self.code,
            self.message,
            data=self.data,
            inner_errors=(*self.inner_errors, *inner),
        )
