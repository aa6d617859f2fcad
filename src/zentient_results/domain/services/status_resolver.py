# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
Status Resolver (Domain Service).

Purpose:
    Map an outcome to the HTTP status code it should be rendered with.

Rules:
    * Success: the outcome's declared status (200 unless set).
    * Failure: the declared status when set, otherwise the status mapped from
      the **first** error's category. Later errors never influence the result,
      so a failure mixing categories collapses onto its first cause.
    * Failure with no errors and no declared status: 500.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Final

from zentient_results.domain.entities.outcome import Failure, Success
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.exceptions.base import InvalidOutcomeError

__all__ = ["DEFAULT_CATEGORY_STATUS", "StatusResolver", "category_for_status"]

DEFAULT_CATEGORY_STATUS: Final[Mapping[ErrorCategory, int]] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: HTTPStatus.BAD_REQUEST,
        ErrorCategory.NOT_FOUND: HTTPStatus.NOT_FOUND,
        ErrorCategory.CONFLICT: HTTPStatus.CONFLICT,
        ErrorCategory.AUTHENTICATION: HTTPStatus.UNAUTHORIZED,
        ErrorCategory.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
        ErrorCategory.SECURITY: HTTPStatus.FORBIDDEN,
        ErrorCategory.FORBIDDEN: HTTPStatus.FORBIDDEN,
        ErrorCategory.NETWORK: HTTPStatus.SERVICE_UNAVAILABLE,
        ErrorCategory.SERVICE_UNAVAILABLE: HTTPStatus.SERVICE_UNAVAILABLE,
        ErrorCategory.TIMEOUT: HTTPStatus.REQUEST_TIMEOUT,
        ErrorCategory.REQUEST: HTTPStatus.BAD_REQUEST,
        ErrorCategory.INTERNAL_SERVER_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    }
)

# Reverse lookup used at the boundary when only a status is known
# (e.g. a framework HTTPException). First category listed wins.
_STATUS_CATEGORY: Final[Mapping[int, ErrorCategory]] = MappingProxyType(
    {
        400: ErrorCategory.REQUEST,
        401: ErrorCategory.UNAUTHORIZED,
        403: ErrorCategory.FORBIDDEN,
        404: ErrorCategory.NOT_FOUND,
        408: ErrorCategory.TIMEOUT,
        409: ErrorCategory.CONFLICT,
        422: ErrorCategory.VALIDATION,
        500: ErrorCategory.INTERNAL_SERVER_ERROR,
        503: ErrorCategory.SERVICE_UNAVAILABLE,
    }
)


def category_for_status(status_code: int) -> ErrorCategory:
    """Return the category that best describes ``status_code``.

    Unknown 4xx codes map to ``REQUEST``, everything else unknown to ``OTHER``.
    """
    category = _STATUS_CATEGORY.get(int(status_code))
    if category is not None:
        return category
    if 400 <= status_code < 500:
        return ErrorCategory.REQUEST
    return ErrorCategory.OTHER


class StatusResolver:
    """Resolve the HTTP status of an outcome.

    Args:
        table: Category to status mapping. Categories missing from the table
            (``NONE``, ``OTHER`` and anything unmapped) resolve to 500. The
            mapping is copied and frozen at construction.
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[ErrorCategory, int] | None = None) -> None:
        source = DEFAULT_CATEGORY_STATUS if table is None else table
        self._table: Mapping[ErrorCategory, int] = MappingProxyType(
            {category: int(status) for category, status in source.items()}
        )

    @property
    def table(self) -> Mapping[ErrorCategory, int]:
        return self._table

    def resolve(self, outcome: Any) -> int:
        """Return the status code ``outcome`` should be rendered with.

        Raises:
            InvalidOutcomeError: If ``outcome`` is not an outcome variant.
        """
        if isinstance(outcome, Success):
            return outcome.status_code
        if isinstance(outcome, Failure):
            if outcome.status_code is not None:
                return outcome.status_code
            return self.infer(outcome)
        raise InvalidOutcomeError(
            f"cannot resolve a status for {type(outcome).__name__}",
            details={"type": type(outcome).__name__},
        )

    def infer(self, outcome: Failure) -> int:
        """Infer a status from the first error's category, ignoring any explicit status."""
        if not outcome.errors:
            return int(HTTPStatus.INTERNAL_SERVER_ERROR)
        first = outcome.errors[0]
        return self._table.get(first.category, int(HTTPStatus.INTERNAL_SERVER_ERROR))
