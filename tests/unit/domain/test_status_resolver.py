# tests/unit/domain/test_status_resolver.py
"""Unit tests for status inference from outcomes."""

from __future__ import annotations

import pytest

from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import Failure, created, failure, success
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.exceptions.base import InvalidOutcomeError
from zentient_results.domain.services.status_resolver import (
    DEFAULT_CATEGORY_STATUS,
    StatusResolver,
    category_for_status,
)


def _fail(category: ErrorCategory) -> Failure:
    return failure(ErrorInfo(category, None, "x"))


@pytest.mark.parametrize(
    ("category", "status"),
    [
        (ErrorCategory.VALIDATION, 400),
        (ErrorCategory.NOT_FOUND, 404),
        (ErrorCategory.CONFLICT, 409),
        (ErrorCategory.AUTHENTICATION, 401),
        (ErrorCategory.UNAUTHORIZED, 401),
        (ErrorCategory.SECURITY, 403),
        (ErrorCategory.FORBIDDEN, 403),
        (ErrorCategory.NETWORK, 503),
        (ErrorCategory.SERVICE_UNAVAILABLE, 503),
        (ErrorCategory.TIMEOUT, 408),
        (ErrorCategory.REQUEST, 400),
        (ErrorCategory.INTERNAL_SERVER_ERROR, 500),
        (ErrorCategory.NONE, 500),
        (ErrorCategory.OTHER, 500),
    ],
)
def test_category_table(category: ErrorCategory, status: int) -> None:
    assert StatusResolver().resolve(_fail(category)) == status


def test_failure_status_is_always_an_error_status() -> None:
    resolver = StatusResolver()
    for category in ErrorCategory:
        assert 400 <= resolver.resolve(_fail(category)) <= 599


def test_empty_errors_resolve_to_500() -> None:
    """Scenario E: no errors and no explicit status."""
    assert StatusResolver().resolve(failure()) == 500


def test_only_first_error_counts() -> None:
    fail = failure(
        ErrorInfo(ErrorCategory.CONFLICT, None, "first"),
        ErrorInfo(ErrorCategory.NOT_FOUND, None, "second"),
    )
    assert StatusResolver().resolve(fail) == 409


def test_explicit_status_wins_over_category() -> None:
    fail = failure(ErrorInfo(ErrorCategory.NOT_FOUND, None, "x"), status_code=410)
    resolver = StatusResolver()

    assert resolver.resolve(fail) == 410
    assert resolver.infer(fail) == 404


def test_success_uses_declared_status() -> None:
    resolver = StatusResolver()
    assert resolver.resolve(success("x")) == 200
    assert resolver.resolve(created("x")) == 201


def test_custom_table_is_copied_and_read_only() -> None:
    table = {ErrorCategory.NOT_FOUND: 410}
    resolver = StatusResolver(table)
    table[ErrorCategory.NOT_FOUND] = 404

    assert resolver.resolve(_fail(ErrorCategory.NOT_FOUND)) == 410
    assert resolver.resolve(_fail(ErrorCategory.CONFLICT)) == 500
    with pytest.raises(TypeError):
        resolver.table[ErrorCategory.CONFLICT] = 409  # type: ignore[index]


def test_default_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_CATEGORY_STATUS[ErrorCategory.OTHER] = 418  # type: ignore[index]


def test_non_outcome_is_rejected() -> None:
    with pytest.raises(InvalidOutcomeError):
        StatusResolver().resolve({"status": 200})


@pytest.mark.parametrize(
    ("status", "category"),
    [
        (404, ErrorCategory.NOT_FOUND),
        (422, ErrorCategory.VALIDATION),
        (418, ErrorCategory.REQUEST),
        (502, ErrorCategory.OTHER),
        (503, ErrorCategory.SERVICE_UNAVAILABLE),
    ],
)
def test_category_for_status(status: int, category: ErrorCategory) -> None:
    assert category_for_status(status) is category
