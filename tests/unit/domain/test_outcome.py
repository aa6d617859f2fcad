# tests/unit/domain/test_outcome.py
"""Unit tests for Success/Failure outcomes and their constructors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import (
    Failure,
    OutcomeVisitor,
    Success,
    TypedOutcome,
    conflict,
    created,
    failure,
    forbidden,
    is_outcome,
    no_content,
    not_found,
    success,
    unauthorized,
    validation,
)
from zentient_results.domain.enums.error_category import ErrorCategory


@dataclass
class _Base:
    name: str


@dataclass
class _Derived(_Base):
    extra: int = 0


class _Recorder:
    """Visitor returning which branch was taken."""

    def visit_success(self, outcome: Success[Any]) -> str:
        return f"success:{outcome.status_code}"

    def visit_failure(self, outcome: Failure) -> str:
        return f"failure:{len(outcome.errors)}"


def test_success_defaults() -> None:
    ok = success({"a": 1})

    assert ok.is_success and not ok.is_failure
    assert ok.status_code == 200
    assert ok.error is None
    assert ok.has_payload()


def test_success_without_value_has_no_payload() -> None:
    assert success().has_payload() is False
    assert success(None).payload_type() is None


def test_falsy_values_still_count_as_payload() -> None:
    """Only ``None`` means "no payload"; empty containers and zero are payloads."""
    assert success([]).has_payload()
    assert success(0).has_payload()


def test_payload_type_prefers_declared_type() -> None:
    value = _Derived(name="w")

    assert success(value).payload_type() is _Derived
    assert success(value, declared_type=_Base).payload_type() is _Base


@pytest.mark.parametrize("status", [99, 600, -1])
def test_status_code_out_of_range_is_rejected(status: int) -> None:
    with pytest.raises(ValueError):
        Success(value=None, status_code=status)
    with pytest.raises(ValueError):
        Failure(errors=(), status_code=status)


def test_bool_status_code_is_rejected() -> None:
    with pytest.raises(ValueError):
        Success(value=1, status_code=True)  # type: ignore[arg-type]


def test_failure_normalizes_and_checks_errors() -> None:
    err = ErrorInfo(ErrorCategory.NOT_FOUND, None, "gone")
    fail = Failure(errors=[err])  # type: ignore[arg-type]

    assert fail.errors == (err,)
    assert fail.is_failure and not fail.is_success
    assert fail.error == "gone"
    assert fail.has_payload() is False
    assert fail.payload_type() is None

    with pytest.raises(TypeError):
        Failure(errors=("boom",))  # type: ignore[arg-type]


def test_failure_without_errors_has_no_primary_error() -> None:
    assert failure().error is None


def test_accept_routes_to_matching_visit_method() -> None:
    visitor: OutcomeVisitor[str] = _Recorder()

    assert success(1).accept(visitor) == "success:200"
    assert failure(ErrorInfo(ErrorCategory.OTHER, None, "x")).accept(visitor) == "failure:1"


def test_outcomes_satisfy_typed_outcome_protocol() -> None:
    assert isinstance(success(1), TypedOutcome)
    assert isinstance(failure(), TypedOutcome)


def test_is_outcome() -> None:
    assert is_outcome(success())
    assert is_outcome(failure())
    assert not is_outcome({"value": 1})
    assert not is_outcome(None)


def test_success_constructors_set_status() -> None:
    assert created({"id": 1}).status_code == 201
    assert no_content().status_code == 204
    assert no_content().has_payload() is False
    assert success("x", status_code=202).status_code == 202


@pytest.mark.parametrize(
    ("factory", "status", "title"),
    [
        (not_found, 404, "Not Found"),
        (conflict, 409, "Conflict"),
        (unauthorized, 401, "Unauthorized"),
        (forbidden, 403, "Forbidden"),
    ],
)
def test_failure_constructors_set_status_and_title(factory: Any, status: int, title: str) -> None:
    err = ErrorInfo(ErrorCategory.OTHER, None, "x")
    fail = factory(err)

    assert fail.status_code == status
    assert fail.description == title
    assert fail.errors == (err,)


def test_validation_constructor_is_422() -> None:
    errs = [ErrorInfo.validation("bad", field_name="name")]
    fail = validation(errs)

    assert fail.status_code == 422
    assert fail.errors == tuple(errs)
