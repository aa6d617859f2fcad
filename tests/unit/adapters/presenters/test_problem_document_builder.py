# tests/unit/adapters/presenters/test_problem_document_builder.py
"""Unit tests for ProblemDocumentBuilder and its pure helpers."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

import pytest

from zentient_results.adapters.presenters.problem_document_builder import (
    DefaultProblemDocumentFactory,
    ProblemDocumentBuilder,
    group_validation_errors,
    normalize_base_uri,
    problem_type_for,
    serialize_error,
)
from zentient_results.adapters.schemas.http.problem_document import (
    ProblemContext,
    ProblemDocument,
    ValidationProblemDocument,
)
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.config.settings import FALLBACK_PROBLEM_TYPE_BASE_URI
from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import failure, success, validation
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.exceptions.base import InvalidOutcomeError, MissingCollaboratorError
from zentient_results.infrastructure.logging.logger import (
    reset_request_context,
    set_request_context,
)

BASE = "https://example.com/errors/"


class _NoneFactory(DefaultProblemDocumentFactory):
    """Factory that forgets to produce a document."""

    def create_problem_document(self, **kwargs: Any) -> None:  # type: ignore[override]
        return None


class _InstanceFactory(DefaultProblemDocumentFactory):
    """Factory pre-populating ``instance``."""

    def create_problem_document(self, **kwargs: Any) -> ProblemDocument:
        kwargs["instance"] = "urn:preset"
        return super().create_problem_document(**kwargs)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://example.com/errors", "https://example.com/errors/"),
        ("https://example.com/errors/", "https://example.com/errors/"),
        ("", FALLBACK_PROBLEM_TYPE_BASE_URI),
        ("   ", FALLBACK_PROBLEM_TYPE_BASE_URI),
        (None, FALLBACK_PROBLEM_TYPE_BASE_URI),
    ],
)
def test_normalize_base_uri(raw: str | None, expected: str) -> None:
    assert normalize_base_uri(raw) == expected


def test_problem_type_precedence() -> None:
    """validation > code > category > status."""
    coded = ErrorInfo(ErrorCategory.NOT_FOUND, "PRODUCT_NOT_FOUND", "x")
    uncoded = ErrorInfo(ErrorCategory.CONFLICT, None, "x")
    blank_code = ErrorInfo(ErrorCategory.TIMEOUT, "  ", "x")
    none_cat = ErrorInfo(ErrorCategory.NONE, None, "x")
    invalid = ErrorInfo(ErrorCategory.VALIDATION, None, "x")

    assert problem_type_for([coded, invalid], 404, BASE) == f"{BASE}validation"
    assert problem_type_for([coded], 404, BASE) == f"{BASE}productnotfound"
    assert problem_type_for([uncoded], 409, BASE) == f"{BASE}conflict"
    assert problem_type_for([blank_code], 408, BASE) == f"{BASE}timeout"
    assert problem_type_for([none_cat], 500, BASE) == f"{BASE}500"
    assert problem_type_for([], 503, BASE) == f"{BASE}503"


def test_problem_type_code_keeps_separators_other_than_underscore() -> None:
    def first(code: str) -> list[ErrorInfo]:
        return [ErrorInfo(ErrorCategory.CONFLICT, code, "m")]

    assert problem_type_for(first("order.duplicate-sku"), 409, BASE) == f"{BASE}order.duplicate-sku"
    assert problem_type_for(first(" Order_Duplicate "), 409, BASE) == f"{BASE}orderduplicate"
    assert problem_type_for(first("___"), 409, BASE) == f"{BASE}conflict"


def test_group_validation_errors_keys_and_order() -> None:
    errors = [
        ErrorInfo(ErrorCategory.VALIDATION, None, "too short", data="name"),
        ErrorInfo(ErrorCategory.VALIDATION, "EMAIL", "bad email"),
        ErrorInfo(ErrorCategory.VALIDATION, None, "general problem"),
        ErrorInfo(ErrorCategory.CONFLICT, "DUP", "ignored"),
        ErrorInfo(ErrorCategory.VALIDATION, None, "no digits", data="name"),
        ErrorInfo(ErrorCategory.VALIDATION, "N", "non-string data falls back to code", data=42),
    ]

    grouped = group_validation_errors(errors)

    assert list(grouped) == ["name", "EMAIL", "General", "N"]
    assert grouped["name"] == ["too short", "no digits"]
    assert grouped["General"] == ["general problem"]


def test_serialize_error_omits_empty_members() -> None:
    err = ErrorInfo(ErrorCategory.NOT_FOUND, None, "gone")
    assert serialize_error(err) == {"category": "notfound", "code": None, "message": "gone"}


class _SlottedData:
    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"_SlottedData({self.value})"


def test_serialize_error_stringifies_unencodable_data() -> None:
    err = ErrorInfo(ErrorCategory.CONFLICT, "C", "taken", data=_SlottedData(3))
    assert serialize_error(err)["data"] == "_SlottedData(3)"


def test_serialize_error_nested_tree_depth() -> None:
    """A nested chain of depth N is reproduced level by level."""
    depth = 5
    node = ErrorInfo(ErrorCategory.VALIDATION, "L4", "level 4", data={"n": 4})
    for level in reversed(range(depth - 1)):
        node = ErrorInfo(ErrorCategory.VALIDATION, f"L{level}", f"level {level}", inner_errors=(node,))

    current: Any = serialize_error(node)
    for level in range(depth):
        assert current["code"] == f"L{level}"
        assert current["message"] == f"level {level}"
        if level < depth - 1:
            assert "data" not in current
            (current,) = current["innerErrors"]
    assert current["data"] == {"n": 4}
    assert "innerErrors" not in current


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def test_scenario_not_found_with_code(builder: ProblemDocumentBuilder) -> None:
    fail = failure(ErrorInfo(ErrorCategory.NOT_FOUND, "PRODUCT_NOT_FOUND", "Product 99 not found."))

    doc = builder.build(fail, request_path="/products/99", trace_id="t-1")

    assert doc.status == 404
    assert doc.type.endswith("/productnotfound")
    assert doc.detail == "Product 99 not found."
    assert doc.title == "HTTP 404 Error"
    assert doc.instance == "/products/99"
    assert doc.extensions["traceId"] == "t-1"
    assert doc.extensions["zentientErrors"] == [
        {"category": "notfound", "code": "PRODUCT_NOT_FOUND", "message": "Product 99 not found."}
    ]
    assert not isinstance(doc, ValidationProblemDocument)


def test_scenario_validation_at_400(builder: ProblemDocumentBuilder) -> None:
    fail = failure(ErrorInfo(ErrorCategory.VALIDATION, None, "Product ID must be positive.", data="id"))

    doc = builder.build(fail)

    assert isinstance(doc, ValidationProblemDocument)
    assert doc.status == 400
    assert doc.type.endswith("/validation")
    assert doc.errors == {"id": ["Product ID must be positive."]}


def test_scenario_empty_failure(builder: ProblemDocumentBuilder) -> None:
    doc = builder.build(failure())

    assert doc.status == 500
    assert doc.title == "HTTP 500 Error"
    assert doc.detail == "An error occurred with status code 500."
    assert doc.type == f"{BASE}500"
    assert "zentientErrors" not in doc.extensions
    assert doc.extensions["traceId"]


def test_status_422_without_validation_errors_is_validation_shaped(
    builder: ProblemDocumentBuilder,
) -> None:
    fail = failure(ErrorInfo(ErrorCategory.REQUEST, "BAD", "unprocessable"), status_code=422)

    doc = builder.build(fail)

    assert isinstance(doc, ValidationProblemDocument)
    assert doc.errors == {}
    assert doc.type == f"{BASE}bad"


def test_description_becomes_title(builder: ProblemDocumentBuilder) -> None:
    fail = validation([ErrorInfo.validation("required", field_name="name")])

    doc = builder.build(fail)

    assert doc.title == HTTPStatus.UNPROCESSABLE_ENTITY.phrase
    assert doc.status == 422


def test_blank_base_uri_uses_fallback() -> None:
    builder = ProblemDocumentBuilder.default(ProblemDetailsOptions(problem_type_base_uri=""))
    doc = builder.build(failure(ErrorInfo(ErrorCategory.CONFLICT, None, "dup")))

    assert doc.type == f"{FALLBACK_PROBLEM_TYPE_BASE_URI}conflict"


def test_factory_instance_is_kept() -> None:
    builder = ProblemDocumentBuilder(_InstanceFactory(), ProblemDetailsOptions())
    doc = builder.build(failure(ErrorInfo(ErrorCategory.CONFLICT, None, "dup")), request_path="/x")

    assert doc.instance == "urn:preset"


def test_build_is_deterministic(builder: ProblemDocumentBuilder) -> None:
    fail = failure(ErrorInfo(ErrorCategory.CONFLICT, "DUP", "dup"))

    first = builder.build(fail, request_path="/a", trace_id="t")
    second = builder.build(fail, request_path="/a", trace_id="t")

    assert first.model_dump_http() == second.model_dump_http()


def test_customizers_run_in_order_with_context() -> None:
    seen: list[ProblemContext] = []

    def tag(doc: ProblemDocument, ctx: ProblemContext) -> ProblemDocument:
        seen.append(ctx)
        return doc.with_extension("tags", ["first"])

    def tag_again(doc: ProblemDocument, ctx: ProblemContext) -> ProblemDocument:
        return doc.with_extension("tags", [*doc.extensions["tags"], "second"])

    options = ProblemDetailsOptions(problem_type_base_uri=BASE).with_customizer(tag).with_customizer(tag_again)
    fail = failure(ErrorInfo(ErrorCategory.CONFLICT, None, "dup"))

    doc = ProblemDocumentBuilder.default(options).build(fail, request_path="/p", trace_id="t")

    assert doc.extensions["tags"] == ["first", "second"]
    assert seen[0].outcome is fail
    assert (seen[0].status, seen[0].request_path, seen[0].trace_id) == (409, "/p", "t")


def test_customizer_trace_id_is_not_overwritten() -> None:
    def own_trace(doc: ProblemDocument, ctx: ProblemContext) -> ProblemDocument:
        return doc.with_extension("traceId", "custom")

    options = ProblemDetailsOptions().with_customizer(own_trace)
    doc = ProblemDocumentBuilder.default(options).build(failure(), trace_id="ignored")

    assert doc.extensions["traceId"] == "custom"


def test_customizer_must_return_document() -> None:
    options = ProblemDetailsOptions().with_customizer(lambda doc, ctx: None)  # type: ignore[arg-type, return-value]

    with pytest.raises(TypeError):
        ProblemDocumentBuilder.default(options).build(failure())


def test_trace_id_falls_back_to_logging_context(builder: ProblemDocumentBuilder) -> None:
    token = set_request_context(trace_id="ctx-trace")
    try:
        doc = builder.build(failure())
    finally:
        reset_request_context(token)

    assert doc.extensions["traceId"] == "ctx-trace"


def test_success_is_rejected(builder: ProblemDocumentBuilder) -> None:
    with pytest.raises(InvalidOutcomeError) as exc_info:
        builder.build(success("fine"))  # type: ignore[arg-type]
    assert exc_info.value.code == "INVALID_OUTCOME"


def test_missing_factory_is_rejected() -> None:
    with pytest.raises(MissingCollaboratorError):
        ProblemDocumentBuilder(None)


def test_factory_returning_none_is_rejected() -> None:
    builder = ProblemDocumentBuilder(_NoneFactory())
    with pytest.raises(MissingCollaboratorError):
        builder.build(failure(ErrorInfo(ErrorCategory.CONFLICT, None, "dup")))
