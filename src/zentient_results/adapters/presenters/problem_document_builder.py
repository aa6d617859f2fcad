# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Problem document builder.

Purpose:
    Turn a ``Failure`` outcome into an RFC 9110 problem document.

Algorithm:
    1. Normalize the base URI (blank -> RFC fallback, trailing ``/`` ensured).
    2. Pick ``type``: ``validation`` when any error is a validation error,
       else the first error's code, else its category, else the status.
    3. ``title`` from the failure description, ``detail`` from the primary
       error message, each with a status-based fallback.
    4. Validation-shaped document when any error is a validation error or the
       status is 422; validation errors are grouped by field/code/"General".
    5. ``instance`` defaults to the request path.
    6. The full error tree is serialized into ``zentientErrors``.
    7. Customizers run in order, then ``traceId`` is ensured.

Layer:
    adapters/presenters
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder

from zentient_results.adapters.schemas.http.problem_document import (
    ERRORS_EXTENSION,
    TRACE_ID_EXTENSION,
    ProblemContext,
    ProblemDocument,
    ValidationProblemDocument,
)
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.config.settings import FALLBACK_PROBLEM_TYPE_BASE_URI
from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import Failure, Success
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.exceptions.base import (
    InvalidOutcomeError,
    MissingCollaboratorError,
)
from zentient_results.domain.services.status_resolver import StatusResolver
from zentient_results.infrastructure.logging.logger import get_json_logger, get_trace_id
from zentient_results.types import JsonValue, SerializedError

__all__ = [
    "DefaultProblemDocumentFactory",
    "ProblemDocumentBuilder",
    "ProblemDocumentFactory",
    "group_validation_errors",
    "normalize_base_uri",
    "problem_type_for",
    "serialize_error",
    "serialize_errors",
]

_LOGGER = get_json_logger(__name__)

_UNPROCESSABLE = 422
_GENERAL_KEY = "General"


# ---------------------------------------------------------------------------
# Document factory
# ---------------------------------------------------------------------------


class ProblemDocumentFactory(Protocol):
    """Creates the base documents the builder then completes."""

    def create_problem_document(
        self,
        *,
        status: int,
        title: str,
        type: str,
        detail: str,
        instance: str | None = None,
    ) -> ProblemDocument | None: ...

    def create_validation_problem_document(
        self,
        *,
        errors: dict[str, list[str]],
        status: int,
        title: str,
        type: str,
        detail: str,
        instance: str | None = None,
    ) -> ValidationProblemDocument | None: ...


class DefaultProblemDocumentFactory:
    """Factory producing plain schema instances."""

    __slots__ = ()

    def create_problem_document(
        self,
        *,
        status: int,
        title: str,
        type: str,
        detail: str,
        instance: str | None = None,
    ) -> ProblemDocument:
        return ProblemDocument(
            type=type, title=title, status=status, detail=detail, instance=instance
        )

    def create_validation_problem_document(
        self,
        *,
        errors: dict[str, list[str]],
        status: int,
        title: str,
        type: str,
        detail: str,
        instance: str | None = None,
    ) -> ValidationProblemDocument:
        return ValidationProblemDocument(
            type=type,
            title=title,
            status=status,
            detail=detail,
            instance=instance,
            errors=errors,
        )


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def normalize_base_uri(base_uri: str | None) -> str:
    """Return ``base_uri`` ending in ``/``, or the RFC fallback when blank.

    The fallback is returned as-is: it ends in a fragment, so slugs are
    appended to it directly.
    """
    if base_uri is None or not base_uri.strip():
        return FALLBACK_PROBLEM_TYPE_BASE_URI
    return base_uri if base_uri.endswith("/") else f"{base_uri}/"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _code_slug(code: str) -> str:
    """Lower-case ``code`` and drop underscores: ``PRODUCT_NOT_FOUND`` -> ``productnotfound``.

    Other characters are kept, so ``order.duplicate-sku`` stays as written.
    """
    return code.strip().lower().replace("_", "")


def _has_validation(errors: Iterable[ErrorInfo]) -> bool:
    return any(e.category is ErrorCategory.VALIDATION for e in errors)


def problem_type_for(errors: Sequence[ErrorInfo], status: int, base_uri: str) -> str:
    """Return the problem ``type`` URI for ``errors`` under a normalized ``base_uri``."""
    if _has_validation(errors):
        return f"{base_uri}validation"
    if errors:
        first = errors[0]
        slug = _code_slug(first.code) if first.code else ""
        if slug:
            return f"{base_uri}{slug}"
        if first.category is not ErrorCategory.NONE:
            return f"{base_uri}{first.category.slug}"
    return f"{base_uri}{status}"


def group_validation_errors(errors: Iterable[ErrorInfo]) -> dict[str, list[str]]:
    """Group validation messages by field name, then code, then ``"General"``.

    Non-validation errors are ignored. Key order follows first appearance and
    each message list keeps input order.
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        if error.category is not ErrorCategory.VALIDATION:
            continue
        if isinstance(error.data, str) and error.data.strip():
            key = error.data
        elif not _is_blank(error.code):
            key = error.code  # type: ignore[assignment]
        else:
            key = _GENERAL_KEY
        grouped.setdefault(key, []).append(error.message)
    return grouped


def _encode_data(data: Any) -> JsonValue:
    # Objects jsonable_encoder cannot walk (no __dict__, unknown types) are stringified.
    try:
        return jsonable_encoder(data)
    except (TypeError, ValueError):
        return str(data)


def serialize_error(error: ErrorInfo) -> SerializedError:
    """Serialize one error and its nested causes into plain JSON data."""
    obj: SerializedError = {
        "category": error.category.slug,
        "code": error.code,
        "message": error.message,
    }
    if error.data is not None:
        obj["data"] = _encode_data(error.data)
    if error.inner_errors:
        obj["innerErrors"] = serialize_errors(error.inner_errors)
    return obj


def serialize_errors(errors: Iterable[ErrorInfo]) -> list[SerializedError]:
    return [serialize_error(e) for e in errors]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class ProblemDocumentBuilder:
    """Build problem documents from failure outcomes.

    Args:
        factory: Collaborator creating the base documents. Required.
        options: Base URI and customizers. Defaults to the RFC fallback with
            no customizers.
        resolver: Status resolver. Defaults to the standard category table.

    Raises:
        MissingCollaboratorError: If ``factory`` is ``None``.
    """

    __slots__ = ("_factory", "_options", "_resolver")

    def __init__(
        self,
        factory: ProblemDocumentFactory | None,
        options: ProblemDetailsOptions | None = None,
        *,
        resolver: StatusResolver | None = None,
    ) -> None:
        if factory is None:
            raise MissingCollaboratorError(
                "a problem document factory is required",
                details={"collaborator": "ProblemDocumentFactory"},
            )
        self._factory = factory
        self._options = options or ProblemDetailsOptions()
        self._resolver = resolver or StatusResolver()

    @classmethod
    def default(
        cls,
        options: ProblemDetailsOptions | None = None,
        *,
        resolver: StatusResolver | None = None,
    ) -> ProblemDocumentBuilder:
        return cls(DefaultProblemDocumentFactory(), options, resolver=resolver)

    @property
    def options(self) -> ProblemDetailsOptions:
        return self._options

    @property
    def resolver(self) -> StatusResolver:
        return self._resolver

    def build(
        self,
        outcome: Failure,
        *,
        request_path: str | None = None,
        trace_id: str | None = None,
    ) -> ProblemDocument:
        """Build the problem document for ``outcome``.

        Args:
            outcome: Failure to render.
            request_path: Path of the current request, used for ``instance``.
            trace_id: Correlation id. Falls back to the logging context, then
                to a fresh UUID, so ``traceId`` is always present.

        Returns:
            A ``ValidationProblemDocument`` for validation failures (or any 422),
            a plain ``ProblemDocument`` otherwise.

        Raises:
            InvalidOutcomeError: If ``outcome`` is a success or not an outcome.
            MissingCollaboratorError: If the factory produced no document.
        """
        if isinstance(outcome, Success):
            raise InvalidOutcomeError(
                "cannot build a problem document for a successful outcome",
                details={"status": outcome.status_code},
            )
        if not isinstance(outcome, Failure):
            raise InvalidOutcomeError(
                f"expected a Failure outcome, got {type(outcome).__name__}",
                details={"type": type(outcome).__name__},
            )

        status = self._resolver.resolve(outcome)
        base_uri = normalize_base_uri(self._options.problem_type_base_uri)
        problem_type = problem_type_for(outcome.errors, status, base_uri)
        title = outcome.description if not _is_blank(outcome.description) else f"HTTP {status} Error"
        detail = outcome.error if not _is_blank(outcome.error) else (
            f"An error occurred with status code {status}."
        )

        document: ProblemDocument | None
        if _has_validation(outcome.errors) or status == _UNPROCESSABLE:
            document = self._factory.create_validation_problem_document(
                errors=group_validation_errors(outcome.errors),
                status=status,
                title=title,
                type=problem_type,
                detail=detail,
            )
        else:
            document = self._factory.create_problem_document(
                status=status,
                title=title,
                type=problem_type,
                detail=detail,
            )
        if document is None:
            raise MissingCollaboratorError(
                "problem document factory returned None",
                details={"collaborator": type(self._factory).__name__},
            )

        document = document.model_copy(
            update={
                "status": status,
                "title": title,
                "detail": detail,
                "type": problem_type,
                "instance": document.instance if document.instance is not None else request_path,
            }
        )
        if outcome.errors:
            document = document.with_extension(ERRORS_EXTENSION, serialize_errors(outcome.errors))

        context = ProblemContext(
            outcome=outcome, status=status, request_path=request_path, trace_id=trace_id
        )
        for customize in self._options.customizers:
            customized = customize(document, context)
            if not isinstance(customized, ProblemDocument):
                raise TypeError(
                    f"customizer {customize!r} must return a ProblemDocument, "
                    f"got {type(customized).__name__}"
                )
            document = customized

        if TRACE_ID_EXTENSION not in document.extensions:
            document = document.with_extension(
                TRACE_ID_EXTENSION, trace_id or get_trace_id() or str(uuid.uuid4())
            )

        _LOGGER.debug(
            "problem_document_built",
            extra={
                "extra": {
                    "status": status,
                    "problem_type": problem_type,
                    "error_count": len(outcome.errors),
                }
            },
        )
        return document
