# src/zentient_results/infrastructure/http/errors.py
# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Boundary exception handlers.

Every fault that escapes an endpoint is turned into a failure outcome and
rendered through the same dispatcher as returned outcomes, so clients only
ever see ``application/problem+json`` for errors:

    * ``RequestValidationError`` -> Validation failure at 422.
    * ``HTTPException`` -> failure at the exception's status, category
      inferred from the status.
    * anything else -> 500 InternalServerError, details kept server-side.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import Response

from zentient_results.adapters.dependencies.outcome import get_outcome_dispatcher, request_trace_id
from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import Failure, failure, validation
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.services.status_resolver import category_for_status
from zentient_results.infrastructure.http.middleware.trace import TRACE_HEADER
from zentient_results.infrastructure.logging.logger import get_json_logger

__all__ = [
    "handle_http_exception",
    "handle_unhandled_exception",
    "handle_validation_error",
    "register_exception_handlers",
    "validation_errors_from",
]

logger = get_json_logger(__name__)

# Leading ``loc`` entries naming where FastAPI read the value from.
_LOCATION_SOURCES = frozenset({"body", "query", "path", "header", "cookie"})


def _render(request: Request, outcome: Failure) -> Response:
    dispatcher = get_outcome_dispatcher(request)
    return dispatcher.dispatch(
        outcome,
        request_path=request.url.path,
        trace_id=request_trace_id(request),
    )


def _status_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"HTTP {status}"


def _error_key(loc: Sequence[Any]) -> str | None:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_SOURCES:
        parts = parts[1:]
    if not parts:
        return None
    return ".".join(str(p) for p in parts)


def validation_errors_from(errors: Iterable[dict[str, Any]]) -> tuple[ErrorInfo, ...]:
    """Map pydantic error dicts to Validation ``ErrorInfo`` entries.

    The dotted field location (without its source prefix) is used as both
    ``code`` and ``data`` so the problem document groups messages per field.
    """
    out: list[ErrorInfo] = []
    for err in errors:
        key = _error_key(err.get("loc", ()))
        out.append(
            ErrorInfo(
                category=ErrorCategory.VALIDATION,
                code=key,
                message=str(err.get("msg", "Invalid value.")),
                data=key,
            )
        )
    return tuple(out)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    """Render request validation failures as a validation problem document."""
    outcome = validation(validation_errors_from(exc.errors()))
    return _render(request, outcome)


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Render an ``HTTPException`` at its own status, keeping its headers."""
    status = exc.status_code
    if isinstance(exc.detail, str) and exc.detail:
        message, data = exc.detail, None
    else:
        message, data = _status_phrase(status), exc.detail
    outcome = failure(
        ErrorInfo(category=category_for_status(status), code=None, message=message, data=data),
        status_code=status,
        description=_status_phrase(status),
    )
    response = _render(request, outcome)
    for name, value in (exc.headers or {}).items():
        response.headers[name] = value
    return response


async def handle_unhandled_exception(request: Request, exc: Exception) -> Response:
    """Log ``exc`` and render a generic 500 problem document.

    The 500 is sent by the server error middleware, outside
    ``TraceIdMiddleware``, so the trace header is set here.
    """
    logger.exception(
        "unhandled_exception",
        extra={"extra": {"path": request.url.path, "method": request.method}},
    )
    outcome = failure(
        ErrorInfo(
            category=ErrorCategory.INTERNAL_SERVER_ERROR,
            code=None,
            message="An unexpected error occurred.",
        ),
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        description=HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
    )
    response = _render(request, outcome)
    trace_id = request_trace_id(request)
    if trace_id is not None:
        response.headers[TRACE_HEADER] = trace_id
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Install the problem-details handlers on ``app``."""

    async def _http_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, HTTPException):
            raise exc
        return await handle_http_exception(request, exc)

    async def _validation_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, RequestValidationError):
            raise exc
        return await handle_validation_error(request, exc)

    async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
        return await handle_unhandled_exception(request, exc)

    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
