# src/zentient_results/infrastructure/http/middleware/trace.py
# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Trace ID Middleware.

Summary:
    Starlette/FastAPI middleware that gives every request a correlation id
    and echoes it back to the client. The id is read from (and written to)
    the ``x-trace-id`` header, attached to ``request.state.trace_id`` for the
    outcome dispatcher and exception handlers, and bound to the logging
    contextvar so structured log lines carry it as ``trace_id``.

Design:
    * A sane inbound ``x-trace-id`` is reused; otherwise a UUIDv4 is minted.
    * The same id lands in the problem document ``traceId`` member, so a
      client can quote it when reporting an error.
    * The logging context is restored once the response is produced.

Layer:
    infrastructure/http/middleware
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from zentient_results.infrastructure.logging.logger import (
    reset_request_context,
    set_request_context,
)

# Public, lowercase header name (HTTP headers are case-insensitive).
TRACE_HEADER = "x-trace-id"

# Typical UUIDs are 36 chars.
_MAX_TRACE_LEN = 128


def _sanitize_inbound_trace(raw: str | None) -> str | None:
    """Return a usable inbound trace id, or ``None``.

    Surrounding whitespace is trimmed; empty values and values longer than
    ``_MAX_TRACE_LEN`` are rejected.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value or len(value) > _MAX_TRACE_LEN:
        return None
    return value


def _new_trace_id() -> str:
    return str(uuid.uuid4())


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Attach and echo a correlation id for every request.

    Add it before anything that reads ``request.state.trace_id``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        trace_id = _sanitize_inbound_trace(request.headers.get(TRACE_HEADER)) or _new_trace_id()

        request.state.trace_id = trace_id
        token = set_request_context(trace_id=trace_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_context(token)

        # Do not overwrite a value set downstream.
        if TRACE_HEADER not in response.headers:
            response.headers[TRACE_HEADER] = trace_id
        return response


__all__ = ["TRACE_HEADER", "TraceIdMiddleware"]
