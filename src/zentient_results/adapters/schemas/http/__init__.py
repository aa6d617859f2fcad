# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the problem
    document schemas used by presenters and exception handlers. It does NOT
    expose BaseHTTPSchema, keeping the base class internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from zentient_results.adapters.schemas.http.problem_document import (
    ERRORS_EXTENSION,
    PROBLEM_JSON_MEDIA_TYPE,
    TRACE_ID_EXTENSION,
    ProblemContext,
    ProblemDocument,
    ValidationProblemDocument,
)

__all__ = [
    "ERRORS_EXTENSION",
    "PROBLEM_JSON_MEDIA_TYPE",
    "TRACE_ID_EXTENSION",
    "ProblemContext",
    "ProblemDocument",
    "ValidationProblemDocument",
]
