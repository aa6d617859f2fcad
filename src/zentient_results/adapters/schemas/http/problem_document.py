# src/zentient_results/adapters/schemas/http/problem_document.py
# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Problem Documents (Adapters Layer).

Purpose:
    RFC 9110 / RFC 7807 problem details schemas:
      - ProblemDocument: ``type``, ``title``, ``status``, ``detail``,
        ``instance`` plus free-form ``extensions``.
      - ValidationProblemDocument: adds the field-keyed ``errors`` map.

Wire shape:
    ``extensions`` is flattened into the top-level JSON object by
    :meth:`ProblemDocument.model_dump_http`; standard members win over
    extension keys with the same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from pydantic import ConfigDict, Field

from zentient_results.adapters.schemas.http.base import BaseHTTPSchema
from zentient_results.domain.entities.outcome import Failure

__all__ = [
    "PROBLEM_JSON_MEDIA_TYPE",
    "TRACE_ID_EXTENSION",
    "ERRORS_EXTENSION",
    "ProblemContext",
    "ProblemDocument",
    "ValidationProblemDocument",
]

PROBLEM_JSON_MEDIA_TYPE: Final[str] = "application/problem+json"
TRACE_ID_EXTENSION: Final[str] = "traceId"
ERRORS_EXTENSION: Final[str] = "zentientErrors"


class ProblemDocument(BaseHTTPSchema):
    """Machine-readable error document."""

    model_config = ConfigDict(
        title="ProblemDocument",
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "type": "https://example.com/errors/productnotfound",
                    "title": "Not Found",
                    "status": 404,
                    "detail": "Product 99 not found.",
                    "instance": "/products/99",
                    "traceId": "c1e2d3f4-5678-90ab-cdef-1234567890ab",
                    "zentientErrors": [
                        {
                            "category": "notfound",
                            "code": "PRODUCT_NOT_FOUND",
                            "message": "Product 99 not found.",
                        }
                    ],
                }
            ]
        },
    )

    type: str = Field(default="about:blank", description="URI identifying the problem type.")
    title: str | None = Field(default=None, description="Short human-readable summary.")
    status: int | None = Field(default=None, description="HTTP status code.")
    detail: str | None = Field(default=None, description="Occurrence-specific explanation.")
    instance: str | None = Field(default=None, description="Request path of the occurrence.")
    extensions: dict[str, Any] = Field(
        default_factory=dict,
        description="Extension members, flattened into the top-level object on the wire.",
    )

    def with_extension(self, key: str, value: Any) -> ProblemDocument:
        """Return a copy carrying ``key`` in ``extensions`` (overwriting)."""
        return self.model_copy(update={"extensions": {**self.extensions, key: value}})

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """Return the JSON object sent to clients, extensions flattened.

        ``None`` members are dropped; ``None`` values inside extensions (e.g. a
        missing error ``code``) are kept.
        """
        body = self.model_dump(mode="json", exclude={"extensions"}, exclude_none=True, **kwargs)
        extensions = self.model_dump(mode="json", include={"extensions"})["extensions"]
        for key, value in extensions.items():
            body.setdefault(key, value)
        return body


class ValidationProblemDocument(ProblemDocument):
    """Problem document whose ``errors`` groups validation messages by field."""

    model_config = ConfigDict(title="ValidationProblemDocument", extra="forbid")

    title: str | None = Field(default="One or more validation errors occurred.")
    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Messages keyed by field name, error code, or 'General'.",
    )


@dataclass(frozen=True, slots=True)
class ProblemContext:
    """Inputs available to document customizers.

    Attributes:
        outcome: The failure being rendered.
        status: Resolved HTTP status.
        request_path: Path of the current request, if known.
        trace_id: Correlation id of the current request, if known.
    """

    outcome: Failure
    status: int
    request_path: str | None = None
    trace_id: str | None = None
