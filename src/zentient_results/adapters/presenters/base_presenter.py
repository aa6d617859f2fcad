# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Presenter utilities and canonical response shapes.

Purpose:
    Thin, framework-aware helpers used by the response dispatcher and the
    exception handlers to shape HTTP responses consistently.

Responsibilities:
    * Describe every response shape as a ``PresentResult``: 200 + body,
      201 + Location + body, bare status (including 201 and 204), problem.
    * Render a ``PresentResult`` into a Starlette ``Response``.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse
from starlette.responses import Response

from zentient_results.adapters.schemas.http.problem_document import (
    PROBLEM_JSON_MEDIA_TYPE,
    ProblemDocument,
)
from zentient_results.types import JsonValue

_JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class PresentResult[T]:
    """Presentation result.

    Attributes:
        status_code: HTTP status to emit.
        body: JSON-ready body, or ``None`` for bodiless responses.
        headers: Extra HTTP headers to apply.
        media_type: Content type of ``body``.
    """

    status_code: int
    body: T | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    media_type: str = _JSON_MEDIA_TYPE

    @property
    def has_body(self) -> bool:
        return self.body is not None


class BasePresenter:
    """Base presenter for HTTP response shaping in adapter layers.

    Provides the response shapes and their rendering, leaving every decision
    about *which* shape to use to subclasses.
    """

    __slots__ = ()

    # ------------------------- Success shapes -------------------------- #

    def present_ok(self, body: JsonValue) -> PresentResult[JsonValue]:
        return PresentResult(status_code=int(HTTPStatus.OK), body=body)

    def present_created(self, body: JsonValue, *, location: str) -> PresentResult[JsonValue]:
        """Build a 201 carrying ``body`` and a ``Location`` header."""
        return PresentResult(
            status_code=int(HTTPStatus.CREATED),
            body=body,
            headers={"Location": location},
        )

    def present_no_content(self) -> PresentResult[None]:
        return PresentResult(status_code=int(HTTPStatus.NO_CONTENT))

    def present_status(self, status_code: int) -> PresentResult[None]:
        """Build a bare status response without a body."""
        return PresentResult(status_code=int(status_code))

    # ------------------------- Error shape ----------------------------- #

    def present_problem(
        self,
        document: ProblemDocument,
        *,
        status_code: int | None = None,
    ) -> PresentResult[dict[str, Any]]:
        """Build an ``application/problem+json`` result for ``document``.

        ``status_code`` overrides the document's own status on the wire line;
        the body always reports the document's status.
        """
        status = status_code if status_code is not None else (document.status or 500)
        return PresentResult(
            status_code=int(status),
            body=document.model_dump_http(),
            media_type=PROBLEM_JSON_MEDIA_TYPE,
        )

    # ------------------------- Rendering ------------------------------- #

    @staticmethod
    def render(result: PresentResult[Any]) -> Response:
        """Render ``result`` into a Starlette response."""
        if result.has_body:
            return JSONResponse(
                content=result.body,
                status_code=result.status_code,
                headers=dict(result.headers),
                media_type=result.media_type,
            )
        return Response(status_code=result.status_code, headers=dict(result.headers))
