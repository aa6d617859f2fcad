# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Response Dispatcher.

Summary:
    Turns any outcome into the HTTP response it stands for. The dispatcher is
    shared by every endpoint and never knows the payload type at the call
    site: outcomes route themselves to it through the visitor protocol, and
    success bodies are encoded by the type-keyed :class:`PayloadSerializer`.

Success shapes (by status, then payload presence):
    * 200: body -> 200 JSON; no body -> 204 No Content.
    * 201: body -> 201 JSON + Location; no body -> bare 201.
    * 204: always 204, payload ignored.
    * anything else: bare status.

Failures:
    Rendered as ``application/problem+json`` via
    :class:`ProblemDocumentBuilder`.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from starlette.responses import Response

from zentient_results.adapters.presenters.base_presenter import BasePresenter, PresentResult
from zentient_results.adapters.presenters.payload_serializer import PayloadSerializer
from zentient_results.adapters.presenters.problem_document_builder import ProblemDocumentBuilder
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.domain.entities.outcome import Failure, Success, TypedOutcome, is_outcome
from zentient_results.domain.exceptions.base import InvalidOutcomeError
from zentient_results.domain.services.status_resolver import StatusResolver
from zentient_results.infrastructure.logging.logger import get_json_logger

__all__ = ["ResponseDispatcher"]

_LOGGER = get_json_logger(__name__)


@dataclass(frozen=True, slots=True)
class _Presentation(BasePresenter):
    """Visitor bound to one request: status code, path and trace id."""

    dispatcher: ResponseDispatcher
    status_code: int
    request_path: str | None
    trace_id: str | None

    def visit_success(self, outcome: Success[Any]) -> PresentResult[Any]:
        return self.dispatcher.present_success(outcome, self.status_code)

    def visit_failure(self, outcome: Failure) -> PresentResult[Any]:
        document = self.dispatcher.builder.build(
            outcome, request_path=self.request_path, trace_id=self.trace_id
        )
        _LOGGER.info(
            "outcome_failure",
            extra={
                "extra": {
                    "status": self.status_code,
                    "problem_type": document.type,
                    "path": self.request_path,
                }
            },
        )
        return self.present_problem(document, status_code=self.status_code)


class ResponseDispatcher(BasePresenter):
    """Select and produce the HTTP response for an outcome.

    Args:
        builder: Problem document builder used for failures.
        serializer: Payload encoder registry used for success bodies.
        options: Provides the ``Location`` value for 201 responses. Defaults
            to the builder's options.
        resolver: Status resolver used when no explicit status is passed.
            Defaults to the builder's resolver so both agree.
    """

    __slots__ = ("_builder", "_options", "_resolver", "_serializer")

    def __init__(
        self,
        builder: ProblemDocumentBuilder,
        *,
        serializer: PayloadSerializer | None = None,
        options: ProblemDetailsOptions | None = None,
        resolver: StatusResolver | None = None,
    ) -> None:
        self._builder = builder
        self._serializer = serializer or PayloadSerializer()
        self._options = options or builder.options
        self._resolver = resolver or builder.resolver

    @classmethod
    def from_options(cls, options: ProblemDetailsOptions) -> ResponseDispatcher:
        return cls(ProblemDocumentBuilder.default(options), options=options)

    @property
    def builder(self) -> ProblemDocumentBuilder:
        return self._builder

    @property
    def serializer(self) -> PayloadSerializer:
        return self._serializer

    @property
    def resolver(self) -> StatusResolver:
        return self._resolver

    # ------------------------------------------------------------------ #

    def present(
        self,
        outcome: TypedOutcome,
        status_code: int | None = None,
        *,
        request_path: str | None = None,
        trace_id: str | None = None,
    ) -> PresentResult[Any]:
        """Return the presentation of ``outcome`` without rendering it.

        Args:
            outcome: A ``Success`` or ``Failure``.
            status_code: Status to emit; defaults to the resolved status.
            request_path: Request path for the problem ``instance``.
            trace_id: Correlation id for the problem ``traceId``.

        Raises:
            InvalidOutcomeError: If ``outcome`` is not an outcome.
        """
        if not is_outcome(outcome):
            raise InvalidOutcomeError(
                f"cannot dispatch {type(outcome).__name__}; expected Success or Failure",
                details={"type": type(outcome).__name__},
            )
        status = self._resolver.resolve(outcome) if status_code is None else int(status_code)
        visitor = _Presentation(
            dispatcher=self,
            status_code=status,
            request_path=request_path,
            trace_id=trace_id,
        )
        return outcome.accept(visitor)

    def dispatch(
        self,
        outcome: TypedOutcome,
        status_code: int | None = None,
        *,
        request_path: str | None = None,
        trace_id: str | None = None,
    ) -> Response:
        """Return the Starlette response for ``outcome``."""
        result = self.present(
            outcome, status_code, request_path=request_path, trace_id=trace_id
        )
        return self.render(result)

    def present_success(self, outcome: Success[Any], status_code: int) -> PresentResult[Any]:
        """Pick the success shape for ``status_code`` and payload presence."""
        if status_code == HTTPStatus.OK:
            if not outcome.has_payload():
                return self.present_no_content()
            return self.present_ok(self._encode(outcome))
        if status_code == HTTPStatus.CREATED:
            if not outcome.has_payload():
                return self.present_status(HTTPStatus.CREATED)
            return self.present_created(
                self._encode(outcome), location=self._options.created_location
            )
        if status_code == HTTPStatus.NO_CONTENT:
            return self.present_no_content()
        return self.present_status(status_code)

    def _encode(self, outcome: Success[Any]) -> Any:
        return self._serializer.encode(outcome.value, outcome.payload_type())
