# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Outcome dispatcher wiring (Adapters Layer).

Purpose:
    Resolve the shared :class:`ResponseDispatcher` for a request. The
    application factory installs one on ``app.state.outcome_dispatcher``;
    apps that skip the factory get one built from settings on first use.

Layer:
    adapters/dependencies
"""

from __future__ import annotations

from functools import lru_cache

from starlette.requests import Request

from zentient_results.adapters.presenters.payload_serializer import PayloadSerializer
from zentient_results.adapters.presenters.problem_document_builder import ProblemDocumentBuilder
from zentient_results.adapters.presenters.response_dispatcher import ResponseDispatcher
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.config.settings import Settings, get_settings

__all__ = ["DISPATCHER_STATE_KEY", "build_dispatcher", "get_outcome_dispatcher", "request_trace_id"]

DISPATCHER_STATE_KEY = "outcome_dispatcher"


def build_dispatcher(
    settings: Settings | None = None,
    *,
    options: ProblemDetailsOptions | None = None,
    serializer: PayloadSerializer | None = None,
) -> ResponseDispatcher:
    """Build a dispatcher from explicit options, else from settings."""
    resolved = options or ProblemDetailsOptions.from_settings(settings or get_settings())
    return ResponseDispatcher(
        ProblemDocumentBuilder.default(resolved),
        serializer=serializer,
        options=resolved,
    )


@lru_cache(maxsize=1)
def _default_dispatcher() -> ResponseDispatcher:
    return build_dispatcher()


def get_outcome_dispatcher(request: Request) -> ResponseDispatcher:
    """FastAPI dependency returning the dispatcher for ``request``'s app."""
    dispatcher = getattr(request.app.state, DISPATCHER_STATE_KEY, None)
    if isinstance(dispatcher, ResponseDispatcher):
        return dispatcher
    return _default_dispatcher()


def request_trace_id(request: Request) -> str | None:
    """Return the trace id attached by ``TraceIdMiddleware``, if any."""
    return getattr(request.state, "trace_id", None)
