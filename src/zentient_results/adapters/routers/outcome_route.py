# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Outcome-aware route class (Adapters Layer).

Purpose:
    Let endpoints return a ``Success``/``Failure`` outcome and have it turned
    into the matching HTTP response at the edge of the request pipeline.

Design:
    - ``OutcomeRoute`` wraps each endpoint once, at route construction.
    - The wrapper runs the endpoint (awaiting coroutines, threadpooling sync
      functions as FastAPI would), then hands outcomes to the request's
      :class:`ResponseDispatcher`. Any other return value passes through to
      FastAPI's normal serialization untouched.
    - A ``Request`` parameter is injected into the endpoint signature only
      when the endpoint does not already declare one.

Usage:
    router = APIRouter(route_class=OutcomeRoute)

    @router.get("/products/{product_id}")
    def get_product(product_id: int) -> Outcome[Product]:
        ...

Layer:
    adapters/routers
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from fastapi.dependencies.utils import get_typed_signature
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from zentient_results.adapters.dependencies.outcome import (
    get_outcome_dispatcher,
    request_trace_id,
)
from zentient_results.domain.entities.outcome import is_outcome

__all__ = ["OutcomeRoute", "present_outcome", "wrap_outcome_endpoint"]

_INJECTED_REQUEST_PARAM = "__outcome_request__"
_WRAPPED_MARKER = "__outcome_wrapped__"


def present_outcome(request: Request, outcome: Any) -> Response:
    """Render ``outcome`` for ``request`` with the app's dispatcher."""
    dispatcher = get_outcome_dispatcher(request)
    return dispatcher.dispatch(
        outcome,
        request_path=request.url.path,
        trace_id=request_trace_id(request),
    )


def _find_request_param(signature: inspect.Signature) -> str | None:
    for param in signature.parameters.values():
        if isinstance(param.annotation, type) and issubclass(param.annotation, Request):
            return param.name
    return None


def _with_request_param(signature: inspect.Signature) -> inspect.Signature:
    injected = inspect.Parameter(
        _INJECTED_REQUEST_PARAM,
        inspect.Parameter.KEYWORD_ONLY,
        annotation=Request,
    )
    params = list(signature.parameters.values())
    # Keyword-only parameters must precede **kwargs.
    index = next(
        (i for i, p in enumerate(params) if p.kind is inspect.Parameter.VAR_KEYWORD),
        len(params),
    )
    params.insert(index, injected)
    return signature.replace(parameters=params, return_annotation=Response)


def wrap_outcome_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Return an async endpoint that dispatches outcomes returned by ``endpoint``."""
    if getattr(endpoint, _WRAPPED_MARKER, False):
        return endpoint

    signature = get_typed_signature(endpoint)
    request_param = _find_request_param(signature)
    injected = request_param is None
    if injected:
        request_param = _INJECTED_REQUEST_PARAM
        wrapper_signature = _with_request_param(signature)
    else:
        wrapper_signature = signature.replace(return_annotation=Response)
    is_async = inspect.iscoroutinefunction(endpoint)

    async def _endpoint(*args: Any, **kwargs: Any) -> Any:
        request: Request = kwargs.pop(request_param) if injected else kwargs[request_param]
        if is_async:
            result = await endpoint(*args, **kwargs)
        else:
            result = await run_in_threadpool(endpoint, *args, **kwargs)
        if not is_outcome(result):
            return result
        return present_outcome(request, result)

    # No __wrapped__ link: FastAPI must inspect the wrapper, not the endpoint.
    for attr in ("__module__", "__name__", "__qualname__", "__doc__"):
        if hasattr(endpoint, attr):
            setattr(_endpoint, attr, getattr(endpoint, attr))
    _endpoint.__signature__ = wrapper_signature  # type: ignore[attr-defined]
    setattr(_endpoint, _WRAPPED_MARKER, True)
    return _endpoint


class OutcomeRoute(APIRoute):
    """``APIRoute`` whose endpoint may return an outcome."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, wrap_outcome_endpoint(endpoint), **kwargs)
