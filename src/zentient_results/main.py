# src/zentient_results/main.py
# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
Application Entry (Adapters Bootstrap)

Synopsis:
    Application factory wiring the outcome translation layer into FastAPI:
    JSON logging, the shared response dispatcher, trace-id middleware,
    problem-details exception handlers and the caller's routers.

Design:
    • Bootstrap only: no translation logic lives here.
    • The dispatcher is built once per app and stored on
      ``app.state.outcome_dispatcher`` where ``OutcomeRoute`` and the
      exception handlers find it.
    • TraceIdMiddleware is added before handlers that read ``trace_id``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from fastapi import APIRouter, FastAPI
from starlette.responses import JSONResponse

from zentient_results.adapters.dependencies.outcome import DISPATCHER_STATE_KEY, build_dispatcher
from zentient_results.adapters.presenters.payload_serializer import PayloadSerializer
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.config.settings import Settings, get_settings
from zentient_results.infrastructure.http.errors import register_exception_handlers
from zentient_results.infrastructure.http.middleware.trace import TraceIdMiddleware
from zentient_results.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)

logger = get_json_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    options: ProblemDetailsOptions | None = None,
    serializer: PayloadSerializer | None = None,
    routers: Iterable[APIRouter] = (),
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings; defaults to :func:`get_settings`.
        options: Problem details options; defaults to options derived from
            ``settings``.
        serializer: Payload encoder registry with caller-registered types.
        routers: Routers to mount, typically built with ``OutcomeRoute``.

    Returns:
        FastAPI: Fully configured application instance.
    """
    settings = settings or get_settings()
    configure_root_logging(settings.log_level)

    service_version = settings.service_version or "0.0.0"
    app = FastAPI(
        title=settings.service_name,
        version=service_version,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
    )

    resolved = options or ProblemDetailsOptions.from_settings(settings)
    setattr(
        app.state,
        DISPATCHER_STATE_KEY,
        build_dispatcher(settings, options=resolved, serializer=serializer),
    )

    # Attach trace-id middleware early so logs can correlate requests.
    app.add_middleware(TraceIdMiddleware)
    register_exception_handlers(app)

    for router in routers:
        app.include_router(router)

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> JSONResponse:
        """Liveness probe."""
        return JSONResponse({"status": "ok"})

    logger.info(
        "service_startup",
        extra={
            "extra": {
                "service": settings.service_name,
                "env": settings.environment.value,
                "version": service_version,
                "problem_type_base_uri": resolved.problem_type_base_uri,
                "customizers": len(resolved.customizers),
            }
        },
    )
    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "zentient_results.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=int(os.getenv("PORT", "8080")),
        reload=True,
    )
