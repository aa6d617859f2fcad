"""Zentient Results: outcome-to-HTTP translation for FastAPI.

Endpoints return a ``Success`` or ``Failure`` outcome; this package turns it
into the matching HTTP response, rendering failures as RFC 9110 problem
details (``application/problem+json``).

Typical usage:
    from zentient_results import ErrorInfo, OutcomeRoute, create_app, not_found, success

    router = APIRouter(route_class=OutcomeRoute)

    @router.get("/products/{product_id}")
    def get_product(product_id: int):
        product = repo.get(product_id)
        if product is None:
            return not_found(ErrorInfo.not_found("Product not found", code="PRODUCT_NOT_FOUND"))
        return success(product)

    app = create_app(routers=[router])
"""

from __future__ import annotations

from zentient_results.adapters.presenters.payload_serializer import PayloadSerializer
from zentient_results.adapters.presenters.problem_document_builder import (
    DefaultProblemDocumentFactory,
    ProblemDocumentBuilder,
    ProblemDocumentFactory,
)
from zentient_results.adapters.presenters.response_dispatcher import ResponseDispatcher
from zentient_results.adapters.routers.outcome_route import OutcomeRoute
from zentient_results.adapters.schemas.http.problem_document import (
    ProblemContext,
    ProblemDocument,
    ValidationProblemDocument,
)
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.domain.entities.error_info import ErrorInfo
from zentient_results.domain.entities.outcome import (
    Failure,
    Outcome,
    Success,
    conflict,
    created,
    failure,
    forbidden,
    no_content,
    not_found,
    success,
    unauthorized,
    validation,
)
from zentient_results.domain.enums.error_category import ErrorCategory
from zentient_results.domain.exceptions.base import (
    InvalidOutcomeError,
    MissingCollaboratorError,
    ZentientError,
)
from zentient_results.domain.services.status_resolver import StatusResolver
from zentient_results.main import create_app

__all__ = [
    "DefaultProblemDocumentFactory",
    "ErrorCategory",
    "ErrorInfo",
    "Failure",
    "InvalidOutcomeError",
    "MissingCollaboratorError",
    "Outcome",
    "OutcomeRoute",
    "PayloadSerializer",
    "ProblemContext",
    "ProblemDetailsOptions",
    "ProblemDocument",
    "ProblemDocumentBuilder",
    "ProblemDocumentFactory",
    "ResponseDispatcher",
    "StatusResolver",
    "Success",
    "ValidationProblemDocument",
    "ZentientError",
    "conflict",
    "create_app",
    "created",
    "failure",
    "forbidden",
    "no_content",
    "not_found",
    "success",
    "unauthorized",
    "validation",
]
