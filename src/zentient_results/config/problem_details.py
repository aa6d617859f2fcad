# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Problem Details Options.

Summary:
    Immutable configuration handed to the problem document builder and the
    response dispatcher at construction time. Nothing here is read from the
    environment directly; use :meth:`ProblemDetailsOptions.from_settings`.

Customizers:
    A customizer is a pure function ``(document, context) -> document`` run
    after the document is built and before ``traceId`` is ensured. Customizers
    run in registration order; :meth:`ProblemDetailsOptions.with_customizer`
    returns a new options object with one more appended, so composing hooks
    never mutates shared state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .settings import DEFAULT_CREATED_LOCATION, FALLBACK_PROBLEM_TYPE_BASE_URI, Settings

if TYPE_CHECKING:
    from zentient_results.adapters.schemas.http.problem_document import (
        ProblemContext,
        ProblemDocument,
    )

type ProblemCustomizer = Callable[[ProblemDocument, ProblemContext], ProblemDocument]


@dataclass(frozen=True, slots=True)
class ProblemDetailsOptions:
    """Read-only options for problem document generation.

    Attributes:
        problem_type_base_uri: Base for problem ``type`` links. Normalized by
            the builder (blank -> RFC fallback, trailing ``/`` ensured).
        created_location: ``Location`` header value for 201 responses.
        customizers: Ordered document transformations.
    """

    problem_type_base_uri: str = FALLBACK_PROBLEM_TYPE_BASE_URI
    created_location: str = DEFAULT_CREATED_LOCATION
    customizers: tuple[ProblemCustomizer, ...] = field(default=())

    @classmethod
    def from_settings(cls, settings: Settings) -> ProblemDetailsOptions:
        return cls(
            problem_type_base_uri=settings.problem_type_base_uri,
            created_location=settings.created_location,
        )

    def with_customizer(self, customizer: ProblemCustomizer) -> ProblemDetailsOptions:
        """Return a copy that runs ``customizer`` after the existing ones."""
        if not callable(customizer):
            raise TypeError(f"customizer must be callable, got {customizer!r}")
        return replace(self, customizers=(*self.customizers, customizer))
