# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
Base Exceptions.

Summary:
    Usage and configuration faults raised by the translation engine. Domain
    failures are *data* (``ErrorInfo`` inside a ``Failure``) and never raised;
    the exceptions below signal programming errors that must abort the current
    translation.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class ZentientError(Exception):
    """Base class for all engine exceptions."""

    code: str = "ZENTIENT_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class InvalidOutcomeError(ZentientError):
    """Raised when an operation receives an outcome it cannot accept.

    Examples: asking for a problem document for a successful outcome, or
    handing the dispatcher something that is not an outcome at all.
    """

    code = "INVALID_OUTCOME"


class MissingCollaboratorError(ZentientError):
    """Raised when a required collaborator is absent or produced nothing."""

    code = "MISSING_COLLABORATOR"
