# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
Error categories.

Purpose:
    Closed classification of failure causes. The category drives HTTP status
    inference and the fallback problem ``type`` slug when an error carries no
    explicit code.

Layer:
    domain

Notes:
    - Values are PascalCase tokens; the problem-type slug is the lower-cased
      value (``NotFound`` -> ``notfound``).
    - ``OTHER`` is the extensible bucket for causes that fit no other class.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Classification of a single failure cause."""

    NONE = "None"
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    AUTHENTICATION = "Authentication"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    SECURITY = "Security"
    NETWORK = "Network"
    TIMEOUT = "Timeout"
    REQUEST = "Request"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    OTHER = "Other"

    @property
    def slug(self) -> str:
        """Return the lower-cased token used in problem-type URIs."""
        return self.value.lower()
