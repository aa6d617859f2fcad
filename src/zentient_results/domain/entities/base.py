# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Base Entity (Domain Layer).

Purpose:
    Mixin for immutable domain values. Provides frozen dataclass semantics
    and a small validation hook for invariants.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseEntity:
    """Base mixin for domain values.

    ``BaseEntity`` declares no fields; it fixes the dataclass configuration
    (frozen) and offers :meth:`__post_init__` as the common invariant hook.
    """

    def __post_init__(self) -> None:  # noqa: D401
        """Hook for subclasses to extend with invariant checks."""
        return
