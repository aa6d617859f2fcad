"""Routers Package Export (Adapters Layer).

Purpose:
    Re-export the outcome-aware route class so applications can write
    ``APIRouter(route_class=OutcomeRoute)`` without knowing the file layout.

Layer:
    adapters/routers
"""

from __future__ import annotations

from .outcome_route import OutcomeRoute, present_outcome, wrap_outcome_endpoint  # noqa: F401

__all__ = ["OutcomeRoute", "present_outcome", "wrap_outcome_endpoint"]
