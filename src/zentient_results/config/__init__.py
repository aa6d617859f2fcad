"""
Config package export.

Keeps import sites clean and stable:
    from zentient_results.config import get_settings, Settings
"""

from __future__ import annotations

from .problem_details import ProblemDetailsOptions
from .settings import Settings, get_settings

__all__ = ["ProblemDetailsOptions", "Settings", "get_settings"]
