# src/zentient_results/config/settings.py
# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Zentient Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the outcome translation layer. This
    module centralizes environment parsing; only adapters and infrastructure
    should read it at runtime. The engine itself receives an immutable
    ``ProblemDetailsOptions`` built from these settings.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown env.
    - Explicit field declarations with `validation_alias` env names.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Final

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zentient_results.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

FALLBACK_PROBLEM_TYPE_BASE_URI: Final[str] = "https://tools.ietf.org/html/rfc9110#section-15.5"
DEFAULT_CREATED_LOCATION: Final[str] = "https://default.com/created/"


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed application configuration for the translation layer."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    # ---------------------------
    # Service identity / metadata
    # ---------------------------
    service_name: str = Field(
        default="zentient-results",
        description="Logical service name for logging.",
        validation_alias="SERVICE_NAME",
    )
    service_version: str | None = Field(
        default=None,
        description="Service version reported in the OpenAPI document and startup log.",
        validation_alias="SERVICE_VERSION",
    )

    # ---------------------------
    # Problem details
    # ---------------------------
    problem_type_base_uri: str = Field(
        default=FALLBACK_PROBLEM_TYPE_BASE_URI,
        description=(
            "Base URI for problem `type` links, e.g. 'https://example.com/errors/'. "
            "Blank values fall back to the RFC 9110 client/server error section."
        ),
        validation_alias="PROBLEM_TYPE_BASE_URI",
    )
    created_location: str = Field(
        default=DEFAULT_CREATED_LOCATION,
        description="Location header value emitted on 201 responses that carry a body.",
        validation_alias="CREATED_LOCATION_URI",
    )

    # ---------------------------
    # OpenAPI / docs
    # ---------------------------
    docs_url: str | None = Field(
        default="/docs",
        description="Swagger UI docs URL. Set to None to disable interactive docs.",
        validation_alias="DOCS_URL",
    )
    openapi_url: str | None = Field(
        default="/openapi.json",
        description="OpenAPI JSON schema URL. Set to None to disable OpenAPI exposure.",
        validation_alias="OPENAPI_URL",
    )

    # ---------------------------
    # Logging
    # ---------------------------
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO'). If not set, defaults are used.",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        case_sensitive=False,
    )

    @field_validator("problem_type_base_uri", mode="before")
    @classmethod
    def _blank_base_uri_to_fallback(cls, v: str | None) -> str:
        """Treat an empty or missing base URI as the RFC fallback."""
        if v is None or not str(v).strip():
            return FALLBACK_PROBLEM_TYPE_BASE_URI
        return str(v).strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings singleton."""
    settings = Settings()
    logger.debug(
        "settings_loaded",
        extra={
            "extra": {
                "environment": settings.environment.value,
                "problem_type_base_uri": settings.problem_type_base_uri,
            }
        },
    )
    return settings


__all__ = [
    "DEFAULT_CREATED_LOCATION",
    "FALLBACK_PROBLEM_TYPE_BASE_URI",
    "Environment",
    "Settings",
    "get_settings",
]
