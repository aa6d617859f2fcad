# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest

from zentient_results.adapters.dependencies import outcome as outcome_deps
from zentient_results.adapters.presenters.problem_document_builder import ProblemDocumentBuilder
from zentient_results.adapters.presenters.response_dispatcher import ResponseDispatcher
from zentient_results.config.problem_details import ProblemDetailsOptions
from zentient_results.config.settings import get_settings

_SETTINGS_ENV = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "SERVICE_VERSION",
    "LOG_LEVEL",
    "PROBLEM_TYPE_BASE_URI",
    "CREATED_LOCATION_URI",
    "DOCS_URL",
    "OPENAPI_URL",
)

BASE_URI = "https://example.com/errors/"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop settings env and cached singletons around every test."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    outcome_deps._default_dispatcher.cache_clear()
    yield
    get_settings.cache_clear()
    outcome_deps._default_dispatcher.cache_clear()


@pytest.fixture
def options() -> ProblemDetailsOptions:
    return ProblemDetailsOptions(problem_type_base_uri=BASE_URI)


@pytest.fixture
def builder(options: ProblemDetailsOptions) -> ProblemDocumentBuilder:
    return ProblemDocumentBuilder.default(options)


@pytest.fixture
def dispatcher(builder: ProblemDocumentBuilder) -> ResponseDispatcher:
    return ResponseDispatcher(builder)
