# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""
Outcome Entities

Purpose:
    Tagged union returned by application logic: either ``Success[T]`` carrying
    an optional payload, or ``Failure`` carrying an ordered list of
    ``ErrorInfo``. Produced once per request and consumed once by the
    translation engine.

Design:
    Both variants implement the ``TypedOutcome`` protocol so that the boundary
    can ask whether a payload is present, what its type is, and route the
    outcome to a visitor without knowing ``T`` at the call site.

Layer: domain/entities
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol, runtime_checkable

from .base import BaseEntity
from .error_info import ErrorInfo

__all__ = [
    "Failure",
    "Outcome",
    "OutcomeVisitor",
    "Success",
    "TypedOutcome",
    "conflict",
    "created",
    "failure",
    "forbidden",
    "is_outcome",
    "no_content",
    "not_found",
    "success",
    "unauthorized",
    "validation",
]


def _check_status(code: int) -> None:
    if isinstance(code, bool) or not isinstance(code, int) or not 100 <= code <= 599:
        raise ValueError(f"status_code must be an int in [100, 599], got {code!r}")


class OutcomeVisitor[R](Protocol):
    """Double-dispatch target for outcomes."""

    def visit_success(self, outcome: Success[Any]) -> R: ...

    def visit_failure(self, outcome: Failure) -> R: ...


@runtime_checkable
class TypedOutcome(Protocol):
    """Capability shared by every outcome variant."""

    @property
    def is_success(self) -> bool: ...

    @property
    def is_failure(self) -> bool: ...

    def has_payload(self) -> bool: ...

    def payload_type(self) -> type | None: ...

    def accept[R](self, visitor: OutcomeVisitor[R]) -> R: ...


@dataclass(frozen=True, slots=True)
class Success[T](BaseEntity):
    """Successful outcome.

    Args:
        value: Payload, or ``None`` when the operation produced nothing.
        status_code: Declared HTTP status (200 unless set, e.g. 201 or 204).
        declared_type: Static payload type when the producer knows it better
            than ``type(value)`` does (e.g. a base class or protocol).

    Raises:
        ValueError: If ``status_code`` is outside ``[100, 599]``.
    """

    value: T | None = None
    status_code: int = HTTPStatus.OK
    declared_type: type[T] | None = None

    def __post_init__(self) -> None:
        _check_status(self.status_code)
        object.__setattr__(self, "status_code", int(self.status_code))

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> str | None:
        return None

    def has_payload(self) -> bool:
        return self.value is not None

    def payload_type(self) -> type | None:
        """Return the declared payload type, else the runtime type of the value."""
        if self.declared_type is not None:
            return self.declared_type
        if self.value is None:
            return None
        return type(self.value)

    def accept[R](self, visitor: OutcomeVisitor[R]) -> R:
        return visitor.visit_success(self)


@dataclass(frozen=True, slots=True)
class Failure(BaseEntity):
    """Failed outcome.

    Args:
        errors: Ordered causes. Expected non-empty, but an empty sequence is
            tolerated and resolves to a 500.
        status_code: Explicit HTTP status; ``None`` lets the status resolver
            infer one from the first error's category.
        description: Human title for the failure (e.g. ``"Not Found"``).
    """

    errors: tuple[ErrorInfo, ...] = field(default=())
    status_code: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        for err in self.errors:
            if not isinstance(err, ErrorInfo):
                raise TypeError(f"errors must contain ErrorInfo, got {err!r}")
        if self.status_code is not None:
            _check_status(self.status_code)
            object.__setattr__(self, "status_code", int(self.status_code))

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def error(self) -> str | None:
        """Primary human-readable error: the first cause's message."""
        return self.errors[0].message if self.errors else None

    def has_payload(self) -> bool:
        return False

    def payload_type(self) -> type | None:
        return None

    def accept[R](self, visitor: OutcomeVisitor[R]) -> R:
        return visitor.visit_failure(self)


type Outcome[T] = Success[T] | Failure


def is_outcome(obj: object) -> bool:
    """Return ``True`` if ``obj`` is one of the outcome variants."""
    return isinstance(obj, (Success, Failure))


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def success[T](
    value: T | None = None,
    *,
    status_code: int = HTTPStatus.OK,
    declared_type: type[T] | None = None,
) -> Success[T]:
    """Return a successful outcome (200 unless ``status_code`` says otherwise)."""
    return Success(value=value, status_code=int(status_code), declared_type=declared_type)


def created[T](value: T | None = None, *, declared_type: type[T] | None = None) -> Success[T]:
    return Success(value=value, status_code=int(HTTPStatus.CREATED), declared_type=declared_type)


def no_content() -> Success[None]:
    return Success(value=None, status_code=int(HTTPStatus.NO_CONTENT))


def failure(
    *errors: ErrorInfo,
    status_code: int | None = None,
    description: str = "",
) -> Failure:
    """Return a failed outcome carrying ``errors`` in order."""
    return Failure(errors=errors, status_code=status_code, description=description)


def _with_status(errors: Iterable[ErrorInfo], status: HTTPStatus) -> Failure:
    return Failure(errors=tuple(errors), status_code=int(status), description=status.phrase)


def validation(errors: Iterable[ErrorInfo]) -> Failure:
    """Return a 422 failure for request or business-rule validation errors."""
    return _with_status(errors, HTTPStatus.UNPROCESSABLE_ENTITY)


def not_found(*errors: ErrorInfo) -> Failure:
    return _with_status(errors, HTTPStatus.NOT_FOUND)


def conflict(*errors: ErrorInfo) -> Failure:
    return _with_status(errors, HTTPStatus.CONFLICT)


def unauthorized(*errors: ErrorInfo) -> Failure:
    return _with_status(errors, HTTPStatus.UNAUTHORIZED)


def forbidden(*errors: ErrorInfo) -> Failure:
    return _with_status(errors, HTTPStatus.FORBIDDEN)
