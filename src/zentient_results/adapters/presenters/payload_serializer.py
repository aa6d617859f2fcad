# Copyright (c) Zentient.
# SPDX-License-Identifier: MIT
"""Payload serializer.

Purpose:
    Encode success payloads into JSON-ready data, selecting the encoder from
    the payload's type at runtime. Endpoints are heterogeneous and the
    dispatcher is shared, so the encoder is looked up per call from a
    type-keyed table rather than fixed at the call site.

Design:
    * Backed by :func:`functools.singledispatch`; lookups follow the MRO, so an
      encoder registered for a base class serves its subclasses.
    * Defaults: pydantic models dump in JSON mode; anything else goes through
      FastAPI's ``jsonable_encoder`` (dataclasses, mappings, sequences,
      datetimes, enums, UUIDs, decimals...).
    * Registration happens at wiring time; lookups are read-only afterwards.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Callable
from functools import singledispatch
from types import UnionType
from typing import Any, Union, get_origin

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from zentient_results.types import JsonValue

__all__ = ["PayloadEncoder", "PayloadSerializer"]

type PayloadEncoder = Callable[[Any], JsonValue]


def _encode_model(value: BaseModel) -> JsonValue:
    return value.model_dump(mode="json")


def _dispatch_key(payload_type: Any, value: Any) -> type:
    """Return the class to dispatch on for ``value`` declared as ``payload_type``.

    Unions and other non-class annotations (``Literal``, ``Annotated``, bare
    type variables) carry no single class; the runtime type is used instead.
    """
    if payload_type is None:
        return type(value)
    origin = get_origin(payload_type)
    if origin is Union or origin is UnionType:
        return type(value)
    key = origin or payload_type
    return key if isinstance(key, type) else type(value)


class PayloadSerializer:
    """Type-keyed registry of payload encoders."""

    __slots__ = ("_dispatch",)

    def __init__(self) -> None:
        @singledispatch
        def _encode(value: Any) -> JsonValue:
            return jsonable_encoder(value)

        _encode.register(BaseModel, _encode_model)
        self._dispatch = _encode

    def register(self, payload_type: type, encoder: PayloadEncoder) -> None:
        """Register ``encoder`` for ``payload_type`` (and its subclasses)."""
        self._dispatch.register(payload_type, encoder)

    def encoder_for(self, payload_type: Any) -> PayloadEncoder:
        """Return the encoder that serves ``payload_type``.

        Parameterized generics are looked up by their origin, so
        ``list[Product]`` is served by the ``list`` encoder.
        """
        return self._dispatch.dispatch(get_origin(payload_type) or payload_type)

    def encode(self, value: Any, payload_type: type | None = None) -> JsonValue:
        """Encode ``value`` with the encoder selected by ``payload_type``.

        Args:
            value: Payload to encode.
            payload_type: Static payload type; defaults to ``type(value)``.
                Generic aliases dispatch on their origin; unions fall back
                to ``type(value)``.
                Encoders are chosen by this type, not by the caller's own
                generic parameter.
        """
        if value is None:
            return None
        return self.encoder_for(_dispatch_key(payload_type, value))(value)
