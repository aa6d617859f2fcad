"""Project-wide JSON typing helpers.

These aliases model JSON-serializable values and the wire shape of the
serialized error tree carried in problem documents.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict

type JsonPrimitive = None | bool | int | float | str
type JsonValue = JsonPrimitive | list[JsonValue] | dict[str, JsonValue]


class SerializedError(TypedDict):
    """One entry of the ``zentientErrors`` extension."""

    category: str
    code: str | None
    message: str
    data: NotRequired[JsonValue]
    innerErrors: NotRequired[list[SerializedError]]


__all__ = ["JsonPrimitive", "JsonValue", "SerializedError"]
