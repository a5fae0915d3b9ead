"""Pydantic-backed codec.

Text round trips go through JSON: ``pydantic_core.to_json`` on the way out
and a cached ``pydantic.TypeAdapter`` on the way in, so dataclasses, pydantic
models, TypedDicts and builtin containers all rebuild as fresh objects. Binary
round trips use pickle and keep the exact runtime type.

Usage:
    codec = PydanticCodec()
    text = codec.serialize_text([Foo(1)])
    clones = codec.deserialize_text(text, list[Foo])
"""

from __future__ import annotations

import pickle  # nosec B403 - only round-trips bytes produced in-process
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import to_json


@lru_cache(maxsize=1024)
def _cached_adapter(hint: Any) -> TypeAdapter[Any]:
    return TypeAdapter(hint)


def _adapter(hint: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(hint)
    except TypeError:
        # unhashable hint, e.g. Annotated with unhashable metadata
        return TypeAdapter(hint)


def _fallback(value: Any) -> Any:
    """Serialize containers pydantic does not know natively."""
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        return list(value)
    raise TypeError(f"Unable to serialize value of type {type(value).__qualname__}")


class PydanticCodec:
    """Default Codec implementation."""

    def serialize_text(self, value: Any) -> str:
        return to_json(value, round_trip=True, fallback=_fallback).decode()

    def deserialize_text(self, text: str, hint: Any) -> Any:
        return _adapter(hint).validate_json(text)

    def serialize_bytes(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def deserialize_bytes(self, data: bytes) -> Any:
        return pickle.loads(data)  # nosec B301
