"""Leaf object cloning.

Usage:
    leaf = LeafCloner(PydanticCodec(), convert=engine.copy_to)
    leaf.clone(Foo(1), Foo)      # structural deep copy
    leaf.clone(Foo(1), Bar)      # attribute-by-attribute copy into a new Bar
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from objectfactory.adapters.protocol import Codec
from objectfactory.core.types import is_simple_type
from objectfactory.errors import ConversionError, CopyError
from objectfactory.resolution.types import codec_supports, field_type


class LeafCloner:
    """Clones non-container values.

    Args:
        codec: Codec used for binary and textual round trips.
        convert: Copies a value into a new instance of another class; the
            engine's ``copy_to``.
    """

    def __init__(self, codec: Codec, convert: Callable[[Any, type], Any]) -> None:
        self._codec = codec
        self._convert = convert

    def clone(self, value: Any, dest_type: Any = object) -> Any:
        """Clone a value for a destination of the given declared type.

        Args:
            value: Value to clone.
            dest_type: Destination type hint. ``object`` or ``Any`` means the
                runtime type of ``value``.

        Returns:
            An independent copy, or None for None.

        Raises:
            ConversionError: If the codec fails.
            CopyError: If converting into another class fails.
        """
        if value is None:
            return None
        dest = field_type(dest_type)
        source_class = type(value)
        dest_class, dest_hint = dest.raw, dest.hint
        if dest.is_unknown:
            dest_class = dest_hint = source_class

        try:
            if is_simple_type(dest_class) or is_simple_type(source_class):
                return self.binary_clone(value)
            if source_class is dest_class and codec_supports(dest_class):
                return self.text_clone(value, dest_hint)
        except CopyError:
            raise
        except Exception as exc:
            raise ConversionError(
                f"Could not clone value of type {source_class.__qualname__}: {exc}"
            ) from exc
        return self._convert(value, dest_class)

    def binary_clone(self, value: Any) -> Any:
        """Round trip through the binary codec, keeping the exact type."""
        return self._codec.deserialize_bytes(self._codec.serialize_bytes(value))

    def text_clone(self, value: Any, hint: Any) -> Any:
        """Round trip through the textual codec, rebuilding as ``hint``."""
        return self._codec.deserialize_text(self._codec.serialize_text(value), hint)
