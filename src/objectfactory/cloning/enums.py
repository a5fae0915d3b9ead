"""Enum conversion between string and enum attributes.

The textual form of an enum member is its ``name``.

Usage:
    convert_enum(str, Color, "RED")       # Color.RED
    convert_enum(Color, Shade, Color.RED) # Shade.RED
    convert_enum(Color, str, Color.RED)   # "RED"
"""

from __future__ import annotations

from enum import Enum
from typing import Any


def _is_enum(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, Enum)


def textual_form(value: Any) -> str:
    return value.name if isinstance(value, Enum) else str(value)


def find_member[E: Enum](enum_type: type[E], text: Any) -> E | None:
    """Member of ``enum_type`` whose name equals ``text``, None if there is none."""
    if not isinstance(text, str):
        return None
    return enum_type.__members__.get(text)


def convert_enum(source_type: type, dest_type: type, value: Any) -> Any:
    """Convert a value across an enum boundary.

    Args:
        source_type: Declared source class.
        dest_type: Declared destination class.
        value: Source value.

    Returns:
        The converted value, or None when the value is absent, no member
        matches, or the pair of types is not convertible.
    """
    if value is None:
        return None
    if _is_enum(dest_type):
        if source_type is str or _is_enum(source_type):
            return find_member(dest_type, textual_form(value))
        return None
    if _is_enum(source_type) and dest_type is str:
        return textual_form(value)
    return None
