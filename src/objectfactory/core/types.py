"""Core type definitions for objectfactory.

Field types and container descriptors are plain frozen dataclasses; the logic
that derives them from type hints lives in ``objectfactory.resolution.types``.

Usage:
    from objectfactory.core.types import ContainerKind, FieldType, kind_of_class

    kind_of_class(list)                    # ContainerKind.SEQUENCE
    FieldType(raw=int, hint=int).is_primitive  # True
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping, MutableSequence, Sequence, Set
from dataclasses import dataclass
from datetime import date, time, timedelta, tzinfo
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from pathlib import PurePath
from types import MappingProxyType, NoneType
from typing import Any, Final

type Copy[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Copy[T]` in a return type, mutating the returned value never
affects the source graph it was copied from.
"""

PRIMITIVE_DEFAULTS: Final[Mapping[type, Any]] = MappingProxyType(
    {bool: False, int: 0, float: 0.0, complex: 0j}
)

# Immutable value types that the binary codec clones as a whole.
SIMPLE_TYPES: Final[tuple[type, ...]] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    tzinfo,
    uuid.UUID,
    PurePath,
    Enum,
    NoneType,
)

# Sequences that behave as single values rather than containers.
_LEAF_SEQUENCES: Final[tuple[type, ...]] = (str, bytes, bytearray, tuple, range, memoryview)


class ContainerKind(Enum):
    """Container families, decided by capability rather than by concrete class."""

    SEQUENCE = auto()
    DEQUE = auto()
    SET = auto()
    MAP = auto()
    ORDERED_MAP = auto()
    SORTED_MAP = auto()

    @property
    def is_map(self) -> bool:
        return self in (ContainerKind.MAP, ContainerKind.ORDERED_MAP, ContainerKind.SORTED_MAP)


def is_simple_type(cls: Any) -> bool:
    """Check whether a class is an immutable simple value type.

    Args:
        cls: Class to check. Non-classes are never simple.

    Returns:
        True for primitives, strings, bytes, numbers, temporal values, UUIDs,
        paths, enums and ``NoneType``.
    """
    return isinstance(cls, type) and issubclass(cls, SIMPLE_TYPES)


def kind_of_class(cls: Any) -> ContainerKind | None:
    """Classify a class as a container kind.

    Args:
        cls: Class to classify.

    Returns:
        The container kind, or None for leaf classes (including ``str``,
        ``bytes`` and ``tuple``).
    """
    if not isinstance(cls, type) or issubclass(cls, _LEAF_SEQUENCES):
        return None
    if issubclass(cls, Mapping):
        if hasattr(cls, "peekitem"):
            return ContainerKind.SORTED_MAP
        if hasattr(cls, "move_to_end"):
            return ContainerKind.ORDERED_MAP
        return ContainerKind.MAP
    if issubclass(cls, Set):
        return ContainerKind.SET
    if issubclass(cls, (MutableSequence, Sequence)):
        return ContainerKind.DEQUE if hasattr(cls, "appendleft") else ContainerKind.SEQUENCE
    return None


def container_kind(value: Any) -> ContainerKind | None:
    """Classify a runtime value as a container kind, None for leaf values."""
    if value is None:
        return None
    return kind_of_class(type(value))


@dataclass(frozen=True, slots=True)
class FieldType:
    """Declared type of an attribute.

    ``raw`` is the runtime class with generic arguments, ``Annotated`` metadata
    and ``Optional`` stripped (``object`` when unknown). ``hint`` is the full
    hint minus ``Optional``. ``nullable`` records an ``X | None`` declaration,
    which turns a primitive into its wrapper form.
    """

    raw: type
    hint: Any
    nullable: bool = False

    @property
    def is_primitive(self) -> bool:
        return self.raw in PRIMITIVE_DEFAULTS and not self.nullable

    @property
    def is_wrapper(self) -> bool:
        return self.raw in PRIMITIVE_DEFAULTS and self.nullable

    @property
    def is_enum(self) -> bool:
        return issubclass(self.raw, Enum)

    @property
    def is_container(self) -> bool:
        return kind_of_class(self.raw) is not None

    @property
    def is_unknown(self) -> bool:
        return self.raw is object

    def same_as(self, other: FieldType) -> bool:
        """Identical for copy purposes: same raw class, same wrapper-ness."""
        return self.raw is other.raw and self.is_wrapper == other.is_wrapper


@dataclass(frozen=True, slots=True)
class ContainerDescriptor:
    """Static shape of a container hint.

    Sequences and sets carry one element reference, maps two (key, value).
    Each reference is either a class or a nested descriptor.
    """

    kind: ContainerKind
    origin: type
    elements: tuple[type | ContainerDescriptor, ...]

    @property
    def leaf(self) -> type:
        """Innermost declared class, following the value side of maps."""
        last = self.elements[-1]
        return last.leaf if isinstance(last, ContainerDescriptor) else last

    @property
    def components(self) -> tuple[type, ...]:
        """Leaf class of each element reference."""
        return tuple(e.leaf if isinstance(e, ContainerDescriptor) else e for e in self.elements)
