"""Schema models: declaration markers and the per-type descriptor.

Usage:
    from typing import Annotated

    @dataclass
    class Bar:
        i_val: Annotated[int, CopyName("int_value")] = 0
        secret: Annotated[str, CopyExclude()] = ""
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from objectfactory.core.types import FieldType


def normalize_key(name: str) -> str:
    """Normalize an attribute name or alias into its matching key."""
    return name.lower().strip()


@dataclass(frozen=True, slots=True)
class CopyName:
    """Alias under which an attribute is matched across types.

    Use as ``Annotated`` metadata. Blank names are ignored.
    """

    name: str


@dataclass(frozen=True, slots=True)
class CopyExclude:
    """Marks an attribute as never copied, on whichever side declares it."""


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """Type-level exclusion names, already normalized.

    ``either_side`` names apply when the type is the source or the destination,
    ``destination_only`` names only when it is the destination.
    """

    either_side: frozenset[str] = frozenset()
    destination_only: frozenset[str] = frozenset()

    @classmethod
    def of(
        cls, either_side: Iterable[str] = (), destination_only: Iterable[str] = ()
    ) -> ExclusionPolicy:
        return cls(
            either_side=frozenset(normalize_key(n) for n in either_side),
            destination_only=frozenset(normalize_key(n) for n in destination_only),
        )

    def merged(self, other: ExclusionPolicy) -> ExclusionPolicy:
        return ExclusionPolicy(
            either_side=self.either_side | other.either_side,
            destination_only=self.destination_only | other.destination_only,
        )

    def as_destination(self) -> frozenset[str]:
        return self.either_side | self.destination_only

    def as_source(self) -> frozenset[str]:
        return self.either_side


@dataclass(frozen=True, slots=True)
class Attribute:
    """One copyable attribute of a type.

    Args:
        name: Declared attribute name, used for reading and assignment.
        key: Normalized alias-or-name used for matching.
        owner: Most-derived class in the MRO that declares the attribute.
        field_type: Declared type of the attribute.
        alias: Alias text, when one was declared.
        excluded: Whether an exclusion marker is attached.
    """

    name: str
    key: str
    owner: type
    field_type: FieldType
    alias: str | None = None
    excluded: bool = False


@dataclass(frozen=True, slots=True)
class SchemaOverrides:
    """Declarations registered programmatically for one class."""

    aliases: Mapping[str, str] = field(default_factory=dict)
    excluded: frozenset[str] = frozenset()
    policy: ExclusionPolicy = ExclusionPolicy()


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    """Read-only result of every declaration mechanism for one type.

    Attributes are in declaration order (base classes first). ``policy`` is the
    exclusion policy inherited through the MRO, ``object`` excluded.
    """

    type: type
    attributes: tuple[Attribute, ...]
    policy: ExclusionPolicy = ExclusionPolicy()

    def attribute(self, name: str) -> Attribute | None:
        """Look up an attribute by its declared name."""
        return next((a for a in self.attributes if a.name == name), None)
