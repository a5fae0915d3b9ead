"""Field resolution: which attributes are copied, and into what.

Usage:
    resolver = FieldResolver(ResolutionCache(), get_registry())
    for source_attr, dest_attr in resolver.matched_pairs(foo, bar):
        ...
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from objectfactory.core.schema.models import Attribute, SchemaDescriptor
from objectfactory.errors import DuplicateAttributeKeyWarning
from objectfactory.observability import log_debug, type_name
from objectfactory.resolution.cache import ResolutionCache, TypePair

if TYPE_CHECKING:
    from objectfactory.core.schema.core import SchemaRegistry

type MatchedPair = tuple[Attribute, Attribute]


def build_key_index(attributes: Iterable[Attribute], owner: type) -> dict[str, Attribute]:
    """Index attributes by normalized key; the first declared attribute wins.

    Args:
        attributes: Attributes in declaration order.
        owner: Type the attributes belong to, named in the warning.

    Returns:
        Mapping of key to attribute.
    """
    index: dict[str, Attribute] = {}
    for attribute in attributes:
        kept = index.setdefault(attribute.key, attribute)
        if kept is not attribute:
            warnings.warn(
                f"Duplicate attribute key '{attribute.key}' in {owner.__qualname__}: "
                f"keeping '{kept.name}', ignoring '{attribute.name}'",
                DuplicateAttributeKeyWarning,
                stacklevel=2,
            )
    return index


class FieldResolver:
    """Matches source attributes to destination attributes by normalized key.

    Args:
        cache: Cache holding descriptors, indices and eligible attributes.
        registry: Registry that builds schema descriptors.
    """

    def __init__(self, cache: ResolutionCache, registry: SchemaRegistry) -> None:
        self._cache = cache
        self._registry = registry

    def schema(self, cls: type) -> SchemaDescriptor:
        return self._cache.schema(cls, self._registry.describe)

    def field_index(self, cls: type) -> Mapping[str, Attribute]:
        return self._cache.field_index(cls, self._build_index)

    def eligible_attributes(self, source_type: type, dest_type: type) -> tuple[Attribute, ...]:
        return self._cache.eligible_attributes((source_type, dest_type), self._compute_eligible)

    def matched_pairs(self, source: Any, destination: Any) -> list[MatchedPair]:
        """Pair every eligible source attribute with the destination attribute
        sharing its key.

        Args:
            source: Object read from.
            destination: Object written into.

        Returns:
            Pairs in source declaration order. Empty when nothing matches.
        """
        source_type, dest_type = type(source), type(destination)
        eligible = self.eligible_attributes(source_type, dest_type)
        if not eligible:
            return []
        dest_index = self.field_index(dest_type)
        return [(a, dest_index[a.key]) for a in eligible if a.key in dest_index]

    def _build_index(self, cls: type) -> Mapping[str, Attribute]:
        return build_key_index(self.schema(cls).attributes, cls)

    def _compute_eligible(self, pair: TypePair) -> tuple[Attribute, ...]:
        source_type, dest_type = pair
        source_schema = self.schema(source_type)
        dest_schema = self.schema(dest_type)
        candidates = source_schema.attributes

        listed = dest_schema.policy.as_destination() | source_schema.policy.as_source()
        candidate_keys = {a.key for a in candidates}
        for name in sorted(listed - candidate_keys):
            log_debug(
                "Exclusion name matches no source attribute",
                name=name,
                source_type=type_name(source_type),
                dest_type=type_name(dest_type),
            )
        dest_marked = {a.key for a in dest_schema.attributes if a.excluded}

        remaining = [
            a
            for a in candidates
            if a.key not in listed and not a.excluded and a.key not in dest_marked
        ]
        # Keys are claimed only by attributes that survived exclusion.
        return tuple(build_key_index(remaining, source_type).values())
