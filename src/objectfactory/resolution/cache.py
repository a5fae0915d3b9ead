"""Resolution cache for per-type schema work.

Descriptors, key indices and eligible-attribute lists are computed once per
type (or ordered type pair) and reused for the engine's lifetime. Reads are
lock-free; a value computed concurrently by two threads is published once and
the loser's result is discarded.

Usage:
    cache = ResolutionCache()
    schema = cache.schema(Foo, registry.describe)
    cache.clear()
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from objectfactory.core.schema.models import Attribute, SchemaDescriptor

type TypePair = tuple[type, type]


class ResolutionCache:
    """Get-or-compute store shared by every copy an engine performs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._schemas: dict[type, SchemaDescriptor] = {}
        self._field_indexes: dict[type, Mapping[str, Attribute]] = {}
        self._eligible: dict[TypePair, tuple[Attribute, ...]] = {}

    def schema(
        self, cls: type, factory: Callable[[type], SchemaDescriptor]
    ) -> SchemaDescriptor:
        """Schema descriptor of ``cls``, computed by ``factory`` on first use."""
        return self._get_or_compute(self._schemas, cls, factory)

    def field_index(
        self, cls: type, factory: Callable[[type], Mapping[str, Attribute]]
    ) -> Mapping[str, Attribute]:
        """Normalized key to attribute index of ``cls``."""
        return self._get_or_compute(self._field_indexes, cls, factory)

    def eligible_attributes(
        self, pair: TypePair, factory: Callable[[TypePair], tuple[Attribute, ...]]
    ) -> tuple[Attribute, ...]:
        """Source attributes that survive exclusion for a (source, destination) pair."""
        return self._get_or_compute(self._eligible, pair, factory)

    def clear(self) -> None:
        with self._lock:
            self._schemas.clear()
            self._field_indexes.clear()
            self._eligible.clear()

    def __len__(self) -> int:
        return len(self._schemas) + len(self._field_indexes) + len(self._eligible)

    def _get_or_compute[K, V](self, store: dict[K, V], key: K, factory: Callable[[K], V]) -> V:
        cached = store.get(key)
        if cached is not None:
            return cached
        # Computed outside the lock: factories may recurse into this cache.
        value = factory(key)
        with self._lock:
            return store.setdefault(key, value)
