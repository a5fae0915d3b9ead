"""Container shape preservation.

The codec deserializes into builtin list, set and dict. These helpers put the
result back into the original concrete container classes, level by level.

Usage:
    rebuild_container(deque([1, 2], maxlen=5), [3, 4])   # deque([3, 4], maxlen=5)
    restore_shape(original, codec_output)
"""

from __future__ import annotations

import copy as cp
from collections import OrderedDict, deque
from collections.abc import Callable, Mapping
from typing import Any, Final

from objectfactory.core.types import ContainerKind, container_kind
from objectfactory.observability import log_debug, type_name


def _sorted_dict(items: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(sorted(items.items()))


_KIND_FALLBACKS: Final[dict[ContainerKind, Callable[[Any], Any]]] = {
    ContainerKind.SEQUENCE: list,
    ContainerKind.DEQUE: deque,
    ContainerKind.SET: set,
    ContainerKind.MAP: dict,
    ContainerKind.ORDERED_MAP: OrderedDict,
    ContainerKind.SORTED_MAP: _sorted_dict,
}

_REBUILD_ERRORS: Final = (TypeError, ValueError, AttributeError, cp.Error)


def _populate(container: Any, kind: ContainerKind, items: Any) -> None:
    if kind.is_map:
        container.update(items)
    elif kind is ContainerKind.SET:
        for item in items:
            container.add(item)
    else:
        container.extend(items)


def _reinstantiate(original: Any, kind: ContainerKind, items: Any) -> Any:
    # A shallow copy keeps constructor state (maxlen, default_factory, key order).
    try:
        empty = cp.copy(original)
        if empty is not original:
            empty.clear()
            _populate(empty, kind, items)
            return empty
    except _REBUILD_ERRORS:
        pass
    # Immutable containers only accept their items at construction.
    try:
        return type(original)(items)
    except _REBUILD_ERRORS:
        return None


def rebuild_container(original: Any, items: Any) -> Any:
    """Build a container of the same concrete class as ``original``.

    Args:
        original: Container whose class and constructor state are reused.
        items: New members, a list for sequences and sets, a dict for maps.

    Returns:
        The rebuilt container, or the kind fallback (list, deque, set, dict,
        OrderedDict, key-ordered dict) when the class cannot be rebuilt.

    Raises:
        TypeError: If ``original`` is not a container.
    """
    kind = container_kind(original)
    if kind is None:
        raise TypeError(f"Not a container: {type(original).__qualname__}")
    rebuilt = _reinstantiate(original, kind, items)
    if rebuilt is not None:
        return rebuilt
    log_debug(
        "Container class cannot be rebuilt, using kind fallback",
        container_type=type_name(type(original)),
        kind=kind.name,
    )
    return _KIND_FALLBACKS[kind](items)


def restore_shape(original: Any, cloned: Any) -> Any:
    """Give a codec clone the concrete container classes of its original.

    Sequences are matched by position and maps by key; set members are
    hashable leaves and kept as deserialized.
    """
    kind = container_kind(original)
    if kind is None or container_kind(cloned) is None:
        return cloned
    if kind.is_map:
        items: Any = {
            key: restore_shape(original[key], member) if key in original else member
            for key, member in cloned.items()
        }
    elif kind is ContainerKind.SET:
        items = list(cloned)
    else:
        items = [restore_shape(o, c) for o, c in zip(original, cloned, strict=False)]
    return rebuild_container(original, items)
