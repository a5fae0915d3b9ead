"""Module-level copy operations backed by a process-wide default engine.

Usage:
    from objectfactory import copy, copy_to

    clone = copy(foo)
    bar = copy_to(foo, Bar)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Collection
from typing import Any, TypeVar

from objectfactory.core.types import Copy
from objectfactory.engine.core import CopyEngine

T = TypeVar("T")
R = TypeVar("R")

# Module-level engine instance, created on first use
_engine: CopyEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> CopyEngine:
    """Access the default copy engine.

    Returns:
        The process-wide CopyEngine, configured from the environment.
    """
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = CopyEngine()
    return _engine


def copy(source: T) -> Copy[T]:
    """Deep copy ``source`` into a new instance of its own type."""
    return get_engine().copy(source)


def copy_to(source: Any, destination_type: type[T]) -> T:
    """Copy ``source`` into a new instance of ``destination_type``."""
    return get_engine().copy_to(source, destination_type)


def copy_into(source: Any, destination: Any) -> None:
    """Overwrite the attributes of ``destination`` that match ``source``."""
    get_engine().copy_into(source, destination)


def copy_all(items: Collection[Any], destination_type: type[T] | None = None) -> list[T]:
    """Copy every item, into ``destination_type`` or each item's own type."""
    return get_engine().copy_all(items, destination_type)


def copy_all_with(
    items: Collection[Any],
    factory: Callable[[list[Any]], R],
    destination_type: type | None = None,
) -> R:
    """Copy every item and collect the copies with ``factory``."""
    return get_engine().copy_all_with(items, factory, destination_type)
