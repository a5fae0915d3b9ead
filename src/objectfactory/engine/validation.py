"""Input validation for the public copy operations.

Every check runs before anything is read or written.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Any

from objectfactory.errors import ErrorMessages, InvalidInputError


def verify_source(source: Any) -> None:
    if source is None:
        raise InvalidInputError(ErrorMessages.SOURCE_OBJECT_NONE)


def verify_source_and_destination(source: Any, destination: Any) -> None:
    verify_source(source)
    if destination is None:
        raise InvalidInputError(ErrorMessages.DESTINATION_OBJECT_NONE)


def verify_collection(items: Collection[Any] | None) -> None:
    if not items:
        raise InvalidInputError(ErrorMessages.COLLECTION_EMPTY)


def verify_collection_and_factory(
    items: Collection[Any] | None, factory: Callable[..., Any] | None
) -> None:
    verify_collection(items)
    if factory is None:
        raise InvalidInputError(ErrorMessages.FACTORY_NONE)
