"""Copy failure hierarchy and user-facing messages.

Every failure the engine raises is a CopyError, so callers can catch a single
type. The subclasses only exist to tell the failure causes apart in tests and
logs.

Usage:
    from objectfactory import CopyError, copy_to

    try:
        dto = copy_to(entity, EntityDTO)
    except CopyError as exc:
        ...
"""

from __future__ import annotations


class ErrorMessages:
    """Stable messages for invalid-input failures."""

    SOURCE_OBJECT_NONE = "The object to be copied is None."
    DESTINATION_OBJECT_NONE = "The destination object is None."
    COLLECTION_EMPTY = "The collection to be copied has no elements."
    FACTORY_NONE = "The specified collection factory for the result is None."
    CLONE_CONTAINER_ERROR = "Error cloning collection/map during object copy."


class CopyError(RuntimeError):
    """Base type for every failure raised while copying an object graph."""


class InvalidInputError(CopyError):
    """Raised at the public entry points before anything is mutated."""


class TypeNotInstantiableError(CopyError):
    """Raised when a type cannot be built with a zero-argument call.

    Args:
        type_: The offending type (or type hint).
        reason: Optional detail appended to the message.
    """

    def __init__(self, type_: object, reason: str | None = None) -> None:
        name = getattr(type_, "__qualname__", None) or repr(type_)
        message = f"Type {name} cannot be instantiated without arguments"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.type = type_


class ConversionError(CopyError):
    """Raised when a value cannot be serialized, deserialized or converted."""


class DuplicateAttributeKeyWarning(UserWarning):
    """Two attributes of one type normalize to the same copy key."""
