"""Schema registry and declaration decorators.

Three declaration mechanisms feed one SchemaDescriptor per type:
``Annotated`` markers on attributes, class decorators, and the registry
builder API for classes you cannot edit.

Usage:
    @copy_exclusions("audit_log")
    @dataclass
    class Order:
        order_id: int = 0
        audit_log: list[str] = field(default_factory=list)

    @destination_exclusions("order_id")
    @dataclass
    class OrderDraft:
        order_id: int = 0

    get_registry().register(ThirdPartyModel, aliases={"ident": "id"})
"""

from __future__ import annotations

import dataclasses
import inspect
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Annotated, Any, ClassVar, Final, TypeVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from objectfactory.core.schema.models import (
    Attribute,
    CopyExclude,
    CopyName,
    ExclusionPolicy,
    SchemaDescriptor,
    SchemaOverrides,
    normalize_key,
)
from objectfactory.errors import CopyError
from objectfactory.resolution.types import field_type, strip_optional

T = TypeVar("T", bound=type)

_EITHER_SIDE_ATTR: Final = "__copy_exclusions__"
_DESTINATION_ONLY_ATTR: Final = "__destination_exclusions__"


def copy_exclusions(*names: str) -> Callable[[T], T]:
    """Exclude attributes whenever the decorated class is source or destination.

    Names are matched against normalized attribute keys (alias or name) and
    are inherited by subclasses.

    Args:
        *names: Attribute names or aliases to exclude.

    Returns:
        Class decorator.
    """

    def decorator(cls: T) -> T:
        setattr(cls, _EITHER_SIDE_ATTR, frozenset(normalize_key(n) for n in names))
        return cls

    return decorator


def destination_exclusions(*names: str) -> Callable[[T], T]:
    """Exclude attributes only when the decorated class is the destination.

    Args:
        *names: Attribute names or aliases never written into this class.

    Returns:
        Class decorator.
    """

    def decorator(cls: T) -> T:
        setattr(cls, _DESTINATION_ONLY_ATTR, frozenset(normalize_key(n) for n in names))
        return cls

    return decorator


def _is_constant(hint: Any) -> bool:
    if hint is ClassVar or hint is Final or isinstance(hint, dataclasses.InitVar):
        return True
    origin = get_origin(hint)
    if origin is Annotated:
        return _is_constant(get_args(hint)[0])
    return origin is ClassVar or origin is Final


def _markers(hint: Any) -> tuple[str | None, bool]:
    """Extract (alias, excluded) from Annotated metadata, looking through Optional."""
    alias: str | None = None
    excluded = False
    for candidate in (hint, strip_optional(hint)):
        if get_origin(candidate) is not Annotated:
            continue
        for meta in candidate.__metadata__:
            if isinstance(meta, CopyName) and meta.name.strip():
                alias = meta.name
            elif isinstance(meta, CopyExclude):
                excluded = True
    return alias, excluded


def _declaring_class(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass):
            return klass
    return cls


def _attribute_hints(cls: type) -> dict[str, Any]:
    """Resolved hints of the copyable attributes, in declaration order."""
    if issubclass(cls, BaseModel):
        # pydantic moves non-pydantic Annotated metadata onto the field info
        return {
            name: Annotated[info.annotation, *info.metadata] if info.metadata else info.annotation
            for name, info in cls.model_fields.items()
        }
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        raise CopyError(f"Cannot resolve attribute types of {cls.__qualname__}: {exc}") from exc
    return {name: hint for name, hint in hints.items() if not _is_constant(hint)}


def _lineage(cls: type) -> list[type]:
    return [klass for klass in cls.__mro__ if klass is not object]


class SchemaRegistry:
    """Process-local store of programmatic declarations and schema builder.

    Registrations are expected at import time. Engines cache descriptors, so a
    registration made after a type was first copied only takes effect once the
    engine cache is cleared.
    """

    def __init__(self) -> None:
        self._overrides: dict[type, SchemaOverrides] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        *,
        aliases: Mapping[str, str] | None = None,
        exclude: Iterable[str] = (),
        exclusions: Iterable[str] = (),
        destination_exclusions: Iterable[str] = (),
    ) -> SchemaOverrides:
        """Declare aliases and exclusions for a class without editing it.

        Args:
            cls: Class the declarations apply to (and its subclasses).
            aliases: Attribute name to alias.
            exclude: Attribute names carrying an exclusion marker.
            exclusions: Type-level names excluded on either side.
            destination_exclusions: Type-level names excluded when ``cls`` is
                the destination.

        Returns:
            The stored declarations, replacing any earlier ones for ``cls``.
        """
        overrides = SchemaOverrides(
            aliases=dict(aliases or {}),
            excluded=frozenset(exclude),
            policy=ExclusionPolicy.of(exclusions, destination_exclusions),
        )
        with self._lock:
            self._overrides[cls] = overrides
        return overrides

    def unregister(self, cls: type) -> None:
        with self._lock:
            self._overrides.pop(cls, None)

    def overrides(self, cls: type) -> SchemaOverrides | None:
        return self._overrides.get(cls)

    def policy(self, cls: type) -> ExclusionPolicy:
        """Exclusion policy of ``cls`` merged with every ancestor's."""
        policy = ExclusionPolicy()
        for klass in _lineage(cls):
            own = vars(klass)
            policy = policy.merged(
                ExclusionPolicy(
                    either_side=own.get(_EITHER_SIDE_ATTR, frozenset()),
                    destination_only=own.get(_DESTINATION_ONLY_ATTR, frozenset()),
                )
            )
            overrides = self._overrides.get(klass)
            if overrides is not None:
                policy = policy.merged(overrides.policy)
        return policy

    def describe(self, cls: type) -> SchemaDescriptor:
        """Build the schema descriptor of a class.

        Args:
            cls: Class to describe.

        Returns:
            Descriptor with attributes in declaration order, base classes first.

        Raises:
            CopyError: If the class annotations cannot be resolved.
        """
        hints = _attribute_hints(cls)

        aliases: dict[str, str] = {}
        excluded: set[str] = set()
        for klass in reversed(_lineage(cls)):
            overrides = self._overrides.get(klass)
            if overrides is not None:
                aliases.update(overrides.aliases)
                excluded |= overrides.excluded

        attributes = []
        for name, hint in hints.items():
            alias, marked = _markers(hint)
            alias = aliases.get(name, alias)
            attributes.append(
                Attribute(
                    name=name,
                    key=normalize_key(alias or name),
                    owner=_declaring_class(cls, name),
                    field_type=field_type(hint),
                    alias=alias,
                    excluded=marked or name in excluded,
                )
            )
        return SchemaDescriptor(type=cls, attributes=tuple(attributes), policy=self.policy(cls))


# Module-level registry instance
_registry = SchemaRegistry()


def get_registry() -> SchemaRegistry:
    """Access the global schema registry.

    Returns:
        The process-local SchemaRegistry instance.
    """
    return _registry
