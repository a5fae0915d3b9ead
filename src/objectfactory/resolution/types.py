"""Type resolution: field types, container shapes and instantiation probes.

Usage:
    field_type(int | None)            # FieldType(raw=int, hint=int, nullable=True)
    element_type(list[Foo])           # Foo
    declared_leaf_type(dict[str, list[Foo]])  # Foo
    innermost_leaf_type([[Foo()]])    # Foo
"""

from __future__ import annotations

import dataclasses
import inspect
import types
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    NewType,
    Optional,
    TypeAliasType,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from objectfactory.core.types import (
    ContainerDescriptor,
    ContainerKind,
    FieldType,
    container_kind,
    is_simple_type,
    kind_of_class,
)
from objectfactory.errors import TypeNotInstantiableError

# Builtin containers the codec validates into before shapes are restored.
_CANONICAL: dict[ContainerKind, type] = {
    ContainerKind.SEQUENCE: list,
    ContainerKind.DEQUE: list,
    ContainerKind.SET: set,
    ContainerKind.MAP: dict,
    ContainerKind.ORDERED_MAP: dict,
    ContainerKind.SORTED_MAP: dict,
}


def _is_union(hint: Any) -> bool:
    return get_origin(hint) in (Union, types.UnionType)


def _strip_annotated(hint: Any) -> Any:
    while True:
        if isinstance(hint, TypeAliasType):
            hint = hint.__value__
        elif get_origin(hint) is Annotated:
            hint = get_args(hint)[0]
        else:
            return hint


def strip_optional(hint: Any) -> Any:
    """Drop ``None`` from a two-armed union, returning the remaining arm."""
    if _is_union(hint):
        arms = [arm for arm in get_args(hint) if arm is not types.NoneType]
        if len(arms) == 1:
            return arms[0]
    return hint


def _raw_class(hint: Any) -> type:
    # Any is a class since Python 3.11.
    if hint is Any or isinstance(hint, TypeVar):
        return object
    if isinstance(hint, NewType):
        return _raw_class(hint.__supertype__)
    candidate = get_origin(hint) or hint
    return candidate if isinstance(candidate, type) else object


def field_type(hint: Any) -> FieldType:
    """Resolve a declared type hint into a FieldType.

    Args:
        hint: Type hint as returned by ``typing.get_type_hints``.

    Returns:
        FieldType with ``Annotated`` and ``Optional`` stripped. Unions of
        several types, type variables and ``Any`` resolve to ``object``.
    """
    hint = _strip_annotated(hint)
    nullable = False
    if _is_union(hint):
        arms = get_args(hint)
        present = [arm for arm in arms if arm is not types.NoneType]
        nullable = len(present) < len(arms)
        if len(present) != 1:
            return FieldType(raw=object, hint=hint, nullable=nullable)
        hint = _strip_annotated(present[0])
    if hint is None:
        hint = types.NoneType
    return FieldType(raw=_raw_class(hint), hint=hint, nullable=nullable)


def nested_type(hint: Any, index: int) -> Any:
    """Type argument at ``index`` of a generic hint, ``object`` when absent."""
    args = get_args(field_type(hint).hint)
    if index >= len(args) or args[index] is Any or args[index] is Ellipsis:
        return object
    return args[index]


def element_type(hint: Any) -> type:
    """Element class of a sequence or set hint."""
    return field_type(nested_type(hint, 0)).raw


def value_type(hint: Any) -> type:
    """Value class of a map hint. Keys are never converted."""
    return field_type(nested_type(hint, 1)).raw


def describe_container(hint: Any) -> ContainerDescriptor | None:
    """Decompose a container hint into its kind and element references.

    Args:
        hint: Declared type hint.

    Returns:
        Descriptor, or None when the hint is not a container.
    """
    resolved = field_type(hint)
    kind = kind_of_class(resolved.raw)
    if kind is None:
        return None
    arity = 2 if kind.is_map else 1
    elements = tuple(_element_ref(nested_type(resolved.hint, i)) for i in range(arity))
    return ContainerDescriptor(kind=kind, origin=resolved.raw, elements=elements)


def _element_ref(hint: Any) -> type | ContainerDescriptor:
    return describe_container(hint) or field_type(hint).raw


def declared_leaf_type(hint: Any) -> type:
    """Innermost declared class, following element and value arguments."""
    descriptor = describe_container(hint)
    return descriptor.leaf if descriptor is not None else field_type(hint).raw


def _first_member(value: Any, kind: ContainerKind) -> Any:
    members = value.values() if kind.is_map else value
    return next(iter(members))


def innermost_leaf_type(value: Any) -> type:
    """Runtime counterpart of declared_leaf_type.

    Follows the first element of sequences and sets and the first value of
    maps. Returns ``object`` for None and for empty containers.
    """
    if value is None:
        return object
    kind = container_kind(value)
    if kind is None:
        return type(value)
    if not value:
        return object
    return innermost_leaf_type(_first_member(value, kind))


@lru_cache(maxsize=1024)
def codec_supports(cls: Any) -> bool:
    """Whether a textual codec round trip can rebuild instances of ``cls``.

    True for simple value types, tuples, and dataclasses and pydantic models
    whose declared attribute types are all supported in turn. Other classes
    are copied attribute by attribute instead.
    """
    return _codec_supports(cls, frozenset())


def _codec_supports(cls: Any, seen: frozenset[type]) -> bool:
    if not isinstance(cls, type):
        return False
    if is_simple_type(cls) or issubclass(cls, tuple) or cls in seen:
        return True
    if not (issubclass(cls, BaseModel) or dataclasses.is_dataclass(cls)):
        return False
    hints = _declared_hints(cls)
    if hints is None:
        return False
    seen = seen | {cls}
    return all(_hint_supported(hint, seen) for hint in hints)


def _declared_hints(cls: type) -> list[Any] | None:
    if issubclass(cls, BaseModel):
        return [info.annotation for info in cls.model_fields.values()]
    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError):
        return None
    return [hints[f.name] for f in dataclasses.fields(cls) if f.name in hints]


def _hint_supported(hint: Any, seen: frozenset[type]) -> bool:
    resolved = field_type(hint)
    if resolved.is_unknown:
        # Several arms, or nothing declared: every declared arm must be supported.
        arms = get_args(resolved.hint) if _is_union(resolved.hint) else ()
        return all(_hint_supported(arm, seen) for arm in arms if arm is not types.NoneType)
    if kind_of_class(resolved.raw) is not None or issubclass(resolved.raw, tuple):
        return all(
            _hint_supported(arg, seen) for arg in get_args(resolved.hint) if arg is not Ellipsis
        )
    return _codec_supports(resolved.raw, seen)


def new_instance(cls: Any) -> Any:
    """Instantiate a class with no arguments.

    Args:
        cls: Class to instantiate.

    Returns:
        A fresh instance.

    Raises:
        TypeNotInstantiableError: If ``cls`` is not a class, is abstract or a
            protocol, or its zero-argument call fails.
    """
    if not isinstance(cls, type):
        raise TypeNotInstantiableError(cls, "not a class")
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        raise TypeNotInstantiableError(cls, "abstract type")
    try:
        return cls()
    except Exception as exc:
        raise TypeNotInstantiableError(cls, str(exc)) from exc


def validate_instantiable(hint: Any) -> tuple[type, ...]:
    """Check that every component class of a container hint can be built.

    Simple value types (primitives, strings, enums, ...) are accepted without a
    probe; other components are instantiated once with no arguments.

    Args:
        hint: Container hint.

    Returns:
        The component leaf classes (one, or two for maps).

    Raises:
        TypeNotInstantiableError: If the hint is not a container, a component
            is undeclared, or a probe fails.
    """
    descriptor = describe_container(hint)
    if descriptor is None:
        raise TypeNotInstantiableError(hint, "not a container type")
    components = descriptor.components
    for component in components:
        if component is object:
            raise TypeNotInstantiableError(hint, "element type is not declared")
        if not is_simple_type(component):
            new_instance(component)
    return components


def canonical_hint(hint: Any) -> Any:
    """Rewrite container hints onto builtin list, set and dict.

    Leaf hints are returned unchanged. Concrete container classes are restored
    after deserialization, so the codec only ever sees builtins.
    """
    resolved = field_type(hint)
    kind = kind_of_class(resolved.raw)
    if kind is None:
        return hint
    target = _CANONICAL[kind]
    if kind.is_map:
        key = nested_type(resolved.hint, 0)
        result = target[Any if key is object else key, _member_hint(nested_type(resolved.hint, 1))]
    else:
        result = target[_member_hint(nested_type(resolved.hint, 0))]
    return Optional[result] if resolved.nullable else result


def _member_hint(hint: Any) -> Any:
    # Members may be absent even where the declaration says otherwise.
    if hint is object:
        return Any
    return Optional[canonical_hint(hint)]


def infer_hint(value: Any) -> Any:
    """Derive a builtin generic hint from a runtime value.

    Used when the declared hint cannot drive deserialization. Elements are
    inferred from the first present member; absent members make it Optional.
    """
    if value is None:
        return Any
    kind = container_kind(value)
    if kind is None:
        return type(value)
    target = _CANONICAL[kind]
    if not value:
        return target
    members = list(value.values()) if kind.is_map else list(value)
    present = next((m for m in members if m is not None), None)
    member_hint = infer_hint(present)
    if present is not None and any(m is None for m in members):
        member_hint = Optional[member_hint]
    if kind.is_map:
        return target[type(next(iter(value))), member_hint]
    return target[member_hint]
