"""Container cloning driven by declared element types.

A container whose runtime elements already match the declared element type
is cloned in one structural codec pass. Otherwise elements are converted one
by one through the leaf cloner, and nested containers recurse one level down.
Map keys are carried through unchanged.

Usage:
    cloner = ContainerCloner(PydanticCodec(), leaf)
    cloner.clone([Foo(1)], list[Foo])        # structural copy
    cloner.clone([Foo(1)], list[Bar])        # per-element conversion
    cloner.clone([[Foo(1)]], list[list[Bar]])
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from objectfactory.adapters.protocol import Codec
from objectfactory.cloning.leaf import LeafCloner
from objectfactory.cloning.shapes import rebuild_container, restore_shape
from objectfactory.core.types import ContainerKind, container_kind
from objectfactory.errors import ConversionError, CopyError, ErrorMessages, TypeNotInstantiableError
from objectfactory.observability import log_debug, type_name
from objectfactory.resolution.types import (
    canonical_hint,
    codec_supports,
    declared_leaf_type,
    element_type,
    infer_hint,
    innermost_leaf_type,
    nested_type,
    validate_instantiable,
    value_type,
)


class ContainerCloner:
    """Clones sequences, sets and maps.

    Args:
        codec: Codec for structural passes.
        leaf: Cloner for non-container elements.
    """

    def __init__(self, codec: Codec, leaf: LeafCloner) -> None:
        self._codec = codec
        self._leaf = leaf

    def clone(self, value: Any, dest_hint: Any) -> Any:
        """Clone a container for a destination declared as ``dest_hint``.

        Args:
            value: Container to clone. Non-containers go to the leaf cloner.
            dest_hint: Declared destination hint, e.g. ``list[Bar]``.

        Returns:
            A new container of the same concrete class as ``value``.

        Raises:
            CopyError: If any element cannot be cloned.
        """
        if value is None:
            return None
        kind = container_kind(value)
        if kind is None:
            return self._leaf.clone(value, dest_hint)
        try:
            if not value:
                return rebuild_container(value, {} if kind.is_map else [])
            return self._clone_populated(value, kind, dest_hint)
        except CopyError:
            raise
        except Exception as exc:
            raise ConversionError(ErrorMessages.CLONE_CONTAINER_ERROR) from exc

    def _clone_populated(self, value: Any, kind: ContainerKind, hint: Any) -> Any:
        members = list(value.values()) if kind.is_map else list(value)
        member_hint = nested_type(hint, 1 if kind.is_map else 0)
        first = next((m for m in members if m is not None), None)
        if first is None:
            return self._convert_members(value, kind, lambda item: None)

        if container_kind(first) is not None:
            target = declared_leaf_type(member_hint)
            actual = innermost_leaf_type(first)
            if (
                (target is object or actual is target)
                and codec_supports(actual)
                and not kind.is_map
                and not _holds_map(members)
            ):
                return self._structural(value, kind, hint)
            return self._convert_members(value, kind, lambda item: self.clone(item, member_hint))

        target = value_type(hint) if kind.is_map else element_type(hint)
        if (target is object or type(first) is target) and codec_supports(type(first)):
            return self._structural(value, kind, hint)
        return self._convert_members(value, kind, lambda item: self._leaf.clone(item, member_hint))

    def _structural(self, value: Any, kind: ContainerKind, hint: Any) -> Any:
        if not kind.is_map:
            return restore_shape(value, self._round_trip(value, hint))
        # Only values travel through the codec; keys are reattached as they are.
        originals = list(value.values())
        cloned = self._round_trip(originals, list[nested_type(hint, 1)])
        restored = [restore_shape(o, c) for o, c in zip(originals, cloned, strict=True)]
        return rebuild_container(value, dict(zip(value, restored, strict=True)))

    def _round_trip(self, value: Any, hint: Any) -> Any:
        text = self._codec.serialize_text(value)
        try:
            validate_instantiable(hint)
            codec_hint = canonical_hint(hint)
        except TypeNotInstantiableError as exc:
            log_debug(
                "Declared element type unusable, inferring from runtime elements",
                hint=type_name(hint),
                reason=str(exc),
            )
            codec_hint = infer_hint(value)
        return self._codec.deserialize_text(text, codec_hint)

    def _convert_members(
        self, value: Any, kind: ContainerKind, convert: Callable[[Any], Any]
    ) -> Any:
        if kind.is_map:
            return rebuild_container(value, {key: convert(item) for key, item in value.items()})
        return rebuild_container(value, [convert(item) for item in value])


def _holds_map(members: list[Any]) -> bool:
    for member in members:
        kind = container_kind(member)
        if kind is None:
            continue
        if kind.is_map or _holds_map(list(member)):
            return True
    return False
