"""Tests for field types, container kinds, and container descriptors."""

from collections import Counter, OrderedDict, defaultdict, deque
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from uuid import UUID

import pytest

from objectfactory.core.types import (
    ContainerDescriptor,
    ContainerKind,
    FieldType,
    container_kind,
    is_simple_type,
    kind_of_class,
)
from sample_models import Address, Color


class SortedLike(dict):
    def peekitem(self, index=-1):
        key = sorted(self)[index]
        return key, self[key]


@pytest.mark.parametrize(
    ("cls", "kind"),
    [
        (list, ContainerKind.SEQUENCE),
        (deque, ContainerKind.DEQUE),
        (set, ContainerKind.SET),
        (frozenset, ContainerKind.SET),
        (dict, ContainerKind.MAP),
        (defaultdict, ContainerKind.MAP),
        (Counter, ContainerKind.MAP),
        (MappingProxyType, ContainerKind.MAP),
        (OrderedDict, ContainerKind.ORDERED_MAP),
        (SortedLike, ContainerKind.SORTED_MAP),
    ],
)
def test_container_kinds(cls, kind):
    assert kind_of_class(cls) is kind


@pytest.mark.parametrize("cls", [str, bytes, bytearray, tuple, range, int, Address, object])
def test_leaf_classes_are_not_containers(cls):
    """Strings, bytes and tuples are single values, not containers."""
    assert kind_of_class(cls) is None


def test_container_kind_of_values():
    assert container_kind([1]) is ContainerKind.SEQUENCE
    assert container_kind({"a": 1}.keys()) is ContainerKind.SET
    assert container_kind((1, 2)) is None
    assert container_kind(None) is None


def test_map_kinds():
    assert ContainerKind.ORDERED_MAP.is_map
    assert ContainerKind.SORTED_MAP.is_map
    assert not ContainerKind.DEQUE.is_map


@pytest.mark.parametrize(
    "cls", [int, bool, float, str, bytes, Decimal, datetime, UUID, Color, type(None)]
)
def test_simple_types(cls):
    assert is_simple_type(cls)


@pytest.mark.parametrize("cls", [Address, list, dict, object, "int"])
def test_non_simple_types(cls):
    assert not is_simple_type(cls)


class TestFieldType:
    def test_primitive_and_wrapper(self):
        primitive = FieldType(raw=int, hint=int)
        wrapper = FieldType(raw=int, hint=int, nullable=True)

        assert primitive.is_primitive and not primitive.is_wrapper
        assert wrapper.is_wrapper and not wrapper.is_primitive

    def test_nullable_class_is_not_a_wrapper(self):
        """Only primitives have a wrapper form."""
        assert not FieldType(raw=str, hint=str, nullable=True).is_wrapper

    def test_identity_compares_raw_class_and_wrapper_form(self):
        """Why: list[Foo] and list[Bar] are identical types (erased generics)."""
        assert FieldType(raw=list, hint=list[int]).same_as(FieldType(raw=list, hint=list[str]))
        assert FieldType(raw=Address, hint=Address, nullable=True).same_as(
            FieldType(raw=Address, hint=Address)
        )
        assert not FieldType(raw=int, hint=int).same_as(FieldType(raw=int, hint=int, nullable=True))
        assert not FieldType(raw=int, hint=int).same_as(FieldType(raw=float, hint=float))

    def test_flags(self):
        assert FieldType(raw=Color, hint=Color).is_enum
        assert FieldType(raw=dict, hint=dict[str, int]).is_container
        assert FieldType(raw=object, hint=object).is_unknown


def test_descriptor_leaf_and_components():
    inner = ContainerDescriptor(kind=ContainerKind.SEQUENCE, origin=list, elements=(Address,))
    outer = ContainerDescriptor(kind=ContainerKind.MAP, origin=dict, elements=(str, inner))

    assert outer.leaf is Address
    assert outer.components == (str, Address)
