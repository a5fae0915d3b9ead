"""Tests for the container cloner."""

from collections import OrderedDict, deque
from typing import Any

import pytest

from objectfactory import ConversionError, ErrorMessages, PydanticCodec
from objectfactory.cloning import ContainerCloner, LeafCloner
from sample_models import Address, Bar, Color, Foo, Point, Required


@pytest.fixture
def cloner(engine):
    codec = PydanticCodec()
    return ContainerCloner(codec, LeafCloner(codec, convert=engine.copy_to))


class TestStructuralCopies:
    def test_matching_elements_are_deep_copied(self, cloner):
        original = [Foo(int_value=1, tags=["x"]), Foo(int_value=2)]

        clone = cloner.clone(original, list[Foo])

        assert clone == original
        assert all(c is not o for c, o in zip(clone, original, strict=True))
        assert clone[0].tags is not original[0].tags

    def test_simple_elements(self, cloner):
        assert cloner.clone({1, 2, 3}, set[int]) == {1, 2, 3}
        assert cloner.clone([Color.RED], list[Color]) == [Color.RED]

    def test_concrete_container_classes_are_kept(self, cloner):
        original = OrderedDict(b=deque([Address("b")]), a=deque([Address("a")]))

        clone = cloner.clone(original, OrderedDict[str, deque[Address]])

        assert type(clone) is OrderedDict
        assert list(clone) == ["b", "a"]
        assert type(clone["b"]) is deque
        assert clone["b"][0] == Address("b")
        assert clone["b"][0] is not original["b"][0]

    def test_map_keys_are_carried_through(self, cloner):
        clone = cloner.clone({1: Foo(int_value=1), 2: Foo(int_value=2)}, dict[int, Foo])

        assert set(clone) == {1, 2}
        assert clone[2].int_value == 2

    def test_map_keys_are_never_serialized(self, cloner):
        original = {(0, 1): Address("a"), frozenset({2}): Address("b")}

        clone = cloner.clone(original, dict[Any, Address])

        assert clone == original
        assert all(clone[key] is not original[key] for key in original)

    def test_absent_members_are_kept(self, cloner):
        assert cloner.clone([None, Address("x")], list[Address]) == [None, Address("x")]
        assert cloner.clone([None, None], list[Address]) == [None, None]

    def test_undeclared_element_type_is_inferred(self, cloner):
        original = [Address("x")]

        clone = cloner.clone(original, list)

        assert clone == original
        assert clone[0] is not original[0]

    def test_non_instantiable_element_type_falls_back_to_runtime_type(self, cloner):
        """Why: a class without a zero-argument constructor still deserializes
        from its full serialized form.
        """
        original = [Required(1), Required(2)]

        clone = cloner.clone(original, list[Required])

        assert clone == original
        assert clone[0] is not original[0]


class TestEmptyContainers:
    @pytest.mark.parametrize(
        ("original", "hint"),
        [([], list[Foo]), (set(), set[int]), ({}, dict[str, Foo]), (deque(maxlen=2), deque[Foo])],
    )
    def test_empty_gives_empty_of_same_class(self, cloner, original, hint):
        clone = cloner.clone(original, hint)

        assert clone == original
        assert type(clone) is type(original)
        assert clone is not original


class TestConversions:
    def test_elements_are_converted_one_by_one(self, cloner):
        bars = cloner.clone([Foo(int_value=1), Foo(int_value=2)], list[Bar])

        assert [type(b) for b in bars] == [Bar, Bar]
        assert [b.i_val for b in bars] == [1, 2]

    def test_map_values_are_converted(self, cloner):
        bars = cloner.clone({"a": Foo(int_value=1)}, dict[str, Bar])

        assert bars["a"] == Bar(i_val=1)

    def test_nested_containers_convert_at_the_leaves(self, cloner):
        original = [[[Foo(int_value=1)], []], [[Foo(int_value=2), Foo(int_value=3)]]]

        grid = cloner.clone(original, list[list[list[Bar]]])

        assert [[[b.i_val for b in row] for row in plane] for plane in grid] == [[[1], []], [[2, 3]]]
        assert isinstance(grid[1][0][1], Bar)

    def test_nested_maps_convert_at_the_leaves(self, cloner):
        original = {"x": {"y": [Foo(int_value=7)]}}

        converted = cloner.clone(original, dict[str, dict[str, list[Bar]]])

        assert converted == {"x": {"y": [Bar(i_val=7)]}}

    def test_plain_class_elements_are_copied_individually(self, cloner):
        original = [Point(1, 2)]

        clone = cloner.clone(original, list[Point])

        assert clone == original
        assert clone[0] is not original[0]


def test_failures_carry_the_container_message(cloner):
    with pytest.raises(ConversionError, match=ErrorMessages.CLONE_CONTAINER_ERROR):
        cloner.clone([Address(street=Point(1, 2))], list[Address])


def test_non_containers_go_to_the_leaf_cloner(cloner):
    assert cloner.clone(Address("x"), Address) == Address("x")
    assert cloner.clone(None, list[Foo]) is None
