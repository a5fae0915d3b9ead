"""Tests for schema declarations: aliases, markers, decorators, and registry."""

import string
from dataclasses import dataclass
from typing import Annotated, Final

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import BaseModel

from objectfactory import CopyError, CopyExclude, CopyName
from objectfactory.core.schema import (
    ExclusionPolicy,
    SchemaRegistry,
    copy_exclusions,
    destination_exclusions,
    normalize_key,
)
from sample_models import Account, AccountDraft, Bar, BarModel, PremiumAccount, WithConstants


@given(name=st.text(alphabet=string.ascii_letters + " _", min_size=1))
def test_normalize_key_ignores_case_and_surrounding_whitespace(name):
    """PROPERTY: keys do not depend on case or surrounding whitespace.

    Why: aliases written as "  FULLNAME " must match an attribute named FullName.
    """
    key = normalize_key(name)

    assert key == normalize_key(name.upper()) == normalize_key(name.swapcase())
    assert key == normalize_key(f"  {name}  ")
    assert normalize_key(key) == key


def test_alias_becomes_attribute_key(registry):
    descriptor = registry.describe(Bar)
    attribute = descriptor.attribute("i_val")

    assert attribute is not None
    assert attribute.alias == "int_value"
    assert attribute.key == "int_value"


def test_blank_alias_is_ignored(registry):
    @dataclass
    class Blank:
        value: Annotated[int, CopyName("   ")] = 0

    attribute = registry.describe(Blank).attribute("value")

    assert attribute.alias is None
    assert attribute.key == "value"


def test_exclusion_marker_is_recorded(registry):
    descriptor = registry.describe(Account)

    assert descriptor.attribute("secret").excluded
    assert not descriptor.attribute("owner").excluded


def test_marker_inside_optional_is_found(registry):
    @dataclass
    class Maybe:
        value: Annotated[int, CopyName("amount")] | None = None

    attribute = registry.describe(Maybe).attribute("value")

    assert attribute.key == "amount"
    assert attribute.field_type.is_wrapper


def test_constants_are_not_attributes(registry):
    """ClassVar and Final declarations are never copied."""

    class Plain:
        LIMIT: Final = 10
        value: int = 0

    assert [a.name for a in registry.describe(WithConstants).attributes] == ["value"]
    assert [a.name for a in registry.describe(Plain).attributes] == ["value"]


def test_attributes_follow_declaration_order_base_first(registry):
    names = [a.name for a in registry.describe(PremiumAccount).attributes]

    assert names == ["account_id", "owner", "audit", "secret", "balance", "tier"]


def test_declaring_class_is_recorded(registry):
    descriptor = registry.describe(PremiumAccount)

    assert descriptor.attribute("owner").owner is Account
    assert descriptor.attribute("tier").owner is PremiumAccount


def test_pydantic_models_use_model_fields(registry):
    descriptor = registry.describe(BarModel)

    assert [a.name for a in descriptor.attributes] == ["i_val", "tags", "address"]
    assert descriptor.attribute("i_val").key == "int_value"


def test_unresolvable_annotation_raises_copy_error(registry):
    @dataclass
    class Broken:
        value: "MissingType" = None  # noqa: F821

    with pytest.raises(CopyError, match="Broken"):
        registry.describe(Broken)


class TestExclusionPolicy:
    def test_decorators_store_normalized_names(self, registry):
        assert registry.policy(Account).either_side == frozenset({"audit"})
        assert registry.policy(AccountDraft).destination_only == frozenset({"account_id"})

    def test_policy_is_inherited(self, registry):
        """Subclasses inherit every ancestor's exclusions.

        Why: a base class declaring an exclusion must not leak the attribute
        through a subclass copy.
        """

        @copy_exclusions("tier")
        @dataclass
        class Gold(PremiumAccount):
            perks: str = ""

        assert registry.policy(Gold).either_side == frozenset({"audit", "tier"})

    def test_subclass_decorator_does_not_affect_base(self, registry):
        @destination_exclusions("OWNER")
        @dataclass
        class Restricted(Account):
            pass

        assert registry.policy(Restricted).destination_only == frozenset({"owner"})
        assert registry.policy(Account).destination_only == frozenset()

    def test_roles(self):
        policy = ExclusionPolicy.of(["A"], ["b"])

        assert policy.as_source() == frozenset({"a"})
        assert policy.as_destination() == frozenset({"a", "b"})


class TestRegistry:
    def test_register_aliases_and_markers(self, registry):
        class External:
            ident: int = 0
            token: str = ""

        registry.register(External, aliases={"ident": "id"}, exclude=["token"])
        descriptor = registry.describe(External)

        assert descriptor.attribute("ident").key == "id"
        assert descriptor.attribute("token").excluded

    def test_register_type_level_exclusions(self, registry):
        class External:
            ident: int = 0

        registry.register(External, exclusions=["Ident"], destination_exclusions=["x"])

        assert registry.policy(External) == ExclusionPolicy(
            either_side=frozenset({"ident"}), destination_only=frozenset({"x"})
        )

    def test_registration_applies_to_subclasses(self, registry):
        class Base:
            ident: int = 0

        class Child(Base):
            extra: int = 0

        registry.register(Base, aliases={"ident": "id"})

        assert registry.describe(Child).attribute("ident").key == "id"

    def test_registry_alias_overrides_annotation(self, registry):
        registry.register(Bar, aliases={"i_val": "number"})

        assert registry.describe(Bar).attribute("i_val").key == "number"

    def test_unregister(self, registry):
        registry.register(Bar, aliases={"i_val": "number"})
        registry.unregister(Bar)

        assert registry.overrides(Bar) is None
        assert registry.describe(Bar).attribute("i_val").key == "int_value"

    def test_registries_are_isolated(self):
        first, second = SchemaRegistry(), SchemaRegistry()
        first.register(Bar, exclude=["name"])

        assert first.describe(Bar).attribute("name").excluded
        assert not second.describe(Bar).attribute("name").excluded


def test_markers_work_on_pydantic_fields(registry):
    class Secretive(BaseModel):
        token: Annotated[str, CopyExclude()] = ""
        value: int = 0

    assert registry.describe(Secretive).attribute("token").excluded
