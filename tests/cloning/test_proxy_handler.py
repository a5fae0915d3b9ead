"""Tests for proxy transparency."""

from dataclasses import dataclass

import pytest

from objectfactory import NullProxySubsystem, ProxySubsystem
from objectfactory.cloning import ProxyHandler
from sample_models import Address


@dataclass
class FakeProxy:
    target: object = None
    backing: type | None = None
    loaded: bool = True


class FakeProxySubsystem:
    def __init__(self):
        self.materialized = []

    def available(self):
        return True

    def is_proxy(self, value):
        return isinstance(value, FakeProxy)

    def is_uninitialized(self, proxy):
        return not proxy.loaded

    def materialize(self, proxy):
        self.materialized.append(proxy)
        return proxy.target

    def backing_type(self, proxy):
        return proxy.backing


@pytest.fixture
def subsystem():
    return FakeProxySubsystem()


@pytest.fixture
def handler(subsystem):
    return ProxyHandler(subsystem)


def test_fake_subsystem_satisfies_protocol(subsystem):
    assert isinstance(subsystem, ProxySubsystem)


def test_loaded_proxy_is_replaced_by_target(handler):
    target = Address("Main", 1)

    assert handler.resolve(FakeProxy(target=target)) is target


def test_unloaded_proxy_becomes_default_instance_without_loading(handler, subsystem):
    """CRITICAL: copying an unloaded proxy must not load it.

    Why: loading may hit a database per proxied object.
    """
    resolved = handler.resolve(FakeProxy(target=Address("X"), backing=Address, loaded=False))

    assert resolved == Address()
    assert subsystem.materialized == []


def test_unloaded_proxy_of_unknown_type_is_loaded(handler, subsystem):
    proxy = FakeProxy(target=Address("X"), loaded=False)

    assert handler.resolve(proxy) == Address("X")
    assert subsystem.materialized == [proxy]


def test_proxies_inside_containers_are_replaced(handler):
    original = {"a": [FakeProxy(target=Address("a")), Address("b")]}

    resolved = handler.resolve(original)

    assert resolved == {"a": [Address("a"), Address("b")]}
    assert resolved is not original


def test_containers_without_proxies_are_returned_as_is(handler):
    original = [Address("a"), [Address("b")]]

    assert handler.resolve(original) is original


def test_plain_values_pass_through(handler):
    value = Address("a")

    assert handler.resolve(value) is value
    assert handler.resolve(None) is None


def test_unavailable_subsystem_disables_handler():
    handler = ProxyHandler(NullProxySubsystem())
    proxy = FakeProxy(target=Address("a"))

    assert not handler.enabled
    assert handler.resolve(proxy) is proxy
