"""Proxy subsystems: lazy-object-proxy support and the null fallback.

Requires the optional ``lazy-object-proxy`` distribution for proxy support:
pip install objectfactory[proxy]

Usage:
    subsystem = default_proxy_subsystem()
    if subsystem.available() and subsystem.is_proxy(value):
        value = subsystem.materialize(value)
"""

from __future__ import annotations

from typing import Any, get_type_hints

# Optional lazy-object-proxy import for proxy transparency
try:
    import lazy_object_proxy

    LAZY_OBJECT_PROXY_AVAILABLE = True
except ImportError:
    LAZY_OBJECT_PROXY_AVAILABLE = False


class NullProxySubsystem:
    """Subsystem used when no proxy library is installed. Never sees a proxy."""

    def available(self) -> bool:
        return False

    def is_proxy(self, value: Any) -> bool:
        return False

    def is_uninitialized(self, proxy: Any) -> bool:
        return False

    def materialize(self, proxy: Any) -> Any:
        return proxy

    def backing_type(self, proxy: Any) -> type | None:
        return None


class LazyObjectProxySubsystem:
    """ProxySubsystem over ``lazy_object_proxy.Proxy``.

    A proxy is uninitialized until its factory has run. The backing type is
    the factory itself when it is a class, otherwise the factory's return
    annotation; the factory is never called to find it.

    Raises:
        ImportError: On construction, if lazy-object-proxy is not installed.
    """

    def __init__(self) -> None:
        if not LAZY_OBJECT_PROXY_AVAILABLE:
            msg = "Proxy support requires lazy-object-proxy. Install with: pip install objectfactory[proxy]"
            raise ImportError(msg)

    def available(self) -> bool:
        return LAZY_OBJECT_PROXY_AVAILABLE

    def is_proxy(self, value: Any) -> bool:
        return isinstance(value, lazy_object_proxy.Proxy)

    def is_uninitialized(self, proxy: Any) -> bool:
        return not proxy.__resolved__

    def materialize(self, proxy: Any) -> Any:
        return proxy.__wrapped__

    def backing_type(self, proxy: Any) -> type | None:
        factory = proxy.__factory__
        if isinstance(factory, type):
            return factory
        try:
            hints = get_type_hints(factory)
        except (NameError, TypeError, AttributeError):
            return None
        returned = hints.get("return")
        return returned if isinstance(returned, type) else None


def default_proxy_subsystem() -> LazyObjectProxySubsystem | NullProxySubsystem:
    """Pick the lazy-object-proxy subsystem when the library is importable."""
    if LAZY_OBJECT_PROXY_AVAILABLE:
        return LazyObjectProxySubsystem()
    return NullProxySubsystem()
