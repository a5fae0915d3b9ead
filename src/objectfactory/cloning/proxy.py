"""Proxy transparency: never copy a lazy-loading proxy itself.

Usage:
    handler = ProxyHandler(default_proxy_subsystem())
    value = handler.resolve(getattr(source, "children"))
"""

from __future__ import annotations

from itertools import chain
from typing import Any

from objectfactory.adapters.protocol import ProxySubsystem
from objectfactory.cloning.shapes import rebuild_container
from objectfactory.core.types import container_kind
from objectfactory.observability import log_debug, type_name
from objectfactory.resolution.types import new_instance


class ProxyHandler:
    """Replaces proxies, alone or inside containers, by real objects.

    Loaded proxies become their target. Unloaded proxies become a default
    instance of their backing type, so copying never triggers a load; when
    the backing type is unknown the proxy is loaded instead. Containers are
    rebuilt only when they hold a proxy.

    Args:
        subsystem: Proxy library adapter. An unavailable one disables the handler.
    """

    def __init__(self, subsystem: ProxySubsystem) -> None:
        self._subsystem = subsystem

    @property
    def enabled(self) -> bool:
        return self._subsystem.available()

    def resolve(self, value: Any) -> Any:
        if value is None or not self.enabled:
            return value
        return self._resolve(value)

    def _resolve(self, value: Any) -> Any:
        if self._subsystem.is_proxy(value):
            return self._unproxy(value)
        kind = container_kind(value)
        if kind is None or not self._contains_proxy(value):
            return value
        if kind.is_map:
            return rebuild_container(
                value, {self._resolve(k): self._resolve(v) for k, v in value.items()}
            )
        return rebuild_container(value, [self._resolve(item) for item in value])

    def _contains_proxy(self, value: Any) -> bool:
        if self._subsystem.is_proxy(value):
            return True
        kind = container_kind(value)
        if kind is None:
            return False
        members = chain(value.keys(), value.values()) if kind.is_map else value
        return any(self._contains_proxy(member) for member in members)

    def _unproxy(self, proxy: Any) -> Any:
        if self._subsystem.is_uninitialized(proxy):
            backing = self._subsystem.backing_type(proxy)
            if backing is not None:
                log_debug("Replacing unloaded proxy by a default instance", backing_type=type_name(backing))
                return new_instance(backing)
        return self._subsystem.materialize(proxy)
