"""External integration adapters.

Provides protocols and implementations for:
- Codec: structural serialization used for deep copies
- ProxySubsystem: lazy-loading proxy detection and materialization

Usage:
    from objectfactory.adapters import PydanticCodec, default_proxy_subsystem

    # Proxy support requires the optional dependency
    from objectfactory.adapters.lazy_proxy import LazyObjectProxySubsystem  # pip install objectfactory[proxy]
"""

from objectfactory.adapters.lazy_proxy import (
    LAZY_OBJECT_PROXY_AVAILABLE,
    LazyObjectProxySubsystem,
    NullProxySubsystem,
    default_proxy_subsystem,
)
from objectfactory.adapters.protocol import Codec, ProxySubsystem
from objectfactory.adapters.pydantic_codec import PydanticCodec

__all__ = [
    # Protocols
    "Codec",
    "ProxySubsystem",
    # Implementations
    "PydanticCodec",
    "NullProxySubsystem",
    "LazyObjectProxySubsystem",
    "default_proxy_subsystem",
    "LAZY_OBJECT_PROXY_AVAILABLE",
]
