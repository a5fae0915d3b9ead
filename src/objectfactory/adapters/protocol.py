"""Adapter protocols for the engine's external collaborators.

Defines interfaces for the Codec (structural serialization) and the
ProxySubsystem (lazy-loading proxies of an external library).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Codec(Protocol):
    """Protocol for the serializer that performs structural deep copies.

    A textual round trip against a type hint rebuilds a whole object graph;
    a binary round trip clones a value of any picklable type as is.

    Usage:
        codec: Codec = PydanticCodec()
        clone = codec.deserialize_text(codec.serialize_text(value), list[Foo])
    """

    def serialize_text(self, value: Any) -> str:
        """Serialize a value into its textual form.

        Args:
            value: Object graph to serialize.

        Returns:
            Textual representation.
        """
        ...

    def deserialize_text(self, text: str, hint: Any) -> Any:
        """Rebuild a value of the hinted type from its textual form.

        Args:
            text: Output of serialize_text.
            hint: Type hint the result is validated against.

        Returns:
            A new object graph.
        """
        ...

    def serialize_bytes(self, value: Any) -> bytes:
        """Serialize a value into bytes, preserving its exact type."""
        ...

    def deserialize_bytes(self, data: bytes) -> Any:
        """Rebuild a value from serialize_bytes output."""
        ...


@runtime_checkable
class ProxySubsystem(Protocol):
    """Protocol for lazy-loading proxy libraries.

    When ``available()`` is False the engine never calls the other methods.
    """

    def available(self) -> bool:
        """Whether the backing library is importable."""
        ...

    def is_proxy(self, value: Any) -> bool:
        """Whether ``value`` is a proxy object of this subsystem."""
        ...

    def is_uninitialized(self, proxy: Any) -> bool:
        """Whether the proxy's target has not been loaded yet."""
        ...

    def materialize(self, proxy: Any) -> Any:
        """Load (if needed) and return the proxied object."""
        ...

    def backing_type(self, proxy: Any) -> type | None:
        """Class the proxy stands for, None when it cannot be told without loading."""
        ...
