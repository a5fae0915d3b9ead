"""Per-attribute copy decisions.

Usage:
    orchestrator = CopyOrchestrator(proxies, leaf, containers)
    value = orchestrator.resolve_value(source_attr, dest_attr, source)
"""

from __future__ import annotations

from typing import Any

from objectfactory.cloning.containers import ContainerCloner
from objectfactory.cloning.enums import convert_enum
from objectfactory.cloning.leaf import LeafCloner
from objectfactory.cloning.proxy import ProxyHandler
from objectfactory.core.schema.models import Attribute
from objectfactory.core.types import PRIMITIVE_DEFAULTS, FieldType, container_kind
from objectfactory.observability import log_debug, type_name


class CopyOrchestrator:
    """Decides, for one matched pair, what value lands in the destination.

    Args:
        proxies: Proxy handler applied to every source value first.
        leaf: Cloner for non-container values.
        containers: Cloner for sequences, sets and maps.
    """

    def __init__(self, proxies: ProxyHandler, leaf: LeafCloner, containers: ContainerCloner) -> None:
        self._proxies = proxies
        self._leaf = leaf
        self._containers = containers

    def resolve_value(self, source_attr: Attribute, dest_attr: Attribute, source: Any) -> Any:
        """Produce the value to assign for a matched pair.

        Rules, first match wins:
            1. identical declared types: copy_value
            2. wrapper source holding None, matching primitive destination:
               the primitive default
            3. primitive source holding its default, matching wrapper
               destination: None
            4. enum on either side: enum conversion
            5. container on either side (types differ): None, nothing copied
            6. otherwise: copy_value

        Args:
            source_attr: Attribute read from ``source``.
            dest_attr: Attribute the result is assigned to.
            source: Source object.

        Returns:
            Value to assign.

        Raises:
            CopyError: If cloning fails.
        """
        value = self._proxies.resolve(getattr(source, source_attr.name, None))
        source_type, dest_type = source_attr.field_type, dest_attr.field_type

        if source_type.same_as(dest_type):
            return self.copy_value(source_type, dest_type, value)
        if source_type.raw is dest_type.raw:
            if source_type.is_wrapper and dest_type.is_primitive and value is None:
                return PRIMITIVE_DEFAULTS[dest_type.raw]
            if dest_type.is_wrapper and source_type.is_primitive and value == PRIMITIVE_DEFAULTS[source_type.raw]:
                return None
        if source_type.is_enum or dest_type.is_enum:
            return convert_enum(source_type.raw, dest_type.raw, value)
        if source_type.is_container or dest_type.is_container:
            log_debug(
                "Skipping attribute with mismatched container types",
                attribute=source_attr.name,
                source_type=type_name(source_type.raw),
                dest_type=type_name(dest_type.raw),
            )
            return None
        return self.copy_value(source_type, dest_type, value)

    def copy_value(self, source_type: FieldType, dest_type: FieldType, value: Any) -> Any:
        """Copy a value whose declared types are compatible."""
        if source_type.is_primitive or source_type.is_enum:
            return value
        if source_type.is_wrapper:
            return self._leaf.binary_clone(value)
        if source_type.is_container or (source_type.is_unknown and container_kind(value) is not None):
            return self._containers.clone(value, dest_type.hint)
        return self._leaf.clone(value, dest_type.hint)
