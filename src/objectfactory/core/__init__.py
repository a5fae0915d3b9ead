"""Core functionalities: stateless type models and declarations.

Architecture Note:
    core/ holds the data model (field types, container descriptors, schema
    descriptors) and the declaration mechanisms that populate it. Resolution
    logic lives in resolution/, copying logic in cloning/ and engine/.
"""

from objectfactory.core.types import (
    PRIMITIVE_DEFAULTS,
    ContainerDescriptor,
    ContainerKind,
    Copy,
    FieldType,
    container_kind,
    is_simple_type,
    kind_of_class,
)
from objectfactory.core.schema import (
    Attribute,
    CopyExclude,
    CopyName,
    ExclusionPolicy,
    SchemaDescriptor,
    SchemaRegistry,
    copy_exclusions,
    destination_exclusions,
    get_registry,
    normalize_key,
)

__all__ = [
    # Types
    "Copy",
    "PRIMITIVE_DEFAULTS",
    "ContainerDescriptor",
    "ContainerKind",
    "FieldType",
    "container_kind",
    "is_simple_type",
    "kind_of_class",
    # Schema
    "Attribute",
    "CopyExclude",
    "CopyName",
    "ExclusionPolicy",
    "SchemaDescriptor",
    "SchemaRegistry",
    "copy_exclusions",
    "destination_exclusions",
    "get_registry",
    "normalize_key",
]
