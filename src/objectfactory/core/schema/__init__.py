"""Schema functionality: declaration markers, decorators, and registry."""

from objectfactory.core.schema.core import (
    SchemaRegistry,
    copy_exclusions,
    destination_exclusions,
    get_registry,
)
from objectfactory.core.schema.models import (
    Attribute,
    CopyExclude,
    CopyName,
    ExclusionPolicy,
    SchemaDescriptor,
    SchemaOverrides,
    normalize_key,
)

__all__ = [
    # Models
    "Attribute",
    "CopyExclude",
    "CopyName",
    "ExclusionPolicy",
    "SchemaDescriptor",
    "SchemaOverrides",
    "normalize_key",
    # Registry
    "SchemaRegistry",
    "get_registry",
    # Decorators
    "copy_exclusions",
    "destination_exclusions",
]
