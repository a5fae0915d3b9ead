"""objectfactory: deep copies and conversions between object graphs.

Usage:
    from dataclasses import dataclass
    from typing import Annotated
    from objectfactory import CopyName, copy, copy_to

    @dataclass
    class Foo:
        int_value: int = 0
        tags: list[str] | None = None

    @dataclass
    class Bar:
        i_val: Annotated[int, CopyName("int_value")] = 0
        tags: list[str] | None = None

    clone = copy(Foo(1, ["a"]))        # independent deep copy
    bar = copy_to(Foo(1, ["a"]), Bar)  # Bar(i_val=1, tags=["a"])
"""

__version__ = "0.1.0"

# Core declarations (imported first: schema resolution depends on them)
from objectfactory.core import (
    Copy,
    CopyExclude,
    CopyName,
    SchemaDescriptor,
    SchemaRegistry,
    copy_exclusions,
    destination_exclusions,
    get_registry,
)

# Adapters
from objectfactory.adapters import (
    Codec,
    LazyObjectProxySubsystem,
    NullProxySubsystem,
    ProxySubsystem,
    PydanticCodec,
)

# Configuration
from objectfactory.config import CopySettings

# Engine and operations
from objectfactory.engine import (
    CopyEngine,
    copy,
    copy_all,
    copy_all_with,
    copy_into,
    copy_to,
    get_engine,
)

# Errors
from objectfactory.errors import (
    ConversionError,
    CopyError,
    DuplicateAttributeKeyWarning,
    ErrorMessages,
    InvalidInputError,
    TypeNotInstantiableError,
)

# Resolution
from objectfactory.resolution import ResolutionCache

__all__ = [
    # Version
    "__version__",
    # Operations
    "copy",
    "copy_to",
    "copy_into",
    "copy_all",
    "copy_all_with",
    "CopyEngine",
    "get_engine",
    # Declarations
    "Copy",
    "CopyName",
    "CopyExclude",
    "copy_exclusions",
    "destination_exclusions",
    "SchemaDescriptor",
    "SchemaRegistry",
    "get_registry",
    # Collaborators
    "Codec",
    "PydanticCodec",
    "ProxySubsystem",
    "NullProxySubsystem",
    "LazyObjectProxySubsystem",
    "ResolutionCache",
    "CopySettings",
    # Errors
    "CopyError",
    "InvalidInputError",
    "TypeNotInstantiableError",
    "ConversionError",
    "DuplicateAttributeKeyWarning",
    "ErrorMessages",
]
