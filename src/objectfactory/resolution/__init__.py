"""Resolution functionality: type resolution, field matching, and caching."""

from objectfactory.resolution.types import (
    canonical_hint,
    codec_supports,
    declared_leaf_type,
    describe_container,
    element_type,
    field_type,
    infer_hint,
    innermost_leaf_type,
    nested_type,
    new_instance,
    strip_optional,
    validate_instantiable,
    value_type,
)
from objectfactory.resolution.cache import ResolutionCache
from objectfactory.resolution.fields import FieldResolver, MatchedPair, build_key_index

__all__ = [
    # Types
    "canonical_hint",
    "codec_supports",
    "declared_leaf_type",
    "describe_container",
    "element_type",
    "field_type",
    "infer_hint",
    "innermost_leaf_type",
    "nested_type",
    "new_instance",
    "strip_optional",
    "validate_instantiable",
    "value_type",
    # Fields
    "FieldResolver",
    "MatchedPair",
    "build_key_index",
    # Cache
    "ResolutionCache",
]
