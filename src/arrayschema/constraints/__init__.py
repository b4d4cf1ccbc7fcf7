"""
arrayschema constraint layer.

Purpose
- Value-kind classification, primitive type validators and the factory that
  hands them out, canonical equality, and the array (collection) constraint.
"""

from arrayschema.constraints.canonical import canonical_key, has_duplicates, json_equal
from arrayschema.constraints.collection import (
    CollectionConstraint,
    RecursiveValidator,
    resolve_fallback,
)
from arrayschema.constraints.factory import TypeFactory, UnknownTypeError
from arrayschema.constraints.types import (
    UNDEFINED,
    NumberValidator,
    StringValidator,
    TypeValidator,
    Undefined,
    describe_kind,
    kind_of,
    matches_type,
    type_mismatch_message,
)

__all__ = [
    "UNDEFINED",
    "CollectionConstraint",
    "NumberValidator",
    "RecursiveValidator",
    "StringValidator",
    "TypeFactory",
    "TypeValidator",
    "Undefined",
    "UnknownTypeError",
    "canonical_key",
    "describe_kind",
    "has_duplicates",
    "json_equal",
    "kind_of",
    "matches_type",
    "resolve_fallback",
    "type_mismatch_message",
]
