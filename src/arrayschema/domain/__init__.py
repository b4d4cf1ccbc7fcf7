"""
arrayschema domain types.

Purpose
- Pointers, structured errors and the pre-parsed schema node tree shared by
  the engine and the array constraint.
- Keep this layer free of IO and logging side effects.
"""

from arrayschema.domain.errors import (
    ErrorCollector,
    ErrorSet,
    SchemaShapeError,
    SchemaValidationError,
    ValidationError,
    ValidationResult,
)
from arrayschema.domain.pointer import ROOT, JsonPointer, Segment
from arrayschema.domain.schema import (
    EMPTY_SCHEMA,
    FORBIDDEN,
    PERMISSIVE,
    AdditionalItems,
    AdditionalSchema,
    Forbidden,
    ItemsSpec,
    ListItems,
    Permissive,
    SchemaNode,
    TupleItems,
)

__all__ = [
    "EMPTY_SCHEMA",
    "FORBIDDEN",
    "PERMISSIVE",
    "ROOT",
    "AdditionalItems",
    "AdditionalSchema",
    "ErrorCollector",
    "ErrorSet",
    "Forbidden",
    "ItemsSpec",
    "JsonPointer",
    "ListItems",
    "Permissive",
    "SchemaNode",
    "SchemaShapeError",
    "SchemaValidationError",
    "Segment",
    "TupleItems",
    "ValidationError",
    "ValidationResult",
]
