"""Stable constants shared across the validation layers."""

from __future__ import annotations

from typing import Final

# Constraint tags emitted by the array core.
CONSTRAINT_MIN_ITEMS: Final[str] = "minItems"
CONSTRAINT_MAX_ITEMS: Final[str] = "maxItems"
CONSTRAINT_UNIQUE_ITEMS: Final[str] = "uniqueItems"
CONSTRAINT_TYPE: Final[str] = "type"
CONSTRAINT_ADDITIONAL_ITEMS: Final[str] = "additionalItems"

# Constraint tags emitted by the recursive engine and type validators.
CONSTRAINT_ENUM: Final[str] = "enum"
CONSTRAINT_REQUIRED: Final[str] = "required"
CONSTRAINT_MIN_LENGTH: Final[str] = "minLength"
CONSTRAINT_MAX_LENGTH: Final[str] = "maxLength"
CONSTRAINT_PATTERN: Final[str] = "pattern"
CONSTRAINT_MINIMUM: Final[str] = "minimum"
CONSTRAINT_MAXIMUM: Final[str] = "maximum"
CONSTRAINT_MULTIPLE_OF: Final[str] = "multipleOf"

ARRAY_CONSTRAINTS: Final[frozenset[str]] = frozenset(
    {
        CONSTRAINT_MIN_ITEMS,
        CONSTRAINT_MAX_ITEMS,
        CONSTRAINT_UNIQUE_ITEMS,
        CONSTRAINT_TYPE,
        CONSTRAINT_ADDITIONAL_ITEMS,
    }
)

# Value kinds. ``integer`` is a refinement of ``number``.
KIND_NULL: Final[str] = "null"
KIND_BOOLEAN: Final[str] = "boolean"
KIND_INTEGER: Final[str] = "integer"
KIND_NUMBER: Final[str] = "number"
KIND_STRING: Final[str] = "string"
KIND_ARRAY: Final[str] = "array"
KIND_OBJECT: Final[str] = "object"
KIND_UNDEFINED: Final[str] = "undefined"
KIND_ANY: Final[str] = "any"

JSON_TYPE_NAMES: Final[tuple[str, ...]] = (
    KIND_NULL,
    KIND_BOOLEAN,
    KIND_INTEGER,
    KIND_NUMBER,
    KIND_STRING,
    KIND_ARRAY,
    KIND_OBJECT,
    KIND_ANY,
)

# Item types eligible for the list-mode primitive fast path.
FAST_PATH_TYPES: Final[frozenset[str]] = frozenset({KIND_STRING, KIND_NUMBER, KIND_INTEGER})

# Tie-break policies for the list-mode additionalItems fallback.
TIE_BREAK_DISCARD_BOTH: Final[str] = "discard_both"
TIE_BREAK_PREFER_ITEMS: Final[str] = "prefer_items"
TIE_BREAK_POLICIES: Final[tuple[str, ...]] = (TIE_BREAK_DISCARD_BOTH, TIE_BREAK_PREFER_ITEMS)

SETTINGS_SCHEMA_VERSION: Final[int] = 1

__all__ = [
    "ARRAY_CONSTRAINTS",
    "CONSTRAINT_ADDITIONAL_ITEMS",
    "CONSTRAINT_ENUM",
    "CONSTRAINT_MAXIMUM",
    "CONSTRAINT_MAX_ITEMS",
    "CONSTRAINT_MAX_LENGTH",
    "CONSTRAINT_MINIMUM",
    "CONSTRAINT_MIN_ITEMS",
    "CONSTRAINT_MIN_LENGTH",
    "CONSTRAINT_MULTIPLE_OF",
    "CONSTRAINT_PATTERN",
    "CONSTRAINT_REQUIRED",
    "CONSTRAINT_TYPE",
    "CONSTRAINT_UNIQUE_ITEMS",
    "FAST_PATH_TYPES",
    "JSON_TYPE_NAMES",
    "KIND_ANY",
    "KIND_ARRAY",
    "KIND_BOOLEAN",
    "KIND_INTEGER",
    "KIND_NULL",
    "KIND_NUMBER",
    "KIND_OBJECT",
    "KIND_STRING",
    "KIND_UNDEFINED",
    "SETTINGS_SCHEMA_VERSION",
    "TIE_BREAK_DISCARD_BOTH",
    "TIE_BREAK_POLICIES",
    "TIE_BREAK_PREFER_ITEMS",
]
