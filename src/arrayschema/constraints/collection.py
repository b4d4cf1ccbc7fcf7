"""
arrayschema — array (collection) constraint.

File: src/arrayschema/constraints/collection.py

Purpose
- Validate an array value against ``minItems``, ``maxItems``, ``uniqueItems``,
  ``items`` and ``additionalItems``.

Behavior
- Size and uniqueness checks are independent of each other and of ``items``;
  every present keyword is evaluated and every violation is reported.
- ``items`` as a single schema selects list mode, as an array of schemas
  selects tuple mode. The shape is resolved when the schema node is built.
- List mode has a primitive fast path (shared type validator, errors merged
  once after the loop) and a general path that may retry a failing element
  against ``additionalItems`` and keep whichever outcome ``resolve_fallback``
  selects.
- Tuple mode checks positions by index, applies the ``additionalItems`` policy
  past the tuple arity, and checks omitted trailing positions of a non-empty
  array with the undefined placeholder.

Non-functional requirements
- No shared mutable state: errors go to the caller's collector, retry attempts
  are disposable error sets, the fast-path validator lives for one array.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final, Protocol

from arrayschema.config.schema import ValidatorSettings
from arrayschema.constants import (
    CONSTRAINT_ADDITIONAL_ITEMS,
    CONSTRAINT_MAX_ITEMS,
    CONSTRAINT_MIN_ITEMS,
    CONSTRAINT_TYPE,
    CONSTRAINT_UNIQUE_ITEMS,
    FAST_PATH_TYPES,
    KIND_UNDEFINED,
    TIE_BREAK_DISCARD_BOTH,
)
from arrayschema.constraints.canonical import has_duplicates
from arrayschema.constraints.factory import TypeFactory
from arrayschema.constraints.types import kind_of, matches_type, type_mismatch_message
from arrayschema.domain.errors import ErrorCollector, ErrorSet
from arrayschema.domain.pointer import JsonPointer
from arrayschema.domain.schema import (
    AdditionalSchema,
    Forbidden,
    ListItems,
    SchemaNode,
    TupleItems,
)

_LOGGER = logging.getLogger("arrayschema.constraints.collection")

# Item-schema keywords the shared type validator cannot honor; their presence
# sends list mode down the general path.
_FAST_PATH_BLOCKING_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "enum",
        "required",
        "properties",
        "items",
        "additionalItems",
        "minItems",
        "maxItems",
        "uniqueItems",
    }
)


class RecursiveValidator(Protocol):
    """The engine entry point the array constraint delegates elements to."""

    def validate(
        self,
        value: object,
        schema: SchemaNode,
        pointer: JsonPointer,
        *,
        context_index: str | None = None,
    ) -> ErrorSet: ...


def resolve_fallback(
    primary: ErrorSet,
    fallback: ErrorSet | None,
    *,
    tie_break: str = TIE_BREAK_DISCARD_BOTH,
) -> ErrorSet:
    """Pick the errors kept for one list element.

    ``primary`` are the errors against ``items``; ``fallback`` those against
    ``additionalItems`` (``None`` when no retry happened). Fewer fallback
    errors win. Equal counts discard both under ``discard_both`` and keep the
    primary errors under ``prefer_items``. More fallback errors keep primary.
    """

    if fallback is None:
        return primary
    if len(fallback) < len(primary):
        return fallback
    if len(fallback) == len(primary):
        return () if tie_break == TIE_BREAK_DISCARD_BOTH else primary
    return primary


class CollectionConstraint:
    """Array validation against one schema node."""

    __slots__ = ("_factory", "_settings", "_validator")

    def __init__(
        self,
        validator: RecursiveValidator,
        factory: TypeFactory,
        settings: ValidatorSettings | None = None,
    ) -> None:
        self._validator = validator
        self._factory = factory
        self._settings = settings if settings is not None else ValidatorSettings()

    def check(
        self,
        value: Sequence[object],
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
        context_index: str | None = None,
    ) -> None:
        size = len(value)

        if schema.min_items is not None and size < schema.min_items:
            errors.add(
                pointer,
                f"There must be a minimum of {schema.min_items} items in the array",
                CONSTRAINT_MIN_ITEMS,
                {"minItems": schema.min_items},
            )

        if schema.max_items is not None and size > schema.max_items:
            errors.add(
                pointer,
                f"There must be a maximum of {schema.max_items} items in the array",
                CONSTRAINT_MAX_ITEMS,
                {"maxItems": schema.max_items},
            )

        if schema.unique_items and has_duplicates(value):
            errors.add(
                pointer,
                "There are no duplicates allowed in the array",
                CONSTRAINT_UNIQUE_ITEMS,
            )

        if schema.items is not None:
            self._validate_items(value, schema, pointer, errors, context_index)

    def _validate_items(
        self,
        value: Sequence[object],
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
        context_index: str | None,
    ) -> None:
        items = schema.items
        if isinstance(items, ListItems):
            fast_type = self._fast_path_type(items.schema, schema)
            if fast_type is not None:
                _LOGGER.debug("list items: fast path", extra={"pointer": str(pointer)})
                self._validate_list_fast(value, items.schema, fast_type, pointer, errors)
            else:
                _LOGGER.debug("list items: general path", extra={"pointer": str(pointer)})
                self._validate_list_general(value, items.schema, schema, pointer, errors)
        elif isinstance(items, TupleItems):
            _LOGGER.debug(
                "tuple items",
                extra={"pointer": str(pointer), "arity": items.arity, "length": len(value)},
            )
            self._validate_tuple(value, items, schema, pointer, errors, context_index)

    def _fast_path_type(self, item_schema: SchemaNode, schema: SchemaNode) -> str | None:
        item_type = item_schema.type
        if not self._settings.primitive_fast_path:
            return None
        if not isinstance(item_type, str) or item_type not in FAST_PATH_TYPES:
            return None
        if schema.has_additional_items:
            return None
        if not _FAST_PATH_BLOCKING_KEYWORDS.isdisjoint(item_schema.raw):
            return None
        return item_type

    def _validate_list_fast(
        self,
        value: Sequence[object],
        item_schema: SchemaNode,
        expected: str,
        pointer: JsonPointer,
        errors: ErrorCollector,
    ) -> None:
        type_validator = self._factory.instance_for(expected)

        for index, element in enumerate(value):
            element_pointer = pointer.append(index)
            if not matches_type(element, expected):
                errors.add(
                    element_pointer,
                    type_mismatch_message(element, expected),
                    CONSTRAINT_TYPE,
                    {"found": kind_of(element), "expected": expected},
                )
            else:
                type_validator.check(element, item_schema, element_pointer)

        errors.extend(type_validator.errors)

    def _validate_list_general(
        self,
        value: Sequence[object],
        item_schema: SchemaNode,
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
    ) -> None:
        additional = schema.additional_items
        for index, element in enumerate(value):
            element_pointer = pointer.append(index)
            label = str(index)
            primary = self._validator.validate(
                element, item_schema, element_pointer, context_index=label
            )

            fallback: ErrorSet | None = None
            if primary and isinstance(additional, AdditionalSchema):
                fallback = self._validator.validate(
                    element, additional.schema, element_pointer, context_index=label
                )

            kept = resolve_fallback(primary, fallback, tie_break=self._settings.tie_break)
            if fallback is not None:
                _LOGGER.debug(
                    "additionalItems fallback resolved",
                    extra={
                        "pointer": str(element_pointer),
                        "primary_errors": len(primary),
                        "fallback_errors": len(fallback),
                        "kept_errors": len(kept),
                    },
                )
            errors.extend(kept)

    def _validate_tuple(
        self,
        value: Sequence[object],
        items: TupleItems,
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
        context_index: str | None,
    ) -> None:
        additional = schema.additional_items
        arity = items.arity

        for index, element in enumerate(value):
            element_pointer = pointer.append(index)
            if index < arity:
                errors.extend(
                    self._validator.validate(
                        element, items.schemas[index], element_pointer, context_index=str(index)
                    )
                )
            elif isinstance(additional, AdditionalSchema):
                errors.extend(
                    self._validator.validate(
                        element, additional.schema, element_pointer, context_index=str(index)
                    )
                )
            elif isinstance(additional, Forbidden):
                errors.add(
                    pointer,
                    f"The item {context_index or ''}[{index}] is not defined and the "
                    "definition does not allow additional items",
                    CONSTRAINT_ADDITIONAL_ITEMS,
                    {"additionalItems": False},
                )

        # Omitted trailing positions; an empty array is left to minItems.
        if value and arity > len(value):
            placeholder = self._factory.instance_for(KIND_UNDEFINED)
            for index in range(len(value), arity):
                errors.extend(
                    self._validator.validate(
                        placeholder,
                        items.schemas[index],
                        pointer.append(index),
                        context_index=str(index),
                    )
                )


__all__ = ["CollectionConstraint", "RecursiveValidator", "resolve_fallback"]
