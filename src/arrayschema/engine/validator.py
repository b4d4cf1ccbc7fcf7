"""
arrayschema — recursive validator.

File: src/arrayschema/engine/validator.py

Purpose
- Validate one value against one schema node at one pointer and recurse into
  object properties; arrays are handed to ``CollectionConstraint``.

Behavior
- The undefined placeholder only answers to draft-3 ``required: true``.
- Otherwise ``type``, ``enum`` and the kind-specific keywords are all
  evaluated; a failing keyword never hides another one.
- Errors are appended to the caller's collector in evaluation order.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Final

from arrayschema.config.schema import ValidatorSettings
from arrayschema.constants import (
    CONSTRAINT_ENUM,
    CONSTRAINT_REQUIRED,
    CONSTRAINT_TYPE,
    KIND_INTEGER,
    KIND_NUMBER,
    KIND_STRING,
)
from arrayschema.constraints.canonical import json_equal
from arrayschema.constraints.collection import CollectionConstraint
from arrayschema.constraints.factory import TypeFactory
from arrayschema.constraints.types import UNDEFINED, kind_of, matches_type, type_mismatch_message
from arrayschema.domain.errors import ErrorCollector, ErrorSet
from arrayschema.domain.pointer import ROOT, JsonPointer
from arrayschema.domain.schema import SchemaNode

# Value kinds whose keywords are checked by a factory-provided type validator.
_PRIMITIVE_VALIDATOR_NAMES: Final[Mapping[str, str]] = {
    KIND_STRING: KIND_STRING,
    KIND_NUMBER: KIND_NUMBER,
    KIND_INTEGER: KIND_NUMBER,
}


class Validator:
    """Recursive validator over the supported keyword set.

    Instances hold no per-call state and can be reused for any number of
    documents; ``check`` is re-entrant.
    """

    __slots__ = ("_collection", "_factory", "_settings")

    def __init__(
        self,
        factory: TypeFactory | None = None,
        settings: ValidatorSettings | None = None,
    ) -> None:
        self._factory = factory if factory is not None else TypeFactory()
        self._settings = settings if settings is not None else ValidatorSettings()
        self._collection = CollectionConstraint(self, self._factory, self._settings)

    @property
    def settings(self) -> ValidatorSettings:
        return self._settings

    @property
    def factory(self) -> TypeFactory:
        return self._factory

    def validate(
        self,
        value: object,
        schema: SchemaNode,
        pointer: JsonPointer = ROOT,
        *,
        context_index: str | None = None,
    ) -> ErrorSet:
        """Validate into a fresh collector and return its errors."""

        errors = ErrorCollector()
        self.check(value, schema, pointer, errors, context_index)
        return errors.items()

    def check(
        self,
        value: object,
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
        context_index: str | None = None,
    ) -> None:
        """Append every violation of ``value`` against ``schema`` to ``errors``."""

        if value is UNDEFINED:
            if schema.required_flag:
                errors.add(pointer, "Is missing and it is required", CONSTRAINT_REQUIRED)
            return

        kind = kind_of(value)
        self._check_type(value, kind, schema, pointer, errors)
        self._check_enum(value, schema, pointer, errors)

        validator_name = _PRIMITIVE_VALIDATOR_NAMES.get(kind)
        if validator_name is not None:
            type_validator = self._factory.instance_for(validator_name)
            type_validator.check(value, schema, pointer)
            errors.extend(type_validator.errors)
        elif isinstance(value, (list, tuple)):
            self._collection.check(value, schema, pointer, errors, context_index)
        elif isinstance(value, Mapping):
            self._check_object(value, schema, pointer, errors)

    def _check_type(
        self,
        value: object,
        kind: str,
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
    ) -> None:
        names = schema.type_names
        if not names or any(matches_type(value, name) for name in names):
            return
        expected = " or ".join(names)
        errors.add(
            pointer,
            type_mismatch_message(value, expected),
            CONSTRAINT_TYPE,
            {"found": kind, "expected": expected},
        )

    def _check_enum(
        self, value: object, schema: SchemaNode, pointer: JsonPointer, errors: ErrorCollector
    ) -> None:
        if schema.enum is None:
            return
        if any(json_equal(value, choice) for choice in schema.enum):
            return
        rendered = json.dumps(list(schema.enum), ensure_ascii=False, default=str)
        errors.add(
            pointer,
            f"Does not have a value in the enumeration {rendered}",
            CONSTRAINT_ENUM,
            {"choices": list(schema.enum)},
        )

    def _check_object(
        self,
        value: Mapping[object, object],
        schema: SchemaNode,
        pointer: JsonPointer,
        errors: ErrorCollector,
    ) -> None:
        for name, property_schema in schema.properties.items():
            self.check(
                value.get(name, UNDEFINED),
                property_schema,
                pointer.append(name),
                errors,
                context_index=name,
            )
        for name in schema.required_properties:
            if name not in value:
                errors.add(
                    pointer,
                    f"The property {name} is required",
                    CONSTRAINT_REQUIRED,
                    {"property": name},
                )


__all__ = ["Validator"]
