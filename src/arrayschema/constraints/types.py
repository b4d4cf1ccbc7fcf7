"""Value-kind classification and the reusable primitive type validators."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import ClassVar, Final

from arrayschema.constants import (
    CONSTRAINT_MAX_LENGTH,
    CONSTRAINT_MAXIMUM,
    CONSTRAINT_MIN_LENGTH,
    CONSTRAINT_MINIMUM,
    CONSTRAINT_MULTIPLE_OF,
    CONSTRAINT_PATTERN,
    KIND_ANY,
    KIND_ARRAY,
    KIND_BOOLEAN,
    KIND_INTEGER,
    KIND_NULL,
    KIND_NUMBER,
    KIND_OBJECT,
    KIND_STRING,
    KIND_UNDEFINED,
)
from arrayschema.domain.errors import ErrorCollector, ErrorSet
from arrayschema.domain.pointer import JsonPointer
from arrayschema.domain.schema import SchemaNode

_MULTIPLE_OF_TOLERANCE: Final[float] = 1e-9


class Undefined:
    """Placeholder for a structurally absent value (e.g. a missing tuple slot)."""

    __slots__ = ()
    _instance: ClassVar[Undefined | None] = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final[Undefined] = Undefined()


def kind_of(value: object) -> str:
    """Return the JSON kind of ``value``; integers are reported as ``integer``."""

    if value is UNDEFINED:
        return KIND_UNDEFINED
    if value is None:
        return KIND_NULL
    if isinstance(value, bool):
        return KIND_BOOLEAN
    if isinstance(value, int):
        return KIND_INTEGER
    if isinstance(value, float):
        return KIND_NUMBER
    if isinstance(value, str):
        return KIND_STRING
    if isinstance(value, (list, tuple)):
        return KIND_ARRAY
    if isinstance(value, Mapping):
        return KIND_OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def matches_type(value: object, type_name: str) -> bool:
    if type_name == KIND_ANY:
        return True
    kind = kind_of(value)
    if type_name == KIND_NUMBER:
        return kind in (KIND_INTEGER, KIND_NUMBER)
    return kind == type_name


def describe_kind(value: object) -> str:
    """Capitalized kind label used in ``type`` messages (``"String"``)."""

    return kind_of(value).capitalize()


def type_mismatch_message(value: object, expected: str) -> str:
    return f"{describe_kind(value)} value found, but {expected} is required"


class TypeValidator:
    """Checks the keywords of one primitive type and batches its own errors.

    The type match itself is the caller's responsibility; ``check`` assumes the
    value already has the right kind. One instance may be reused for many
    values, and ``errors`` returns everything accumulated so far.
    """

    type_name: ClassVar[str] = ""

    def __init__(self) -> None:
        self._errors = ErrorCollector()

    def check(self, value: object, schema: SchemaNode, pointer: JsonPointer) -> None:
        raise NotImplementedError

    @property
    def errors(self) -> ErrorSet:
        return self._errors.items()


class StringValidator(TypeValidator):
    type_name = KIND_STRING

    def check(self, value: object, schema: SchemaNode, pointer: JsonPointer) -> None:
        if not isinstance(value, str):
            return
        length = len(value)
        if schema.min_length is not None and length < schema.min_length:
            self._errors.add(
                pointer,
                f"Must be at least {schema.min_length} characters long",
                CONSTRAINT_MIN_LENGTH,
                {"minLength": schema.min_length},
            )
        if schema.max_length is not None and length > schema.max_length:
            self._errors.add(
                pointer,
                f"Must be at most {schema.max_length} characters long",
                CONSTRAINT_MAX_LENGTH,
                {"maxLength": schema.max_length},
            )
        if schema.pattern is not None and schema.pattern.search(value) is None:
            self._errors.add(
                pointer,
                f"Does not match the regex pattern {schema.pattern.pattern}",
                CONSTRAINT_PATTERN,
                {"pattern": schema.pattern.pattern},
            )


class NumberValidator(TypeValidator):
    """Numeric range and ``multipleOf`` checks; also serves ``integer``."""

    type_name = KIND_NUMBER

    def check(self, value: object, schema: SchemaNode, pointer: JsonPointer) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return
        if schema.minimum is not None:
            if schema.exclusive_minimum and value <= schema.minimum:
                self._errors.add(
                    pointer,
                    f"Must have a minimum value greater than {schema.minimum}",
                    CONSTRAINT_MINIMUM,
                    {"minimum": schema.minimum, "exclusiveMinimum": True},
                )
            elif not schema.exclusive_minimum and value < schema.minimum:
                self._errors.add(
                    pointer,
                    f"Must have a minimum value of {schema.minimum}",
                    CONSTRAINT_MINIMUM,
                    {"minimum": schema.minimum},
                )
        if schema.maximum is not None:
            if schema.exclusive_maximum and value >= schema.maximum:
                self._errors.add(
                    pointer,
                    f"Must have a maximum value less than {schema.maximum}",
                    CONSTRAINT_MAXIMUM,
                    {"maximum": schema.maximum, "exclusiveMaximum": True},
                )
            elif not schema.exclusive_maximum and value > schema.maximum:
                self._errors.add(
                    pointer,
                    f"Must have a maximum value of {schema.maximum}",
                    CONSTRAINT_MAXIMUM,
                    {"maximum": schema.maximum},
                )
        if schema.multiple_of is not None and not _is_multiple(value, schema.multiple_of):
            self._errors.add(
                pointer,
                f"Is not a multiple of {schema.multiple_of}",
                CONSTRAINT_MULTIPLE_OF,
                {"multipleOf": schema.multiple_of},
            )


def _is_multiple(value: int | float, divisor: int | float) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    if not math.isfinite(value):
        return False
    quotient = value / divisor
    return abs(quotient - round(quotient)) <= _MULTIPLE_OF_TOLERANCE


__all__ = [
    "UNDEFINED",
    "NumberValidator",
    "StringValidator",
    "TypeValidator",
    "Undefined",
    "describe_kind",
    "kind_of",
    "matches_type",
    "type_mismatch_message",
]
