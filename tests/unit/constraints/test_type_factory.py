"""
arrayschema — unit tests for value kinds, type validators and the type factory

File: tests/unit/constraints/test_type_factory.py
"""

from __future__ import annotations

import pytest

from arrayschema.constraints.factory import TypeFactory, UnknownTypeError
from arrayschema.constraints.types import (
    UNDEFINED,
    NumberValidator,
    StringValidator,
    TypeValidator,
    Undefined,
    kind_of,
    matches_type,
    type_mismatch_message,
)
from arrayschema.domain.pointer import JsonPointer
from arrayschema.domain.schema import SchemaNode


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, "null"),
        (True, "boolean"),
        (3, "integer"),
        (3.0, "number"),
        ("x", "string"),
        ([1], "array"),
        ((1,), "array"),
        ({"a": 1}, "object"),
        (UNDEFINED, "undefined"),
    ],
)
def test_kind_of_classifies_json_values(value: object, kind: str) -> None:
    assert kind_of(value) == kind


@pytest.mark.unit
def test_kind_of_rejects_non_json_values() -> None:
    with pytest.raises(TypeError, match="not a JSON value"):
        kind_of(object())


@pytest.mark.unit
def test_matches_type_treats_integer_as_number_but_not_bool() -> None:
    assert matches_type(1, "number")
    assert matches_type(1.5, "number")
    assert matches_type(1, "integer")
    assert not matches_type(1.0, "integer")
    assert not matches_type(True, "integer")
    assert matches_type(True, "any")


@pytest.mark.unit
def test_type_mismatch_message_names_found_and_required() -> None:
    assert type_mismatch_message("3", "integer") == "String value found, but integer is required"
    assert type_mismatch_message(None, "string") == "Null value found, but string is required"


@pytest.mark.unit
def test_undefined_is_a_singleton() -> None:
    assert Undefined() is UNDEFINED
    assert repr(UNDEFINED) == "UNDEFINED"


@pytest.mark.unit
def test_factory_returns_fresh_validators_per_call() -> None:
    factory = TypeFactory()

    first = factory.instance_for("string")
    second = factory.instance_for("string")

    assert isinstance(first, StringValidator)
    assert first is not second


@pytest.mark.unit
def test_factory_maps_integer_onto_number_validator() -> None:
    assert isinstance(TypeFactory().instance_for("integer"), NumberValidator)


@pytest.mark.unit
def test_factory_returns_placeholder_for_undefined() -> None:
    factory = TypeFactory()

    assert factory.instance_for("undefined") is UNDEFINED
    assert factory.has("undefined")


@pytest.mark.unit
def test_factory_rejects_unknown_types() -> None:
    with pytest.raises(UnknownTypeError, match="'boolean'"):
        TypeFactory().instance_for("boolean")


@pytest.mark.unit
def test_factory_register_custom_validator() -> None:
    class BooleanValidator(TypeValidator):
        type_name = "boolean"

        def check(self, value: object, schema: SchemaNode, pointer: JsonPointer) -> None:
            return None

    factory = TypeFactory()
    factory.register("boolean", BooleanValidator)

    assert factory.has("boolean")
    assert isinstance(factory.instance_for("boolean"), BooleanValidator)
    assert not TypeFactory().has("boolean")


@pytest.mark.unit
def test_factory_register_guards_reserved_and_invalid_entries() -> None:
    factory = TypeFactory()

    with pytest.raises(ValueError, match="reserved"):
        factory.register("undefined", StringValidator)
    with pytest.raises(ValueError, match="must not be empty"):
        factory.register("  ", StringValidator)
    with pytest.raises(TypeError):
        factory.register("thing", dict)  # type: ignore[arg-type]


@pytest.mark.unit
def test_string_validator_accumulates_errors_across_values() -> None:
    schema = SchemaNode.from_mapping({"minLength": 2, "maxLength": 3, "pattern": "^[a-z]+$"})
    validator = StringValidator()

    validator.check("a", schema, JsonPointer((0,)))
    validator.check("abcd", schema, JsonPointer((1,)))
    validator.check("AB", schema, JsonPointer((2,)))

    assert [(str(e.pointer), e.constraint) for e in validator.errors] == [
        ("/0", "minLength"),
        ("/1", "maxLength"),
        ("/2", "pattern"),
    ]
    assert validator.errors[0].message == "Must be at least 2 characters long"


@pytest.mark.unit
def test_number_validator_checks_ranges_and_multiples() -> None:
    inclusive = SchemaNode.from_mapping({"minimum": 1, "maximum": 5, "multipleOf": 2})
    exclusive = SchemaNode.from_mapping(
        {"minimum": 1, "exclusiveMinimum": True, "maximum": 5, "exclusiveMaximum": True}
    )
    validator = NumberValidator()

    validator.check(0, inclusive, JsonPointer((0,)))
    validator.check(6, inclusive, JsonPointer((1,)))
    validator.check(3, inclusive, JsonPointer((2,)))
    validator.check(1, exclusive, JsonPointer((3,)))
    validator.check(5, exclusive, JsonPointer((4,)))

    assert [(str(e.pointer), e.constraint) for e in validator.errors] == [
        ("/0", "minimum"),
        ("/1", "maximum"),
        ("/2", "multipleOf"),
        ("/3", "minimum"),
        ("/4", "maximum"),
    ]


@pytest.mark.unit
def test_number_validator_handles_float_multiples() -> None:
    schema = SchemaNode.from_mapping({"multipleOf": 0.1})
    validator = NumberValidator()

    validator.check(0.3, schema, JsonPointer((0,)))
    validator.check(0.35, schema, JsonPointer((1,)))

    assert [str(error.pointer) for error in validator.errors] == ["/1"]
