"""
arrayschema — unit tests for the recursive validator

File: tests/unit/engine/test_validator.py

Purpose
- Validate type/enum/required handling, object recursion and the delegation
  of arrays to the collection constraint.
"""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from arrayschema.constraints.factory import TypeFactory
from arrayschema.constraints.types import UNDEFINED, TypeValidator
from arrayschema.domain.errors import ErrorCollector, ErrorSet
from arrayschema.domain.pointer import ROOT, JsonPointer
from arrayschema.domain.schema import SchemaNode
from arrayschema.engine.validator import Validator


def _validate(value: object, schema: Mapping[str, object]) -> ErrorSet:
    return Validator().validate(value, SchemaNode.from_mapping(schema))


def _summary(errors: ErrorSet) -> list[tuple[str, str]]:
    return [(str(error.pointer), error.constraint) for error in errors]


@pytest.mark.unit
def test_empty_schema_accepts_any_value() -> None:
    for value in (None, True, 1, 1.5, "x", [1, "a"], {"k": [None]}):
        assert _validate(value, {}) == ()


@pytest.mark.unit
def test_type_mismatch_reports_found_and_expected() -> None:
    errors = _validate("3", {"type": "integer"})

    assert _summary(errors) == [("", "type")]
    assert errors[0].message == "String value found, but integer is required"
    assert errors[0].params == {"found": "string", "expected": "integer"}


@pytest.mark.unit
def test_union_type_accepts_any_member() -> None:
    schema = {"type": ["string", "null"]}

    assert _validate(None, schema) == ()
    assert _validate("a", schema) == ()
    errors = _validate(1, schema)
    assert errors[0].message == "Integer value found, but string or null is required"


@pytest.mark.unit
def test_type_failure_does_not_hide_other_keywords() -> None:
    errors = _validate("abcdef", {"type": "integer", "maxLength": 3})

    assert _summary(errors) == [("", "type"), ("", "maxLength")]


@pytest.mark.unit
def test_enum_uses_json_equality() -> None:
    schema = {"enum": [1, "two", {"a": [1]}]}

    assert _validate(1.0, schema) == ()
    assert _validate({"a": [1]}, schema) == ()
    errors = _validate(True, schema)
    assert _summary(errors) == [("", "enum")]
    assert errors[0].message == 'Does not have a value in the enumeration [1, "two", {"a": [1]}]'
    assert errors[0].params == {"choices": [1, "two", {"a": [1]}]}


@pytest.mark.unit
def test_undefined_only_answers_to_required_flag() -> None:
    validator = Validator()
    required = SchemaNode.from_mapping({"type": "string", "required": True, "enum": ["a"]})
    optional = SchemaNode.from_mapping({"type": "string", "enum": ["a"]})

    errors = validator.validate(UNDEFINED, required, JsonPointer((3,)))

    assert _summary(errors) == [("/3", "required")]
    assert errors[0].message == "Is missing and it is required"
    assert validator.validate(UNDEFINED, optional) == ()


@pytest.mark.unit
def test_properties_recurse_with_extended_pointer() -> None:
    schema = {
        "properties": {
            "name": {"type": "string"},
            "tags": {"type": "array", "items": {"type": "string"}},
        }
    }

    errors = _validate({"name": 5, "tags": ["a", 2]}, schema)

    assert _summary(errors) == [("/name", "type"), ("/tags/1", "type")]


@pytest.mark.unit
def test_missing_properties_use_draft3_required_flag() -> None:
    schema = {"properties": {"id": {"type": "integer", "required": True}, "note": {}}}

    errors = _validate({}, schema)

    assert _summary(errors) == [("/id", "required")]


@pytest.mark.unit
def test_required_list_reports_at_object_pointer() -> None:
    errors = _validate({"a": 1}, {"required": ["a", "b"]})

    assert _summary(errors) == [("", "required")]
    assert errors[0].message == "The property b is required"
    assert errors[0].params == {"property": "b"}


@pytest.mark.unit
def test_property_name_is_passed_as_context_index() -> None:
    schema = {
        "properties": {
            "pair": {"items": [{"type": "string"}], "additionalItems": False},
        }
    }

    errors = _validate({"pair": ["a", "b"]}, schema)

    assert errors[0].message == (
        "The item pair[1] is not defined and the definition does not allow additional items"
    )
    assert str(errors[0].pointer) == "/pair"


@pytest.mark.unit
def test_check_appends_to_caller_collector() -> None:
    validator = Validator()
    errors = ErrorCollector()
    errors.add(ROOT, "earlier", "minItems")

    validator.check([1], SchemaNode.from_mapping({"items": {"type": "string"}}), ROOT, errors)

    assert [error.message for error in errors] == [
        "earlier",
        "Integer value found, but string is required",
    ]


@pytest.mark.unit
def test_validator_is_reusable_across_documents() -> None:
    validator = Validator()
    schema = SchemaNode.from_mapping({"type": "array", "minItems": 2})

    assert len(validator.validate([1], schema)) == 1
    assert validator.validate([1, 2], schema) == ()
    assert len(validator.validate([], schema)) == 1


@pytest.mark.unit
def test_custom_factory_validators_are_used_for_primitives() -> None:
    class ShoutingValidator(TypeValidator):
        type_name = "string"

        def check(self, value: object, schema: SchemaNode, pointer: JsonPointer) -> None:
            if isinstance(value, str) and value != value.upper():
                self._errors.add(pointer, "Must be upper case", "pattern")

    factory = TypeFactory()
    factory.register("string", ShoutingValidator)
    validator = Validator(factory=factory)

    errors = validator.validate(["OK", "no"], SchemaNode.from_mapping({"items": {}}))

    assert _summary(errors) == [("/1", "pattern")]


@pytest.mark.unit
def test_non_json_values_raise_type_error() -> None:
    with pytest.raises(TypeError):
        _validate({1, 2}, {})
