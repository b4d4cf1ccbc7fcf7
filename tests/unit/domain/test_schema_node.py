"""
arrayschema — unit tests for the schema node builder

File: tests/unit/domain/test_schema_node.py

Purpose
- Validate that ``items``/``additionalItems`` shapes are resolved once at build
  time and that malformed shapes fail with a located ``SchemaShapeError``.
"""

from __future__ import annotations

import pytest

from arrayschema.domain.errors import SchemaShapeError
from arrayschema.domain.schema import (
    EMPTY_SCHEMA,
    FORBIDDEN,
    PERMISSIVE,
    AdditionalSchema,
    ListItems,
    SchemaNode,
    TupleItems,
)


@pytest.mark.unit
def test_items_object_selects_list_mode() -> None:
    node = SchemaNode.from_mapping({"type": "array", "items": {"type": "integer"}})

    assert isinstance(node.items, ListItems)
    assert node.items.schema.type == "integer"


@pytest.mark.unit
def test_items_array_selects_tuple_mode_with_arity() -> None:
    node = SchemaNode.from_mapping({"items": [{"type": "string"}, {"type": "number"}]})

    assert isinstance(node.items, TupleItems)
    assert node.items.arity == 2
    assert [child.type for child in node.items.schemas] == ["string", "number"]


@pytest.mark.unit
def test_items_absent_leaves_items_unset() -> None:
    node = SchemaNode.from_mapping({"minItems": 1})

    assert node.items is None
    assert node.min_items == 1


@pytest.mark.unit
def test_additional_items_variants() -> None:
    absent = SchemaNode.from_mapping({})
    forbidden = SchemaNode.from_mapping({"additionalItems": False})
    permissive_true = SchemaNode.from_mapping({"additionalItems": True})
    schema = SchemaNode.from_mapping({"additionalItems": {"type": "boolean"}})

    assert absent.additional_items is PERMISSIVE
    assert not absent.has_additional_items
    assert forbidden.additional_items is FORBIDDEN
    assert forbidden.has_additional_items
    assert permissive_true.additional_items == AdditionalSchema(EMPTY_SCHEMA)
    assert permissive_true.has_additional_items
    assert isinstance(schema.additional_items, AdditionalSchema)
    assert schema.additional_items.schema.type == "boolean"


@pytest.mark.unit
def test_non_array_keywords_are_parsed() -> None:
    node = SchemaNode.from_mapping(
        {
            "type": ["string", "null"],
            "enum": ["a", None],
            "required": ["name"],
            "properties": {"name": {"type": "string", "required": True}},
            "minLength": 1,
            "maxLength": 5,
            "pattern": "^a",
            "minimum": 0,
            "maximum": 9.5,
            "exclusiveMaximum": True,
            "multipleOf": 0.5,
        }
    )

    assert node.type_names == ("string", "null")
    assert node.enum == ("a", None)
    assert node.required_properties == ("name",)
    assert node.properties["name"].required_flag is True
    assert node.min_length == 1
    assert node.max_length == 5
    assert node.pattern is not None and node.pattern.pattern == "^a"
    assert node.maximum == 9.5
    assert node.exclusive_maximum is True
    assert node.multiple_of == 0.5


@pytest.mark.unit
def test_unknown_keywords_are_kept_in_raw() -> None:
    node = SchemaNode.from_mapping({"title": "Tags", "x-extra": 1})

    assert node.raw["title"] == "Tags"
    assert node.type is None


@pytest.mark.unit
def test_node_is_immutable() -> None:
    node = SchemaNode.from_mapping({"minItems": 1, "properties": {"a": {}}})

    with pytest.raises(AttributeError):
        node.min_items = 2  # type: ignore[misc]
    with pytest.raises(TypeError):
        node.properties["b"] = EMPTY_SCHEMA  # type: ignore[index]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("payload", "location"),
    [
        ({"items": "string"}, "#/items"),
        ({"items": 3}, "#/items"),
        ({"minItems": -1}, "#/minItems"),
        ({"maxItems": 1.5}, "#/maxItems"),
        ({"uniqueItems": "yes"}, "#/uniqueItems"),
        ({"items": [{"type": "string"}, 7]}, "#/items/1"),
        ({"additionalItems": "no"}, "#/additionalItems"),
        ({"type": "text"}, "#/type"),
        ({"pattern": "("}, "#/pattern"),
        ({"multipleOf": 0}, "#/multipleOf"),
        ({"properties": {"a/b": {"minItems": "1"}}}, "#/properties/a~1b/minItems"),
    ],
)
def test_malformed_shapes_raise_located_errors(payload: dict[str, object], location: str) -> None:
    with pytest.raises(SchemaShapeError) as excinfo:
        SchemaNode.from_mapping(payload)

    assert excinfo.value.path == location


@pytest.mark.unit
def test_true_schema_is_the_empty_schema() -> None:
    assert SchemaNode.from_mapping(True) is EMPTY_SCHEMA


@pytest.mark.unit
def test_nodes_compare_by_value_and_are_unhashable() -> None:
    payload = {"minItems": 1, "items": {"type": "string"}}

    assert SchemaNode.from_mapping(payload) == SchemaNode.from_mapping(payload)
    with pytest.raises(TypeError, match="unhashable type: 'SchemaNode'"):
        hash(EMPTY_SCHEMA)
