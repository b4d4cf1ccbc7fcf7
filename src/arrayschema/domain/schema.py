"""
arrayschema — in-memory schema node tree.

File: src/arrayschema/domain/schema.py

Purpose
- Turn a JSON Schema mapping into an immutable node tree the engine can walk
  without re-inspecting raw keyword shapes.

What is modelled here
- Array keywords: ``minItems``, ``maxItems``, ``uniqueItems``, ``items`` as a
  tagged ``ListItems | TupleItems`` variant and ``additionalItems`` as a
  ``Forbidden | Permissive | AdditionalSchema`` variant.
- The small non-array keyword set the recursive engine consumes: ``type``,
  ``enum``, ``required`` (draft-3 boolean and draft-4 list), ``properties``,
  string length/pattern and numeric range/multiple keywords.

Functional requirements
- Shapes are resolved once, at build time. A malformed shape raises
  ``SchemaShapeError`` with a ``#/...`` location; validation never sees it.
- Unknown keywords are preserved in ``raw`` and otherwise ignored.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, TypeAlias

from arrayschema.constants import JSON_TYPE_NAMES
from arrayschema.domain.errors import SchemaShapeError

_ROOT_LOCATION: Final[str] = "#"


@dataclass(frozen=True, slots=True)
class ListItems:
    """One schema applied to every element."""

    schema: SchemaNode


@dataclass(frozen=True, slots=True)
class TupleItems:
    """One schema per position; element ``k`` is checked against ``schemas[k]``."""

    schemas: tuple[SchemaNode, ...]

    @property
    def arity(self) -> int:
        return len(self.schemas)


ItemsSpec: TypeAlias = ListItems | TupleItems


@dataclass(frozen=True, slots=True)
class Forbidden:
    """``additionalItems: false``."""


@dataclass(frozen=True, slots=True)
class Permissive:
    """``additionalItems`` absent; behaves like the empty schema."""


@dataclass(frozen=True, slots=True)
class AdditionalSchema:
    """``additionalItems`` given as a schema (``true`` maps to the empty schema)."""

    schema: SchemaNode


AdditionalItems: TypeAlias = Forbidden | Permissive | AdditionalSchema

FORBIDDEN: Final[Forbidden] = Forbidden()
PERMISSIVE: Final[Permissive] = Permissive()


@dataclass(frozen=True, slots=True)
class SchemaNode:
    """Immutable, pre-parsed schema node."""

    type: str | tuple[str, ...] | None = None
    enum: tuple[object, ...] | None = None
    required_flag: bool = False
    required_properties: tuple[str, ...] = ()
    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    multiple_of: int | float | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False
    items: ItemsSpec | None = None
    additional_items: AdditionalItems = PERMISSIVE
    raw: Mapping[str, object] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    @property
    def has_additional_items(self) -> bool:
        """True when the ``additionalItems`` keyword is present in any form."""

        return not isinstance(self.additional_items, Permissive)

    @property
    def type_names(self) -> tuple[str, ...]:
        if self.type is None:
            return ()
        if isinstance(self.type, str):
            return (self.type,)
        return self.type

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object] | bool) -> SchemaNode:
        """Build a node tree from a decoded JSON Schema document."""

        return _build_node(payload, _ROOT_LOCATION)


EMPTY_SCHEMA: Final[SchemaNode] = SchemaNode()


def _build_node(payload: object, path: str) -> SchemaNode:
    if payload is True:
        return EMPTY_SCHEMA
    if not isinstance(payload, Mapping):
        raise SchemaShapeError(path, f"schema must be an object, got {type(payload).__name__}")

    raw: dict[str, object] = {}
    for key, value in payload.items():
        if not isinstance(key, str):
            raise SchemaShapeError(path, f"keyword must be a string, got {type(key).__name__}")
        raw[key] = value

    required_flag, required_properties = _parse_required(
        raw.get("required"), _join(path, "required")
    )

    return SchemaNode(
        type=_parse_type(raw.get("type"), _join(path, "type")),
        enum=_parse_enum(raw.get("enum"), _join(path, "enum")),
        required_flag=required_flag,
        required_properties=required_properties,
        properties=_parse_properties(raw.get("properties"), _join(path, "properties")),
        min_length=_as_count(raw.get("minLength"), _join(path, "minLength")),
        max_length=_as_count(raw.get("maxLength"), _join(path, "maxLength")),
        pattern=_parse_pattern(raw.get("pattern"), _join(path, "pattern")),
        minimum=_as_number(raw.get("minimum"), _join(path, "minimum")),
        maximum=_as_number(raw.get("maximum"), _join(path, "maximum")),
        exclusive_minimum=_as_flag(raw.get("exclusiveMinimum"), _join(path, "exclusiveMinimum")),
        exclusive_maximum=_as_flag(raw.get("exclusiveMaximum"), _join(path, "exclusiveMaximum")),
        multiple_of=_parse_multiple_of(raw.get("multipleOf"), _join(path, "multipleOf")),
        min_items=_as_count(raw.get("minItems"), _join(path, "minItems")),
        max_items=_as_count(raw.get("maxItems"), _join(path, "maxItems")),
        unique_items=_as_flag(raw.get("uniqueItems"), _join(path, "uniqueItems")),
        items=_parse_items(raw, path),
        additional_items=_parse_additional_items(raw, path),
        raw=raw,
    )


def _parse_items(raw: Mapping[str, object], path: str) -> ItemsSpec | None:
    if "items" not in raw:
        return None
    value = raw["items"]
    items_path = _join(path, "items")
    if isinstance(value, Mapping) or value is True:
        return ListItems(_build_node(value, items_path))
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return TupleItems(
            tuple(
                _build_node(item, _join(items_path, str(index)))
                for index, item in enumerate(value)
            )
        )
    raise SchemaShapeError(
        items_path, f"items must be an object or an array of objects, got {type(value).__name__}"
    )


def _parse_additional_items(raw: Mapping[str, object], path: str) -> AdditionalItems:
    if "additionalItems" not in raw:
        return PERMISSIVE
    value = raw["additionalItems"]
    if value is False:
        return FORBIDDEN
    return AdditionalSchema(_build_node(value, _join(path, "additionalItems")))


def _parse_type(value: object, path: str) -> str | tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        _check_type_name(value, path)
        return value
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        names: list[str] = []
        for index, item in enumerate(value):
            item_path = _join(path, str(index))
            if not isinstance(item, str):
                raise SchemaShapeError(item_path, f"expected type name, got {type(item).__name__}")
            _check_type_name(item, item_path)
            names.append(item)
        return tuple(names)
    raise SchemaShapeError(path, f"expected string or array of strings, got {type(value).__name__}")


def _check_type_name(name: str, path: str) -> None:
    if name not in JSON_TYPE_NAMES:
        expected = ", ".join(sorted(JSON_TYPE_NAMES))
        raise SchemaShapeError(path, f"unknown type {name!r}; expected one of: {expected}")


def _parse_enum(value: object, path: str) -> tuple[object, ...] | None:
    if value is None:
        return None
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(value)
    raise SchemaShapeError(path, f"expected array, got {type(value).__name__}")


def _parse_required(value: object, path: str) -> tuple[bool, tuple[str, ...]]:
    if value is None:
        return False, ()
    if isinstance(value, bool):
        return value, ()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        names: list[str] = []
        for index, item in enumerate(value):
            if not isinstance(item, str):
                raise SchemaShapeError(
                    _join(path, str(index)), f"expected property name, got {type(item).__name__}"
                )
            names.append(item)
        return False, tuple(names)
    raise SchemaShapeError(
        path, f"expected boolean or array of strings, got {type(value).__name__}"
    )


def _parse_properties(value: object, path: str) -> dict[str, SchemaNode]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SchemaShapeError(path, f"expected object, got {type(value).__name__}")
    return {str(key): _build_node(item, _join(path, str(key))) for key, item in value.items()}


def _parse_pattern(value: object, path: str) -> re.Pattern[str] | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaShapeError(path, f"expected string, got {type(value).__name__}")
    try:
        return re.compile(value)
    except re.error as exc:
        raise SchemaShapeError(path, f"invalid regular expression: {exc}") from exc


def _parse_multiple_of(value: object, path: str) -> int | float | None:
    parsed = _as_number(value, path)
    if parsed is not None and parsed <= 0:
        raise SchemaShapeError(path, "must be > 0")
    return parsed


def _as_count(value: object, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaShapeError(path, f"expected integer, got {type(value).__name__}")
    if value < 0:
        raise SchemaShapeError(path, "must be >= 0")
    return value


def _as_number(value: object, path: str) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaShapeError(path, f"expected number, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise SchemaShapeError(path, "must be finite")
    return value


def _as_flag(value: object, path: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaShapeError(path, f"expected boolean, got {type(value).__name__}")
    return value


def _join(path: str, key: str) -> str:
    escaped = key.replace("~", "~0").replace("/", "~1")
    return f"{path}/{escaped}"


__all__ = [
    "EMPTY_SCHEMA",
    "FORBIDDEN",
    "PERMISSIVE",
    "AdditionalItems",
    "AdditionalSchema",
    "Forbidden",
    "ItemsSpec",
    "ListItems",
    "Permissive",
    "SchemaNode",
    "TupleItems",
]
