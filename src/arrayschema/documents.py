"""
arrayschema — schema and instance document loading.

File: src/arrayschema/documents.py

Purpose
- Read a JSON or YAML document from disk into plain JSON values.

Functional requirements
- ``.json`` is decoded with the standard ``json`` module; ``.yaml``/``.yml``
  with a ``yaml.SafeLoader`` that leaves timestamps as strings.
- Unreadable or unparsable files raise ``DocumentLoadError`` naming the path.
- YAML values with no JSON counterpart (binary, sets, explicit timestamps,
  non-string keys) raise ``DocumentLoadError`` naming the pointer.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import yaml

from arrayschema.domain.errors import SchemaShapeError
from arrayschema.domain.pointer import ROOT, JsonPointer
from arrayschema.domain.schema import SchemaNode

_LOGGER = logging.getLogger("arrayschema.documents")

JSON_SUFFIXES: Final[frozenset[str]] = frozenset({".json"})
YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})

_YAML_TIMESTAMP_TAG: Final[str] = "tag:yaml.org,2002:timestamp"


class _JsonSafeLoader(yaml.SafeLoader):
    """SafeLoader whose implicit resolvers only produce JSON scalars."""


_JsonSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class DocumentLoadError(ValueError):
    """Raised when a document cannot be read, parsed or interpreted."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"{path}: {message}")


def load_document(path: str | Path) -> object:
    """Load a JSON or YAML document and return the decoded value."""

    resolved = Path(path).expanduser()
    suffix = resolved.suffix.lower()
    if suffix not in JSON_SUFFIXES and suffix not in YAML_SUFFIXES:
        expected = ", ".join(sorted(JSON_SUFFIXES | YAML_SUFFIXES))
        raise DocumentLoadError(resolved, f"unsupported suffix {suffix!r}; expected: {expected}")

    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(resolved, f"unable to read document: {exc}") from exc

    if suffix in JSON_SUFFIXES:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(resolved, f"invalid JSON: {exc}") from exc
    else:
        try:
            document = yaml.load(text, Loader=_JsonSafeLoader)  # noqa: S506
        except yaml.YAMLError as exc:
            raise DocumentLoadError(resolved, f"invalid YAML: {exc}") from exc
        _ensure_json_value(document, ROOT, resolved)

    _LOGGER.debug("document loaded", extra={"path": resolved.as_posix(), "suffix": suffix})
    return document


def _ensure_json_value(value: object, pointer: JsonPointer, path: Path) -> None:
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _ensure_json_value(item, pointer.append(index), path)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise DocumentLoadError(
                    path,
                    f"non-string key {key!r} at {str(pointer) or '<root>'}; "
                    "JSON objects only have string keys",
                )
            _ensure_json_value(item, pointer.append(key), path)
        return
    raise DocumentLoadError(
        path,
        f"unsupported value of type {type(value).__name__} at {str(pointer) or '<root>'}",
    )


def load_schema(path: str | Path) -> SchemaNode:
    """Load a schema document and build its node tree."""

    document = load_document(path)
    if not isinstance(document, (Mapping, bool)):
        raise DocumentLoadError(
            Path(path), f"schema document must be an object, got {type(document).__name__}"
        )
    try:
        return SchemaNode.from_mapping(document)
    except SchemaShapeError as exc:
        raise DocumentLoadError(Path(path), f"malformed schema at {exc}") from exc


__all__ = ["DocumentLoadError", "load_document", "load_schema"]
