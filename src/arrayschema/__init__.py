"""
arrayschema — JSON Schema array validation core.

Purpose
- Package root. Exposes the version, the validator and a small convenience
  API; heavier layers stay importable from their own subpackages.

Functional requirements
- No side effects at import time (no config loading, no logging setup).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from arrayschema.config.schema import ValidatorSettings
from arrayschema.documents import DocumentLoadError, load_document, load_schema
from arrayschema.domain.errors import (
    SchemaShapeError,
    SchemaValidationError,
    ValidationError,
    ValidationResult,
)
from arrayschema.domain.pointer import ROOT, JsonPointer
from arrayschema.domain.schema import SchemaNode
from arrayschema.engine.validator import Validator

__version__ = "0.1.0"

_LOGGER = logging.getLogger("arrayschema")


def validate(
    instance: object,
    schema: SchemaNode | Mapping[str, object] | bool,
    *,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Validate ``instance`` against ``schema`` (a node or a raw mapping)."""

    node = schema if isinstance(schema, SchemaNode) else SchemaNode.from_mapping(schema)
    errors = Validator(settings=settings).validate(instance, node, ROOT)
    _LOGGER.debug("instance validated", extra={"error_count": len(errors)})
    return ValidationResult(errors=errors)


def assert_valid(
    instance: object,
    schema: SchemaNode | Mapping[str, object] | bool,
    *,
    settings: ValidatorSettings | None = None,
) -> None:
    """Validate and raise ``SchemaValidationError`` when any error is found."""

    result = validate(instance, schema, settings=settings)
    if not result.is_valid:
        raise SchemaValidationError(result.errors)


__all__ = [
    "ROOT",
    "DocumentLoadError",
    "JsonPointer",
    "SchemaNode",
    "SchemaShapeError",
    "SchemaValidationError",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "ValidatorSettings",
    "__version__",
    "assert_valid",
    "load_document",
    "load_schema",
    "validate",
]
