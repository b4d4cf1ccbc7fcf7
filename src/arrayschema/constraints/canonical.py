"""Kind-preserving canonical keys used for ``uniqueItems`` and ``enum`` matching."""

from __future__ import annotations

from collections.abc import Hashable, Mapping

from arrayschema.constants import (
    KIND_ARRAY,
    KIND_BOOLEAN,
    KIND_NULL,
    KIND_NUMBER,
    KIND_OBJECT,
    KIND_STRING,
)
from arrayschema.constraints.types import kind_of


def canonical_key(value: object) -> Hashable:
    """Return a hashable key equal for structurally equal JSON values.

    Keys are tagged with the value kind, so ``1`` and ``"1"`` differ and so do
    ``True`` and ``1``. Integral floats collapse onto the integer key
    (``1 == 1.0``). Object keys are order-insensitive.
    """

    if value is None:
        return (KIND_NULL,)
    if isinstance(value, bool):
        return (KIND_BOOLEAN, value)
    if isinstance(value, float) and value.is_integer():
        return (KIND_NUMBER, int(value))
    if isinstance(value, (int, float)):
        return (KIND_NUMBER, value)
    if isinstance(value, str):
        return (KIND_STRING, value)
    if isinstance(value, (list, tuple)):
        return (KIND_ARRAY, tuple(canonical_key(item) for item in value))
    if isinstance(value, Mapping):
        return (
            KIND_OBJECT,
            frozenset((str(key), canonical_key(item)) for key, item in value.items()),
        )
    return (kind_of(value),)


def has_duplicates(values: list[object] | tuple[object, ...]) -> bool:
    distinct = {canonical_key(item) for item in values}
    return len(distinct) < len(values)


def json_equal(left: object, right: object) -> bool:
    return canonical_key(left) == canonical_key(right)


__all__ = ["canonical_key", "has_duplicates", "json_equal"]
