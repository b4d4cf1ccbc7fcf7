"""Type instance factory: reusable primitive validators and the undefined placeholder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final, Literal, overload

from arrayschema.constants import KIND_INTEGER, KIND_NUMBER, KIND_STRING, KIND_UNDEFINED
from arrayschema.constraints.types import (
    UNDEFINED,
    NumberValidator,
    StringValidator,
    TypeValidator,
    Undefined,
)

_BUILTIN_VALIDATORS: Final[Mapping[str, type[TypeValidator]]] = {
    KIND_STRING: StringValidator,
    KIND_NUMBER: NumberValidator,
    KIND_INTEGER: NumberValidator,
}


class UnknownTypeError(ValueError):
    """Raised when no validator is registered for a type name."""


class TypeFactory:
    """Creates fresh type validators by name.

    Every call returns a new instance so that callers own the errors it
    accumulates. ``instance_for("undefined")`` returns the shared placeholder
    value instead of a validator.
    """

    __slots__ = ("_validators",)

    def __init__(self) -> None:
        self._validators: dict[str, type[TypeValidator]] = dict(_BUILTIN_VALIDATORS)

    @overload
    def instance_for(self, type_name: Literal["undefined"]) -> Undefined: ...

    @overload
    def instance_for(self, type_name: str) -> TypeValidator: ...

    def instance_for(self, type_name: str) -> TypeValidator | Undefined:
        if type_name == KIND_UNDEFINED:
            return UNDEFINED
        validator_cls = self._validators.get(type_name)
        if validator_cls is None:
            known = ", ".join(sorted({*self._validators, KIND_UNDEFINED}))
            raise UnknownTypeError(f"no validator for type {type_name!r}; known: {known}")
        return validator_cls()

    def register(self, type_name: str, validator_cls: type[TypeValidator]) -> None:
        """Register or replace the validator class used for ``type_name``."""

        normalized = type_name.strip()
        if not normalized:
            raise ValueError("type_name must not be empty")
        if normalized == KIND_UNDEFINED:
            raise ValueError("'undefined' is reserved for the placeholder value")
        if not (isinstance(validator_cls, type) and issubclass(validator_cls, TypeValidator)):
            raise TypeError("validator_cls must be a TypeValidator subclass")
        self._validators[normalized] = validator_cls

    def has(self, type_name: str) -> bool:
        return type_name == KIND_UNDEFINED or type_name in self._validators


__all__ = ["TypeFactory", "UnknownTypeError"]
