"""Structured validation errors and the ordered collector they accumulate in."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from arrayschema.domain.pointer import JsonPointer


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Single constraint violation attributed to a position in the document.

    ``params`` carries the raw values a separate formatting layer needs to
    template its own message (for example ``{"minItems": 3}``).
    """

    pointer: JsonPointer
    message: str
    constraint: str
    params: Mapping[str, object] = field(default_factory=dict)

    # Equality is structural; params is a read-only mapping, so no hash.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def to_dict(self) -> dict[str, object]:
        return {
            "pointer": str(self.pointer),
            "message": self.message,
            "constraint": self.constraint,
            "params": dict(self.params),
        }


ErrorSet: TypeAlias = tuple[ValidationError, ...]


class ErrorCollector:
    """Append-only, insertion-ordered error accumulator.

    Duplicates are kept; two identical violations at the same pointer are two
    entries.
    """

    __slots__ = ("_items",)

    def __init__(self, initial: Iterable[ValidationError] = ()) -> None:
        self._items: list[ValidationError] = list(initial)

    def add(
        self,
        pointer: JsonPointer,
        message: str,
        constraint: str,
        params: Mapping[str, object] | None = None,
    ) -> None:
        self._items.append(
            ValidationError(
                pointer=pointer,
                message=message,
                constraint=constraint,
                params=params or {},
            )
        )

    def extend(self, errors: Iterable[ValidationError]) -> None:
        self._items.extend(errors)

    def items(self) -> ErrorSet:
        return tuple(self._items)

    @property
    def has_errors(self) -> bool:
        return bool(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(tuple(self._items))


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one instance document."""

    errors: ErrorSet

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def constraints(self) -> tuple[str, ...]:
        return tuple(error.constraint for error in self.errors)


class SchemaValidationError(ValueError):
    """Raised by strict validation helpers when an instance has violations."""

    def __init__(self, errors: Sequence[ValidationError]) -> None:
        self.errors = tuple(errors)
        if not self.errors:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(
                f"- {str(item.pointer) or '<root>'}: {item.message}" for item in self.errors
            )
        super().__init__(f"invalid instance:\n{rendered}")


class SchemaShapeError(ValueError):
    """Raised when a schema mapping cannot be turned into a schema node."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"{path}: {message}")


__all__ = [
    "ErrorCollector",
    "ErrorSet",
    "SchemaShapeError",
    "SchemaValidationError",
    "ValidationError",
    "ValidationResult",
]
