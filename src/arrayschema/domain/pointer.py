"""Immutable structural pointers locating a value inside its document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

Segment: TypeAlias = str | int


@dataclass(frozen=True, slots=True)
class JsonPointer:
    """Ordered sequence of object keys and array indexes.

    ``append`` always returns a new pointer; the receiver is never modified, so
    one parent pointer can be shared by every element of an array.
    """

    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        for segment in self.segments:
            if isinstance(segment, bool) or not isinstance(segment, (str, int)):
                raise TypeError(
                    f"pointer segment must be str or int, got {type(segment).__name__}"
                )
            if isinstance(segment, int) and segment < 0:
                raise ValueError(f"pointer index must be >= 0, got {segment}")

    def append(self, segment: Segment) -> JsonPointer:
        return JsonPointer((*self.segments, segment))

    @property
    def parent(self) -> JsonPointer | None:
        if not self.segments:
            return None
        return JsonPointer(self.segments[:-1])

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return "".join(f"/{_escape(segment)}" for segment in self.segments)

    @classmethod
    def parse(cls, raw: str) -> JsonPointer:
        """Parse an RFC 6901 pointer; all-digit tokens become indexes."""

        if raw == "":
            return ROOT
        if not raw.startswith("/"):
            raise ValueError(f"json pointer must start with '/': {raw!r}")
        segments: list[Segment] = []
        for token in raw[1:].split("/"):
            unescaped = token.replace("~1", "/").replace("~0", "~")
            if unescaped.isdigit() and (unescaped == "0" or not unescaped.startswith("0")):
                segments.append(int(unescaped))
            else:
                segments.append(unescaped)
        return cls(tuple(segments))


def _escape(segment: Segment) -> str:
    if isinstance(segment, int):
        return str(segment)
    return segment.replace("~", "~0").replace("/", "~1")


ROOT = JsonPointer()

__all__ = ["ROOT", "JsonPointer", "Segment"]
