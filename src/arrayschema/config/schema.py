"""
arrayschema — settings schema and validation.

File: src/arrayschema/config/schema.py

Purpose
- Define authoritative settings defaults and strict validation rules.

What is included in this file
- Schema versioning and migration guidance.
- Validation rules for required fields, types and enums, reported as
  structured issues (dotted path + message).
- Deterministic deep-merge helper used by the loader.
- ``ValidatorSettings``, the frozen runtime view consumed by the engine.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, NotRequired, TypedDict

from arrayschema.constants import (
    SETTINGS_SCHEMA_VERSION,
    TIE_BREAK_DISCARD_BOTH,
    TIE_BREAK_POLICIES,
)

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")

# Settings paths normalized relative to the settings file location.
PATH_FIELDS: Final[tuple[tuple[str, ...], ...]] = (("observability", "log_file"),)


class MetaSettings(TypedDict):
    schema_version: int


class ValidationSection(TypedDict):
    primitive_fast_path: bool
    tie_break: Literal["discard_both", "prefer_items"]


class ObservabilitySection(TypedDict):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    log_format: Literal["json", "text"]
    log_file: NotRequired[str]


class SettingsPayload(TypedDict):
    meta: MetaSettings
    validation: ValidationSection
    observability: ObservabilitySection


DEFAULT_SETTINGS: Final[SettingsPayload] = {
    "meta": {
        "schema_version": SETTINGS_SCHEMA_VERSION,
    },
    "validation": {
        "primitive_fast_path": True,
        "tie_break": "discard_both",
    },
    "observability": {
        "log_level": "WARNING",
        "log_format": "json",
    },
}


@dataclass(frozen=True, slots=True)
class ValidatorSettings:
    """Runtime settings consumed by the engine and the array constraint."""

    primitive_fast_path: bool = True
    tie_break: str = TIE_BREAK_DISCARD_BOTH
    log_level: str = "WARNING"
    log_format: str = "json"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.tie_break not in TIE_BREAK_POLICIES:
            expected = ", ".join(TIE_BREAK_POLICIES)
            raise ValueError(f"tie_break must be one of: {expected}; got {self.tie_break!r}")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ValidatorSettings:
        """Build settings from an already validated payload."""

        validation = payload.get("validation", {})
        observability = payload.get("observability", {})
        log_file = observability.get("log_file")
        return cls(
            primitive_fast_path=bool(validation.get("primitive_fast_path", True)),
            tie_break=str(validation.get("tie_break", TIE_BREAK_DISCARD_BOTH)),
            log_level=str(observability.get("log_level", "WARNING")),
            log_format=str(observability.get("log_format", "json")),
            log_file=log_file if isinstance(log_file, str) else None,
        )


@dataclass(frozen=True, slots=True)
class SettingsValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SettingsValidationResult:
    """Validation result with the normalized payload when no issues were found."""

    settings: dict[str, Any] | None
    issues: tuple[SettingsValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.settings is not None and not self.issues


class SettingsValidationError(ValueError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[SettingsValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid settings:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[SettingsValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(SettingsValidationIssue(path=path, message=message))

    def items(self) -> tuple[SettingsValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_settings() -> SettingsPayload:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_SETTINGS)


def migration_guidance(found_version: int) -> str:
    if found_version < SETTINGS_SCHEMA_VERSION:
        return (
            f"schema version {found_version} is older than supported {SETTINGS_SCHEMA_VERSION}; "
            "upgrade arrayschema.toml to the current schema"
        )
    if found_version > SETTINGS_SCHEMA_VERSION:
        return (
            f"schema version {found_version} is newer than supported {SETTINGS_SCHEMA_VERSION}; "
            "upgrade the arrayschema package"
        )
    return "schema version is current"


def merge_settings(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_settings(payload: Mapping[str, object] | object) -> SettingsValidationResult:
    """Validate a settings payload and return structured issues with dotted paths."""

    issues = _IssueCollector()
    root = _as_object(payload, "<root>", issues)
    if root is None:
        return SettingsValidationResult(settings=None, issues=issues.items())

    _reject_unknown_keys(root, {"meta", "validation", "observability"}, "", issues)
    _require_keys(root, {"meta", "validation", "observability"}, "", issues)

    normalized: dict[str, Any] = {}
    meta = _section(root, "meta", issues)
    if meta is not None:
        normalized["meta"] = _validate_meta(meta, "meta", issues)
    validation = _section(root, "validation", issues)
    if validation is not None:
        normalized["validation"] = _validate_validation(validation, "validation", issues)
    observability = _section(root, "observability", issues)
    if observability is not None:
        normalized["observability"] = _validate_observability(
            observability, "observability", issues
        )

    if issues.has_issues:
        return SettingsValidationResult(settings=None, issues=issues.items())
    return SettingsValidationResult(settings=normalized, issues=issues.items())


def assert_valid_settings(payload: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate settings and raise ``SettingsValidationError`` on failure."""

    result = validate_settings(payload)
    if result.settings is None:
        raise SettingsValidationError(result.issues)
    return result.settings


def _section(
    root: Mapping[str, object], key: str, issues: _IssueCollector
) -> dict[str, object] | None:
    if key not in root:
        return None
    return _as_object(root[key], key, issues)


def _validate_meta(
    section: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    _reject_unknown_keys(section, {"schema_version"}, path, issues)
    _require_keys(section, {"schema_version"}, path, issues)
    out: dict[str, Any] = {}
    if "schema_version" in section:
        version = _as_int(section["schema_version"], _join(path, "schema_version"), issues)
        if version is not None and version != SETTINGS_SCHEMA_VERSION:
            issues.add(_join(path, "schema_version"), migration_guidance(version))
        out["schema_version"] = version
    return out


def _validate_validation(
    section: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    allowed = {"primitive_fast_path", "tie_break"}
    _reject_unknown_keys(section, allowed, path, issues)
    _require_keys(section, allowed, path, issues)
    out: dict[str, Any] = {}
    if "primitive_fast_path" in section:
        out["primitive_fast_path"] = _as_bool(
            section["primitive_fast_path"], _join(path, "primitive_fast_path"), issues
        )
    if "tie_break" in section:
        out["tie_break"] = _as_enum(
            section["tie_break"],
            _join(path, "tie_break"),
            issues,
            allowed_values=TIE_BREAK_POLICIES,
        )
    return out


def _validate_observability(
    section: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    _reject_unknown_keys(section, {"log_level", "log_format", "log_file"}, path, issues)
    _require_keys(section, {"log_level", "log_format"}, path, issues)
    out: dict[str, Any] = {}
    if "log_level" in section:
        raw_level = section["log_level"]
        if isinstance(raw_level, str):
            raw_level = raw_level.strip().upper()
        out["log_level"] = _as_enum(
            raw_level, _join(path, "log_level"), issues, allowed_values=LOG_LEVELS
        )
    if "log_format" in section:
        out["log_format"] = _as_enum(
            section["log_format"], _join(path, "log_format"), issues, allowed_values=LOG_FORMATS
        )
    if "log_file" in section:
        log_file = _as_str(section["log_file"], _join(path, "log_file"), issues)
        if log_file is not None and "\x00" in log_file:
            issues.add(_join(path, "log_file"), "must not contain NUL bytes")
        out["log_file"] = log_file
    return out


def _as_object(value: object, path: str, issues: _IssueCollector) -> dict[str, object] | None:
    if not isinstance(value, Mapping):
        issues.add(path, f"expected object, got {type(value).__name__}")
        return None
    out: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            issues.add(path, f"object key must be string, got {type(key).__name__}")
            continue
        out[key] = item
    return out


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return None
    parsed = value.strip()
    if not parsed:
        issues.add(path, "must not be empty")
        return None
    return parsed


def _as_bool(value: object, path: str, issues: _IssueCollector) -> bool | None:
    if isinstance(value, bool):
        return value
    issues.add(path, f"expected boolean, got {type(value).__name__}")
    return None


def _as_int(value: object, path: str, issues: _IssueCollector) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(path, f"expected integer, got {type(value).__name__}")
        return None
    return value


def _as_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if parsed not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {parsed!r}; expected one of: {expected}")
        return None
    return parsed


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(_join(path, key), "unknown field")


def _require_keys(
    payload: Mapping[str, object],
    required: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(required):
        if key not in payload:
            issues.add(_join(path, key), "missing required field")


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_SETTINGS",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "PATH_FIELDS",
    "SettingsPayload",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "ValidatorSettings",
    "assert_valid_settings",
    "default_settings",
    "merge_settings",
    "migration_guidance",
    "validate_settings",
]
