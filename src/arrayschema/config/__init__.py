"""
arrayschema settings package public API.

Purpose
- Export settings loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``arrayschema.toml`` + ``ARRAYSCHEMA_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from arrayschema.config.loader import (
    DEFAULT_SETTINGS_FILE,
    ENV_PREFIX,
    SettingsLoadError,
    dump_effective_settings,
    load_settings,
    load_settings_payload,
    normalize_paths,
)
from arrayschema.config.schema import (
    DEFAULT_SETTINGS,
    LOG_FORMATS,
    LOG_LEVELS,
    PATH_FIELDS,
    SettingsPayload,
    SettingsValidationError,
    SettingsValidationIssue,
    SettingsValidationResult,
    ValidatorSettings,
    assert_valid_settings,
    default_settings,
    merge_settings,
    migration_guidance,
    validate_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "PATH_FIELDS",
    "SettingsLoadError",
    "SettingsPayload",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "ValidatorSettings",
    "assert_valid_settings",
    "default_settings",
    "dump_effective_settings",
    "load_settings",
    "load_settings_payload",
    "merge_settings",
    "migration_guidance",
    "normalize_paths",
    "validate_settings",
]
