"""
arrayschema — unit tests for settings schema validation

File: tests/unit/config/test_settings_schema.py

Purpose
- Validate strict settings schema behavior and structured errors.

What this test file should cover
- The repository's live arrayschema.toml validates successfully.
- Unknown keys, invalid types and invalid enum values are reported with
  dotted paths.
- Deep merge is deterministic and non-destructive.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from arrayschema.config.schema import (
    DEFAULT_SETTINGS,
    SettingsValidationError,
    ValidatorSettings,
    assert_valid_settings,
    default_settings,
    merge_settings,
    migration_guidance,
    validate_settings,
)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    assert isinstance(data, dict)
    return data


@pytest.mark.unit
def test_repository_settings_file_validates_successfully() -> None:
    result = validate_settings(_load_toml(REPO_ROOT / "arrayschema.toml"))

    assert result.is_valid, result.issues
    assert result.settings == dict(DEFAULT_SETTINGS)


@pytest.mark.unit
def test_defaults_validate_and_are_deep_copied() -> None:
    first = default_settings()
    first["validation"]["tie_break"] = "prefer_items"

    assert validate_settings(default_settings()).is_valid
    assert DEFAULT_SETTINGS["validation"]["tie_break"] == "discard_both"


@pytest.mark.unit
def test_unknown_keys_and_bad_types_are_reported_with_paths() -> None:
    payload = default_settings()
    payload["validation"]["primitive_fast_path"] = "yes"  # type: ignore[typeddict-item]
    payload["validation"]["extra"] = 1  # type: ignore[typeddict-unknown-key]
    payload["observability"]["log_format"] = "xml"  # type: ignore[typeddict-item]

    result = validate_settings(payload)

    assert not result.is_valid
    assert result.settings is None
    paths = {issue.path for issue in result.issues}
    assert paths == {
        "validation.primitive_fast_path",
        "validation.extra",
        "observability.log_format",
    }


@pytest.mark.unit
def test_invalid_tie_break_lists_allowed_values() -> None:
    payload = default_settings()
    payload["validation"]["tie_break"] = "coin_flip"  # type: ignore[typeddict-item]

    with pytest.raises(SettingsValidationError) as excinfo:
        assert_valid_settings(payload)

    assert "validation.tie_break" in str(excinfo.value)
    assert "discard_both, prefer_items" in str(excinfo.value)


@pytest.mark.unit
def test_missing_sections_are_required() -> None:
    result = validate_settings({"meta": {"schema_version": 1}})

    assert {issue.path for issue in result.issues} == {"observability", "validation"}


@pytest.mark.unit
def test_non_mapping_root_is_rejected() -> None:
    result = validate_settings(["not", "a", "mapping"])

    assert [issue.path for issue in result.issues] == ["<root>"]


@pytest.mark.unit
def test_log_level_is_normalized_to_upper_case() -> None:
    payload = default_settings()
    payload["observability"]["log_level"] = " debug "  # type: ignore[typeddict-item]

    settings = assert_valid_settings(payload)

    assert settings["observability"]["log_level"] == "DEBUG"


@pytest.mark.unit
def test_schema_version_mismatch_carries_migration_guidance() -> None:
    payload = default_settings()
    payload["meta"]["schema_version"] = 2

    result = validate_settings(payload)

    assert [issue.path for issue in result.issues] == ["meta.schema_version"]
    assert "newer than supported" in result.issues[0].message
    assert "older than supported" in migration_guidance(0)


@pytest.mark.unit
def test_merge_settings_is_deep_and_non_destructive() -> None:
    base = default_settings()

    merged = merge_settings(base, {"validation": {"tie_break": "prefer_items"}})

    assert merged["validation"] == {"primitive_fast_path": True, "tie_break": "prefer_items"}
    assert base["validation"]["tie_break"] == "discard_both"


@pytest.mark.unit
def test_validator_settings_from_payload_and_guard() -> None:
    payload = merge_settings(
        default_settings(),
        {"validation": {"primitive_fast_path": False}, "observability": {"log_file": "x.log"}},
    )

    settings = ValidatorSettings.from_payload(payload)

    assert settings.primitive_fast_path is False
    assert settings.tie_break == "discard_both"
    assert settings.log_file == "x.log"
    with pytest.raises(ValueError, match="tie_break"):
        ValidatorSettings(tie_break="random")
