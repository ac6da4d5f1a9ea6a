import sys
from datetime import timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gnmilog.config import (  # noqa: E402
    DEFAULTS,
    Settings,
    deep_merge,
    get_schema,
    load_settings,
    load_yaml_file,
    validate_settings,
)
from gnmilog.errors import ConfigValidationError  # noqa: E402


def test_defaults_are_valid():
    assert validate_settings(DEFAULTS) == []
    assert load_settings() == Settings()


def test_schema_is_draft7_object():
    schema = get_schema()
    assert schema["type"] == "object"
    assert "preview" in schema["properties"]


def test_deep_merge_keeps_nested_defaults():
    merged = deep_merge(DEFAULTS, {"preview": {"max_chars": 80}})
    assert merged["preview"] == {"enabled": True, "max_chars": 80}
    assert DEFAULTS["preview"]["max_chars"] == 200


def test_yaml_file_overrides_defaults(tmp_path: Path):
    config = tmp_path / "gnmilog.yml"
    config.write_text("timezone: local\npreview:\n  enabled: false\n", encoding="utf-8")
    settings = load_settings(config)
    assert settings.timezone == "local"
    assert settings.tz is None
    assert settings.preview_enabled is False
    assert settings.preview_max_chars == 200


def test_overrides_beat_file(tmp_path: Path):
    config = tmp_path / "gnmilog.yml"
    config.write_text("preview:\n  max_chars: 50\n", encoding="utf-8")
    settings = load_settings(config, {"preview": {"max_chars": 10}})
    assert settings.preview_max_chars == 10


def test_empty_file_uses_defaults(tmp_path: Path):
    config = tmp_path / "empty.yml"
    config.write_text("", encoding="utf-8")
    assert load_yaml_file(config) == {}
    assert load_settings(config).tz is timezone.utc


def test_unknown_key_rejected(tmp_path: Path):
    config = tmp_path / "bad.yml"
    config.write_text("colour: always\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError) as excinfo:
        load_settings(config)
    assert any("colour" in message for message in excinfo.value.errors)


def test_invalid_values_are_all_listed():
    with pytest.raises(ConfigValidationError) as excinfo:
        load_settings(overrides={"timezone": "mars", "preview": {"max_chars": 0}})
    errors = excinfo.value.errors
    assert len(errors) == 2
    assert errors == sorted(errors)
    assert errors[0].startswith("preview.max_chars:")
    assert errors[1].startswith("timezone:")


def test_missing_file_is_an_error(tmp_path: Path):
    with pytest.raises(ConfigValidationError, match="cannot read"):
        load_settings(tmp_path / "nope.yml")


def test_non_mapping_file_is_an_error(tmp_path: Path):
    config = tmp_path / "list.yml"
    config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError, match="must contain a mapping"):
        load_settings(config)


def test_malformed_yaml_is_an_error(tmp_path: Path):
    config = tmp_path / "broken.yml"
    config.write_text("preview: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError, match="invalid YAML"):
        load_settings(config)
