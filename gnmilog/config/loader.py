"""
gnmilog - Settings Loader

Merges settings from multiple sources with proper precedence:
  1. Command-line flags (highest priority)
  2. YAML file passed with --config
  3. Built-in defaults (lowest priority)
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Any

import yaml

from gnmilog.config.schema import validate_settings
from gnmilog.errors import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "timezone": "utc",
    "preview": {
        "enabled": True,
        "max_chars": 200,
    },
}


@dataclass(frozen=True)
class Settings:
    timezone: str = "utc"
    preview_enabled: bool = True
    preview_max_chars: int = 200

    @property
    def tz(self) -> tzinfo | None:
        """Zone for timestamp formatting; ``None`` means host local time."""
        return timezone.utc if self.timezone == "utc" else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        preview = data.get("preview", {})
        return cls(
            timezone=data.get("timezone", cls.timezone),
            preview_enabled=preview.get("enabled", cls.preview_enabled),
            preview_max_chars=preview.get("max_chars", cls.preview_max_chars),
        )


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override values take precedence.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_yaml_file(path: Path) -> dict:
    """Load a YAML mapping; an empty file yields an empty dict."""
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigValidationError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"invalid YAML in {path}: {exc}") from exc
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigValidationError(f"{path} must contain a mapping")
    return content


def load_settings(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """
    Build settings from defaults, an optional YAML file and CLI overrides.

    Args:
        config_path: Optional path to a YAML settings file
        overrides: Values from command-line flags, same shape as the file

    Returns:
        Validated Settings

    Raises:
        ConfigValidationError: the file is unreadable or the merged
            settings do not match the schema
    """
    merged = copy.deepcopy(DEFAULTS)

    if config_path is not None:
        file_settings = load_yaml_file(config_path)
        logger.debug("loaded settings from %s: %s", config_path, sorted(file_settings))
        merged = deep_merge(merged, file_settings)

    if overrides:
        merged = deep_merge(merged, overrides)

    errors = validate_settings(merged)
    if errors:
        source = str(config_path) if config_path else "command line"
        raise ConfigValidationError(f"Validation failed for {source}", errors=errors)

    return Settings.from_dict(merged)
