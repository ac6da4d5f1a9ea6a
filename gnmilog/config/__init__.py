"""Settings management for gnmilog."""

from __future__ import annotations

from gnmilog.config.loader import (
    DEFAULTS,
    Settings,
    deep_merge,
    load_settings,
    load_yaml_file,
)
from gnmilog.config.schema import get_schema, validate_settings

__all__ = [
    "DEFAULTS",
    "Settings",
    "deep_merge",
    "get_schema",
    "load_settings",
    "load_yaml_file",
    "validate_settings",
]
