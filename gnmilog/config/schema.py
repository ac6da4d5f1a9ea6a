"""Schema loading and validation for gnmilog settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

SCHEMA_PATH = Path(__file__).with_name("settings.schema.json")


def get_schema(path: Path = SCHEMA_PATH) -> dict[str, Any]:
    """Load the settings schema.

    Args:
        path: Location of the JSON schema file.

    Returns:
        Parsed JSON schema as a dict.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Schema at {path} is not a JSON object")
    return data


def validate_settings(settings: dict[str, Any]) -> list[str]:
    """Validate a settings mapping against the schema.

    Args:
        settings: Merged settings to validate.

    Returns:
        Sorted list of validation error strings, empty when valid.
    """
    validator = Draft7Validator(get_schema())
    errors: list[str] = []
    for err in validator.iter_errors(settings):
        path = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{path}: {err.message}")
    return sorted(errors)
