"""Telemetry path composition."""

from __future__ import annotations


def compose_path(prefix: str, update_path: str) -> str:
    """Join a notification prefix and an update path with a single ``/``.

    Segments are used as-is, so key selectors like ``[name=Ethernet1/1]``
    survive untouched. Returns an empty string when both parts are empty.
    """
    if not prefix:
        return update_path
    if not update_path:
        return prefix
    return f"{prefix}/{update_path}"
