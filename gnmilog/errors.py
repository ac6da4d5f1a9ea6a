from __future__ import annotations


class GnmiLogError(RuntimeError):
    """Base class for errors raised by gnmilog."""


class RecordDecodeError(GnmiLogError):
    """Raised when an NDJSON line cannot be decoded into a record."""


class InputOpenError(GnmiLogError):
    """Raised when the input capture cannot be opened."""


class StreamReadError(GnmiLogError):
    """Raised when reading the input fails part way through."""


class ConfigValidationError(GnmiLogError):
    """Raised when merged settings fail schema validation."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
