"""gnmilog - render gNMI subscribe captures (NDJSON) as readable log lines."""

__version__ = "0.1.0"
