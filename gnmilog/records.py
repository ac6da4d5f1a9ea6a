"""Decoded gNMI subscribe records.

One NDJSON line holds one notification::

    {"source": "leaf1:6030", "subscription-name": "ifaces",
     "timestamp": 1700000000000000000, "time": "...",
     "prefix": "interfaces",
     "updates": [{"Path": "interface[name=Eth1]/state",
                  "values": {"oper-status": "UP"}}]}

Missing or null fields decode to their empty value. Fields of the wrong
JSON type are decode errors, the same as for a line that is not JSON.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any

from gnmilog.errors import RecordDecodeError
from gnmilog.timefmt import INT64_MAX, INT64_MIN


@dataclass(frozen=True)
class Update:
    path: str = ""
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Record:
    source: str = ""
    subscription_name: str = ""
    timestamp: int = 0
    time: str = ""
    prefix: str = ""
    updates: tuple[Update, ...] = ()


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    return "number"


def _get_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecordDecodeError(f"{where}{key}: expected string, got {_type_name(value)}")
    return value


def _get_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordDecodeError(f"{key}: expected integer, got {_type_name(value)} {value!r}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise RecordDecodeError(f"{key}: value {value} overflows int64")
    return value


def _decode_update(data: Any, index: int) -> Update:
    where = f"updates[{index}]."
    if not isinstance(data, dict):
        raise RecordDecodeError(f"updates[{index}]: expected object, got {_type_name(data)}")
    values = data.get("values")
    if values is None:
        values = {}
    elif not isinstance(values, dict):
        raise RecordDecodeError(f"{where}values: expected object, got {_type_name(values)}")
    return Update(path=_get_str(data, "Path", where), values=values)


def record_from_dict(data: dict[str, Any]) -> Record:
    updates = data.get("updates")
    if updates is None:
        updates = []
    elif not isinstance(updates, list):
        raise RecordDecodeError(f"updates: expected array, got {_type_name(updates)}")
    return Record(
        source=_get_str(data, "source", ""),
        subscription_name=_get_str(data, "subscription-name", ""),
        timestamp=_get_int(data, "timestamp"),
        time=_get_str(data, "time", ""),
        prefix=_get_str(data, "prefix", ""),
        updates=tuple(_decode_update(item, idx) for idx, item in enumerate(updates)),
    )


def _reject_constant(name: str) -> float:
    raise RecordDecodeError(f"invalid number literal {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise RecordDecodeError(f"number {text} is out of range")
    return value


def decode_record(line: str) -> Record:
    """Decode one NDJSON line, raising ``RecordDecodeError`` on any failure.

    Only standard JSON numbers are accepted: ``NaN``, ``Infinity`` and
    floats that overflow to infinity are decode errors.
    """
    try:
        payload = json.loads(line, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except ValueError as exc:
        # JSONDecodeError, or int digit limits on long number literals
        raise RecordDecodeError(str(exc)) from exc
    except RecursionError as exc:
        raise RecordDecodeError("JSON nesting too deep") from exc
    if payload is None:
        return Record()
    if not isinstance(payload, dict):
        raise RecordDecodeError(f"expected JSON object, got {_type_name(payload)}")
    return record_from_dict(payload)
