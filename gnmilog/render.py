"""Render decoded gNMI values as canonical text.

Values arrive as whatever ``json.loads`` produced: ``str``, ``int``,
``float``, ``bool``, ``None``, ``dict`` or ``list``. Rendering is total:
unexpected shapes fall back to compact JSON or ``str()`` instead of raising.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Iterable

LEAFLIST_KEY = "element"
TYPED_VALUE_KEY = "Value"


def format_float(value: float) -> str:
    """Shortest round-tripping digits, always in fixed notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_compact_json(value: Any) -> str:
    try:
        return json.dumps(
            value,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError):
        return str(value)


def render_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    # bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, dict):
        elements = value.get(LEAFLIST_KEY)
        if isinstance(elements, list):
            return render_leaflist(elements)
    return to_compact_json(value)


def typed_value(element: Any) -> tuple[bool, Any]:
    """Unwrap ``{"Value": {"<kind>_val": payload}}`` to ``(True, payload)``.

    Returns ``(False, None)`` for anything else.
    """
    if not isinstance(element, dict):
        return False, None
    wrapper = element.get(TYPED_VALUE_KEY)
    if not isinstance(wrapper, dict) or len(wrapper) != 1:
        return False, None
    (payload,) = wrapper.values()
    return True, payload


def render_leaflist(elements: Iterable[Any]) -> str:
    """Render gNMI leaf-list elements as ``[a, b, c]``; malformed entries are dropped."""
    rendered: list[str] = []
    for element in elements:
        ok, payload = typed_value(element)
        if ok:
            rendered.append(render_value(payload))
    return "[" + ", ".join(rendered) + "]"
