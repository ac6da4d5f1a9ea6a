import sys
from datetime import timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gnmilog.timefmt import INT64_MAX, INT64_MIN, format_timestamp  # noqa: E402


@pytest.mark.parametrize(
    ("nanoseconds", "expected"),
    [
        (0, "1970-01-01T00:00:00Z"),
        (1700000000000000000, "2023-11-14T22:13:20Z"),
        (1700000000123456000, "2023-11-14T22:13:20.123456Z"),
        (1700000000000000001, "2023-11-14T22:13:20.000000001Z"),
        (1700000000100000000, "2023-11-14T22:13:20.1Z"),
        (-1, "1969-12-31T23:59:59.999999999Z"),
        (INT64_MAX, "2262-04-11T23:47:16.854775807Z"),
        (INT64_MIN, "1677-09-21T00:12:43.145224192Z"),
    ],
)
def test_format_timestamp_utc(nanoseconds, expected):
    assert format_timestamp(nanoseconds) == expected


def test_positive_offset():
    tz = timezone(timedelta(hours=5, minutes=30))
    assert format_timestamp(1700000000000000000, tz) == "2023-11-15T03:43:20+05:30"


def test_negative_offset():
    tz = timezone(timedelta(hours=-8))
    assert format_timestamp(1700000000500000000, tz) == "2023-11-14T14:13:20.5-08:00"


def test_zero_offset_zone_prints_z():
    assert format_timestamp(0, timezone(timedelta(0), "GMT")).endswith("Z")


def test_local_time_has_offset_suffix():
    text = format_timestamp(1700000000000000000, None)
    assert text.startswith("2023-11-1")
    assert text.endswith("Z") or text[-6] in "+-"
