"""RFC 3339 timestamps with nanosecond precision."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

NANOS_PER_SECOND = 1_000_000_000
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_offset(offset: timedelta | None) -> str:
    if not offset:
        return "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_timestamp(nanoseconds: int, tz: tzinfo | None = timezone.utc) -> str:
    """Format nanoseconds since the Unix epoch as RFC 3339.

    The fractional part keeps only significant digits and is left out when
    zero. ``tz=None`` uses the host's local timezone.
    """
    seconds, nanos = divmod(nanoseconds, NANOS_PER_SECOND)
    moment = (_EPOCH + timedelta(seconds=seconds)).astimezone(tz)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if nanos:
        text += "." + f"{nanos:09d}".rstrip("0")
    return text + _format_offset(moment.utcoffset())
