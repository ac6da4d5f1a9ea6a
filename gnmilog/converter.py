"""Convert gNMI NDJSON captures into ``[timestamp] path = value`` lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from gnmilog.config import Settings
from gnmilog.errors import InputOpenError, RecordDecodeError, StreamReadError
from gnmilog.paths import compose_path
from gnmilog.records import Record, decode_record
from gnmilog.render import render_value
from gnmilog.timefmt import format_timestamp

logger = logging.getLogger(__name__)


@dataclass
class ConversionStats:
    lines_read: int = 0
    blank_lines: int = 0
    records: int = 0
    lines_emitted: int = 0
    decode_errors: int = 0


def format_record(record: Record, tz: tzinfo | None = timezone.utc) -> Iterator[str]:
    """Yield one output line per value of every update in ``record``."""
    stamp = format_timestamp(record.timestamp, tz)
    for update in record.updates:
        full_path = compose_path(record.prefix, update.path)
        if not full_path:
            if update.values:
                logger.debug("skipping %d value(s) with no prefix or path", len(update.values))
            continue
        for value in update.values.values():
            yield f"[{stamp}] {full_path} = {render_value(value)}"


def line_preview(line: str, max_chars: int) -> str:
    if len(line) > max_chars:
        return line[:max_chars] + "..."
    return line


def _report_decode_error(err: TextIO, lineno: int, line: str, exc: RecordDecodeError, settings: Settings) -> None:
    print(f"Error parsing JSON on line {lineno}: {exc}", file=err)
    if settings.preview_enabled:
        print(f"Line preview: {line_preview(line, settings.preview_max_chars)}", file=err)


def convert_stream(
    lines: Iterable[str],
    out: TextIO,
    err: TextIO,
    settings: Settings | None = None,
) -> ConversionStats:
    """Convert ``lines`` to ``out``; bad lines are reported on ``err`` and skipped.

    Raises:
        StreamReadError: iterating ``lines`` failed with an OSError
    """
    settings = settings or Settings()
    stats = ConversionStats()
    tz = settings.tz
    iterator = iter(lines)
    while True:
        try:
            raw = next(iterator)
        except StopIteration:
            break
        except OSError as exc:
            raise StreamReadError(str(exc)) from exc

        stats.lines_read += 1
        line = raw.rstrip("\r\n")
        if not line:
            stats.blank_lines += 1
            continue

        try:
            record = decode_record(line)
        except RecordDecodeError as exc:
            stats.decode_errors += 1
            _report_decode_error(err, stats.lines_read, line, exc, settings)
            continue

        stats.records += 1
        for output_line in format_record(record, tz):
            out.write(output_line + "\n")
            stats.lines_emitted += 1

    logger.debug(
        "read %d line(s): %d record(s), %d output line(s), %d blank, %d decode error(s)",
        stats.lines_read,
        stats.records,
        stats.lines_emitted,
        stats.blank_lines,
        stats.decode_errors,
    )
    return stats


def convert_file(
    path: Path,
    out: TextIO,
    err: TextIO,
    settings: Settings | None = None,
) -> ConversionStats:
    """Open ``path`` as UTF-8 and convert it.

    Only line feeds end a line; a bare carriage return is JSON whitespace.

    Raises:
        InputOpenError: the file cannot be opened
        StreamReadError: reading failed part way through
    """
    try:
        handle = path.open(encoding="utf-8", errors="replace", newline="\n")
    except OSError as exc:
        raise InputOpenError(f"open {path}: {exc.strerror or exc}") from exc
    with handle:
        return convert_stream(handle, out, err, settings)
