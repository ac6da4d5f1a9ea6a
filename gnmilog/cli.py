from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from gnmilog import __version__
from gnmilog.config import load_settings
from gnmilog.converter import convert_file
from gnmilog.errors import ConfigValidationError, InputOpenError, StreamReadError
from gnmilog.exit_codes import EXIT_FAILURE, EXIT_SUCCESS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gnmilog",
        description="Print gNMI subscribe messages from an NDJSON capture as readable log lines.",
    )
    parser.add_argument(
        "-f",
        "--file",
        required=True,
        type=Path,
        help="Input file containing gNMI subscribe messages in NDJSON format",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument(
        "--no-preview",
        dest="preview",
        action="store_false",
        default=None,
        help="Do not print a preview of lines that fail to parse",
    )
    parser.add_argument(
        "--preview-chars",
        type=int,
        metavar="N",
        help="Truncate line previews after N characters (default: 200)",
    )
    parser.add_argument(
        "--local-time",
        action="store_true",
        help="Format timestamps in the local timezone instead of UTC",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    preview: dict[str, Any] = {}
    if args.preview is not None:
        preview["enabled"] = args.preview
    if args.preview_chars is not None:
        preview["max_chars"] = args.preview_chars
    if preview:
        overrides["preview"] = preview
    if args.local_time:
        overrides["timezone"] = "local"
    return overrides


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _discard_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError) as exc:
        logger.debug("could not redirect stdout: %s", exc)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config, overrides_from_args(args))
    except ConfigValidationError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        for message in exc.errors:
            print(f"  - {message}", file=sys.stderr)
        return EXIT_FAILURE
    logger.debug("settings: %s", settings)

    try:
        convert_file(args.file, sys.stdout, sys.stderr, settings)
    except InputOpenError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except StreamReadError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except BrokenPipeError:
        # reader went away (e.g. piped into head)
        _discard_stdout()
        return EXIT_FAILURE
    except OSError as exc:
        print(f"Error writing output: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
