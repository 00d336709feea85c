"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Dict

from config.models import STREAM_NAMES


@dataclass
class EmitOptions:
    """Parsed CLI options for emitting one line."""

    tag: str
    message: list[str]
    formatted: bool
    overrides: Dict[str, Any]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Args:
        argv: Optional argument list.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        prog="sevlog",
        description="Write one severity-tagged log line.",
    )
    parser.add_argument("--level", help="Minimum level to emit (DEBU, INFO, WARN, ERRO, PANI, FATA)")
    parser.add_argument("--flags", help="Line decoration flags, e.g. date,time,short_file")
    parser.add_argument("--time-format", help="strftime format used for the date/time header")
    parser.add_argument("--stream", choices=list(STREAM_NAMES), help="Output stream (default: stderr)")
    parser.add_argument("--url", help="POST lines to this HTTP endpoint instead of a stream")
    parser.add_argument(
        "-f",
        "--format",
        action="store_true",
        help="Treat the first message word as a %%-format string for the remaining words",
    )
    parser.add_argument("tag", help="Level tag of the line, e.g. WARN")
    parser.add_argument("message", nargs="*", help="Message words")
    return parser.parse_args(argv)


def get_emit_options(argv: list[str] | None = None) -> EmitOptions:
    """Build EmitOptions from CLI arguments.

    Args:
        argv: Optional argument list.

    Returns:
        EmitOptions with config overrides keyed like LoggerConfig fields.
    """
    args = _parse_args(argv)
    overrides: Dict[str, Any] = {
        "level": args.level,
        "flags": args.flags,
        "time_format": args.time_format,
        "stream": args.stream,
        "http_url": args.url,
    }
    return EmitOptions(
        tag=args.tag,
        message=list(args.message),
        formatted=bool(args.format),
        overrides=overrides,
    )
