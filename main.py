#!/usr/bin/env python3
"""CLI entrypoint for writing a single log line."""

from __future__ import annotations

import sys

from cli import get_emit_options
from config import build_logger, config_from_dict, env_overrides, merge_dicts
from levels import Level, parse_level, suggest_level
from logger import PanicError


_METHODS = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warn",
    Level.ERROR: "error",
    Level.PANIC: "panic",
    Level.FATAL: "fatal",
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Returns:
        Process exit code. FATA lines exit with status 1 from inside the logger.
    """
    options = get_emit_options(argv)
    level = parse_level(options.tag)
    if level == Level.NONE:
        hint = suggest_level(options.tag)
        print(f"Unknown level: {options.tag}" + (f" (did you mean {hint}?)" if hint else ""), file=sys.stderr)
        return 2

    try:
        config = config_from_dict(merge_dicts(env_overrides(), options.overrides))
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    logger = build_logger(config)
    name = _METHODS[level]
    try:
        if options.formatted and options.message:
            fmt, *args = options.message
            getattr(logger, name + "f")(fmt, *args)
        else:
            getattr(logger, name)(*options.message)
    except PanicError as exc:
        print(f"panic: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
