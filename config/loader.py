"""Configuration normalization and logger construction."""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, Mapping

from config.models import STREAM_NAMES, LoggerConfig
from levels import Level, parse_level
from line_writer import Flag, LineWriter, parse_flags
from logger import Logger
from sinks import HttpLineSink


ENV_PREFIX = "SEVLOG_"
ENV_KEYS = {
    "level": "LEVEL",
    "flags": "FLAGS",
    "time_format": "TIME_FORMAT",
    "stream": "STREAM",
    "http_url": "HTTP_URL",
}


def _as_level(value: Any, default: Level) -> Level:
    if value is None or value == "":
        return default
    if isinstance(value, Level):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Level(value)
        except ValueError:
            return Level.NONE
    return parse_level(str(value).strip())


def _as_flags(value: Any) -> Flag:
    if not value:
        return Flag(0)
    if isinstance(value, int) and not isinstance(value, bool):
        return Flag(value)
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return parse_flags(str(value))


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def config_from_dict(raw: Dict[str, Any]) -> LoggerConfig:
    """Build a LoggerConfig from a raw dictionary.

    Unknown level names degrade to Level.NONE.

    Raises:
        ValueError: If flags or stream name are invalid.
    """
    stream = str(raw.get("stream") or "stderr").strip().lower()
    if stream not in STREAM_NAMES:
        raise ValueError(f"Unknown stream: {stream} (expected one of {', '.join(STREAM_NAMES)})")
    return LoggerConfig(
        level=_as_level(raw.get("level"), Level.DEBUG),
        flags=_as_flags(raw.get("flags")),
        time_format=_as_str(raw.get("time_format")),
        stream=stream,
        http_url=_as_str(raw.get("http_url")),
    )


def env_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Collect SEVLOG_* environment variables as raw config values."""
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    for key, suffix in ENV_KEYS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is not None:
            raw[key] = value
    return raw


def config_from_env(environ: Mapping[str, str] | None = None) -> LoggerConfig:
    """Build a LoggerConfig from SEVLOG_* environment variables."""
    return config_from_dict(env_overrides(environ))


def build_logger(config: LoggerConfig) -> Logger:
    """Construct a Logger for the configured destination."""
    if config.http_url:
        stream = HttpLineSink(config.http_url)
    else:
        stream = sys.stdout if config.stream == "stdout" else sys.stderr
    writer = LineWriter(stream, config.flags, time_format=config.time_format)
    return Logger(writer).set_level(config.level)
