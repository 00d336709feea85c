"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from levels import Level
from line_writer import Flag


STREAM_NAMES = ("stderr", "stdout")


@dataclass
class LoggerConfig:
    """Logger configuration settings."""

    level: Level = Level.DEBUG
    flags: Flag = Flag(0)
    time_format: str | None = None
    stream: str = "stderr"
    http_url: str | None = None
