"""Severity levels and their four-letter tags."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from rapidfuzz import fuzz, process


class Level(IntEnum):
    """Ordered severity levels; NONE is a threshold that suppresses everything."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    PANIC = 4
    FATAL = 5
    NONE = 6

    @property
    def tag(self) -> str:
        return level_name(self)


_LEVEL_NAMES: Dict[Level, str] = {
    Level.DEBUG: "DEBU",
    Level.INFO: "INFO",
    Level.WARN: "WARN",
    Level.ERROR: "ERRO",
    Level.PANIC: "PANI",
    Level.FATAL: "FATA",
}
_LEVELS_BY_NAME: Dict[str, Level] = {name: level for level, name in _LEVEL_NAMES.items()}


def level_name(level: int) -> str:
    """Return the tag for a level, or an empty string for NONE and unknown values."""
    try:
        return _LEVEL_NAMES.get(Level(level), "")
    except (TypeError, ValueError):
        return ""


def parse_level(name: str) -> Level:
    """Look up a level by its exact tag.

    Unrecognized names map to Level.NONE so a mistyped level disables output
    instead of failing.
    """
    return _LEVELS_BY_NAME.get(name, Level.NONE)


def suggest_level(name: str, min_score: float = 60.0) -> str | None:
    """Return the closest tag to a mistyped level name.

    Args:
        name: Raw level name as typed by a user.
        min_score: Minimum similarity score (0-100) to accept a suggestion.

    Returns:
        Canonical tag, or None if nothing is close enough.
    """
    candidate = (name or "").strip().upper()
    if not candidate:
        return None
    if candidate in _LEVELS_BY_NAME:
        return candidate
    # Prefix matches catch full names like WARNING or ERROR.
    for tag in _LEVELS_BY_NAME:
        if candidate.startswith(tag) or tag.startswith(candidate):
            return tag
    match = process.extractOne(candidate, list(_LEVELS_BY_NAME), scorer=fuzz.QRatio)
    if match is None or match[1] < min_score:
        return None
    return match[0]
