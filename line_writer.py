"""Line writer that decorates each line with an optional timestamp and caller."""

from __future__ import annotations

import os
import sys
import threading
from datetime import datetime, timezone
from enum import IntFlag
from typing import Callable, Protocol, TextIO


class Flag(IntFlag):
    """Line decoration flags."""

    DATE = 1  # 2009/01/23
    TIME = 2  # 01:23:23
    MICROSECONDS = 4  # 01:23:23.123123, implies TIME
    LONG_FILE = 8  # /a/b/c/d.py:23
    SHORT_FILE = 16  # d.py:23, overrides LONG_FILE
    UTC = 32  # use UTC for DATE and TIME
    STD = DATE | TIME


def parse_flags(text: str) -> Flag:
    """Parse a comma or pipe separated list of flag names.

    Args:
        text: Flag names such as "date,time" or "std|utc".

    Returns:
        Combined Flag value (0 for an empty string).

    Raises:
        ValueError: If a name is not a known flag.
    """
    flags = Flag(0)
    for raw in str(text or "").replace("|", ",").split(","):
        name = raw.strip().upper()
        if not name:
            continue
        try:
            flags |= Flag[name]
        except KeyError:
            raise ValueError(f"Unknown log flag: {raw.strip()}") from None
    return flags


class LineEmitter(Protocol):
    """Destination that writes one decorated line per call."""

    @property
    def flags(self) -> Flag:
        """Current decoration flags."""

    def set_flags(self, flags: int) -> None:
        """Replace the decoration flags."""

    def output(self, calldepth: int, message: str, prefix: str = "") -> bool:
        """Write one line.

        calldepth counts frames from output itself: 0 is output, 1 its caller.
        """


class LineWriter:
    """Thread-safe line writer over a text stream."""

    def __init__(
        self,
        stream: TextIO,
        flags: int = 0,
        *,
        time_format: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._stream = stream
        self._flags = Flag(flags)
        self._time_format = time_format
        self._clock = clock or datetime.now
        self._lock = threading.Lock()

    @property
    def flags(self) -> Flag:
        return self._flags

    @property
    def time_format(self) -> str | None:
        return self._time_format

    def set_flags(self, flags: int) -> None:
        self._flags = Flag(flags)

    def _format_time(self, now: datetime, flags: Flag) -> str:
        if flags & Flag.UTC:
            now = now.astimezone(timezone.utc)
        if self._time_format:
            return now.strftime(self._time_format) + " "
        parts = []
        if flags & Flag.DATE:
            parts.append(now.strftime("%Y/%m/%d "))
        if flags & (Flag.TIME | Flag.MICROSECONDS):
            parts.append(now.strftime("%H:%M:%S"))
            if flags & Flag.MICROSECONDS:
                parts.append(f".{now.microsecond:06d}")
            parts.append(" ")
        return "".join(parts)

    @staticmethod
    def _caller(depth: int, flags: Flag) -> str:
        try:
            frame = sys._getframe(depth)
        except ValueError:
            filename, lineno = "???", 0
        else:
            filename, lineno = frame.f_code.co_filename, frame.f_lineno
        if flags & Flag.SHORT_FILE:
            filename = os.path.basename(filename)
        return f"{filename}:{lineno}: "

    def format_line(self, message: str, prefix: str = "", *, caller: str = "") -> str:
        """Compose a full line without writing it."""
        flags = self._flags
        header = ""
        if flags & (Flag.DATE | Flag.TIME | Flag.MICROSECONDS):
            header = self._format_time(self._clock(), flags)
        line = f"{prefix}{header}{caller}{message}"
        if not line.endswith("\n"):
            line += "\n"
        return line

    def output(self, calldepth: int, message: str, prefix: str = "") -> bool:
        """Write one line, attributing it to the frame calldepth levels up.

        Returns:
            True if the line was written, False if the stream failed.
        """
        caller = ""
        if self._flags & (Flag.LONG_FILE | Flag.SHORT_FILE):
            # +1 for the _caller frame itself.
            caller = self._caller(calldepth + 1, self._flags)
        line = self.format_line(message, prefix, caller=caller)
        with self._lock:
            try:
                self._stream.write(line)
                flush = getattr(self._stream, "flush", None)
                if flush is not None:
                    flush()
            except (OSError, ValueError):
                return False
        return True
