"""Leveled logger with severity tags, panic and fatal effects."""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Mapping, TextIO

from levels import Level, level_name, parse_level
from line_writer import LineEmitter, LineWriter

# Frames between LineWriter.output and user code: output, _log, public method.
_CALL_DEPTH = 3


class PanicError(Exception):
    """Raised by Logger.panic after the line has been written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class Logger:
    """Level-filtering logger over a line emitter."""

    def __init__(self, emitter: LineEmitter, *, exit_func: Callable[[int], Any] | None = None) -> None:
        self._emitter = emitter
        self._level = Level.DEBUG
        self._exit = exit_func or _terminate

    @property
    def level(self) -> Level:
        return self._level

    @property
    def emitter(self) -> LineEmitter:
        return self._emitter

    def set_level(self, level: Level | int | str) -> "Logger":
        """Set the minimum level that is written; NONE suppresses everything.

        Integers above NONE clamp to NONE and integers below DEBUG to DEBUG.
        """
        if isinstance(level, str):
            self._level = parse_level(level)
        elif level > Level.NONE:
            self._level = Level.NONE
        elif level < Level.DEBUG:
            self._level = Level.DEBUG
        else:
            self._level = Level(level)
        return self

    def set_flags(self, flags: int) -> "Logger":
        """Forward decoration flags to the emitter."""
        self._emitter.set_flags(flags)
        return self

    def _log(self, level: Level, args: tuple, fmt: str | None = None) -> str | None:
        """Filter, render and write one line.

        Returns:
            The rendered message, or None if the level was filtered out.
        """
        if level < self._level:
            return None
        message = _join(args) if fmt is None else _format(fmt, args)
        self._emitter.output(_CALL_DEPTH, message, level_name(level) + " ")
        return message

    def debug(self, *args: Any) -> None:
        self._log(Level.DEBUG, args)

    def info(self, *args: Any) -> None:
        self._log(Level.INFO, args)

    def warn(self, *args: Any) -> None:
        self._log(Level.WARN, args)

    def error(self, *args: Any) -> None:
        self._log(Level.ERROR, args)

    def panic(self, *args: Any) -> None:
        """Write at PANIC, then raise PanicError with the message."""
        message = self._log(Level.PANIC, args)
        if message is not None:
            raise PanicError(message)

    def fatal(self, *args: Any) -> None:
        """Write at FATAL, then exit the process with status 1."""
        if self._log(Level.FATAL, args) is not None:
            self._exit(1)

    def debugf(self, fmt: str, *args: Any) -> None:
        self._log(Level.DEBUG, args, fmt)

    def infof(self, fmt: str, *args: Any) -> None:
        self._log(Level.INFO, args, fmt)

    def warnf(self, fmt: str, *args: Any) -> None:
        self._log(Level.WARN, args, fmt)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._log(Level.ERROR, args, fmt)

    def panicf(self, fmt: str, *args: Any) -> None:
        message = self._log(Level.PANIC, args, fmt)
        if message is not None:
            raise PanicError(message)

    def fatalf(self, fmt: str, *args: Any) -> None:
        if self._log(Level.FATAL, args, fmt) is not None:
            self._exit(1)


def _join(args: tuple) -> str:
    return " ".join(str(arg) for arg in args)


def _format(fmt: str, args: tuple) -> str:
    """Apply %-substitution; a mismatched format renders as text instead of raising."""
    if not args:
        return fmt
    try:
        if len(args) == 1 and isinstance(args[0], Mapping):
            return fmt % args[0]
        return fmt % args
    except (TypeError, ValueError, KeyError) as exc:
        return f"{fmt} {_join(args)} (format error: {exc})"


def _terminate(code: int) -> None:
    """Exit the whole process, from any thread, after flushing stdio."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, OSError, ValueError):
            pass
    os._exit(code)


def new_logger(stream: TextIO, time_format: str | None = None) -> Logger:
    """Build a Logger writing undecorated lines to a stream."""
    return Logger(LineWriter(stream, 0, time_format=time_format))


_DEFAULT: Logger | None = None
_DEFAULT_LOCK = threading.Lock()


def get_logger() -> Logger:
    """Return the shared logger instance, configured from the environment."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            from config import build_logger, config_from_env

            _DEFAULT = build_logger(config_from_env())
        return _DEFAULT


def set_default_logger(logger: Logger | None) -> None:
    """Replace the shared logger; None rebuilds it on next use."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        _DEFAULT = logger
