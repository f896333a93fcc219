"""Levelled log messages with a replaceable output function."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

LOG_BUF_SIZE = 256
"""Size of the output buffer; a log line keeps at most one less character."""

_COLOR_END = "\033[0m"


class LogLevel(IntEnum):
    """Log severity, lowest first."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]


_LABELS = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: " INFO",
    LogLevel.WARN: " WARN",
    LogLevel.ERROR: "ERROR",
}

_COLORS = {
    LogLevel.DEBUG: "\033[34m",
    LogLevel.INFO: "\033[32m",
    LogLevel.WARN: "\033[33m",
    LogLevel.ERROR: "\033[31m",
}

LogOutput = Callable[[str], None]


@dataclass
class _Config:
    output: Optional[LogOutput] = None
    level: int = LogLevel.DEBUG
    color: bool = True


_config = _Config()


def set_log_output(func: Optional[LogOutput]) -> None:
    """Send log lines to ``func``; ``None`` writes them to standard output."""
    _config.output = func


def set_log_level(level: int) -> None:
    """Drop messages below ``level``."""
    _config.level = int(level)


def set_log_color(enabled: bool) -> None:
    """Turn ANSI colouring of log lines on or off."""
    _config.color = bool(enabled)


def format_log(level: int, function: str, line: int, message: str, color: bool) -> str:
    """Build one log line, cut to the buffer size."""
    try:
        known = LogLevel(level)
    except ValueError:
        label, start = "UNKNOWN", ""
    else:
        label, start = known.label, known.color
    if color:
        text = f"{start}[{label}] [Fun:{function} Line:{line}] {message}{_COLOR_END}"
    else:
        text = f"[{label}] [Fun:{function} Line:{line}] {message}"
    return text[: LOG_BUF_SIZE - 1]


def log_message(level: int, function: str, line: int, fmt: str, *args) -> Optional[str]:
    """Format and emit a message; return the emitted line, or ``None`` if filtered."""
    if int(level) < _config.level:
        return None
    text = format_log(level, function, line, fmt % args, _config.color)
    if _config.output is not None:
        _config.output(text)
    else:
        sys.stdout.write(text)
    return text


def log_printf(level: int, fmt: str, *args) -> Optional[str]:
    """Log a message tagged with the calling function's name and line."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is None:
            function, line = "<unknown>", 0
        else:
            function, line = caller.f_code.co_name, caller.f_lineno
    finally:
        del frame, caller
    return log_message(level, function, line, fmt, *args)