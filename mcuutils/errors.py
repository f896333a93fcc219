"""Error reporting with a replaceable handler.

Errors are described by an :class:`ErrorInfo` record that carries the code,
a formatted message and the location that raised it.  Every error goes
through the currently installed handler; the default one writes a single
line to standard error for any non-zero code.
"""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from enum import IntEnum
from types import FrameType
from typing import Callable, Optional

ERROR_MSG_BUFFER_SIZE = 256
"""Size of the message buffer; messages keep at most one less character."""


class ErrorCode(IntEnum):
    """Common error codes."""

    NONE = 0
    OPERATION_FAILED = -1
    INVALID_ARGUMENT = -2
    NULL_POINTER = -3
    INVALID_STATE = -4
    NOT_INITIALIZED = -5
    ALREADY_INITIALIZED = -6

    OUT_OF_MEMORY = -10
    OUT_OF_BOUNDS = -11
    BUFFER_OVERFLOW = -12
    DIVISION_BY_ZERO = -13
    CRC_MISMATCH = -14

    DEVICE_NOT_FOUND = -20
    DEVICE_BUSY = -21
    HW_FAILURE = -22
    IO = -23

    TIMEOUT = -30


@dataclass(frozen=True)
class ErrorInfo:
    """One error together with the place in the code where it was raised."""

    code: int
    message: str
    file: str
    function: str
    line: int


ErrorHandler = Callable[[ErrorInfo], None]


def format_error(err: ErrorInfo) -> str:
    """Render an error as the one-line text written by the default handler."""
    return (
        f'[Error {int(err.code)}]: {err.message} at "{err.file}":'
        f"[{err.line}] in function [{err.function}]\r\n"
    )


def default_error_handler(err: ErrorInfo) -> None:
    """Write the error to standard error unless its code is zero."""
    if err.code != 0:
        sys.stderr.write(format_error(err))


_handler: ErrorHandler = default_error_handler


def set_error_handler(handler: Optional[ErrorHandler]) -> ErrorHandler:
    """Install ``handler`` (``None`` restores the default); return the previous one."""
    global _handler
    previous = _handler
    _handler = handler if handler is not None else default_error_handler
    return previous


def handle_error(err: ErrorInfo) -> None:
    """Pass ``err`` to the installed handler."""
    _handler(err)


def _format_message(fmt: str, args: tuple) -> str:
    message = fmt % args
    return message[: ERROR_MSG_BUFFER_SIZE - 1]


def _raise_info(frame: Optional[FrameType], code: int, fmt: str, args: tuple) -> ErrorInfo:
    if frame is None:
        file, function, line = "<unknown>", "<unknown>", 0
    else:
        file = frame.f_code.co_filename
        function = frame.f_code.co_name
        line = frame.f_lineno
    err = ErrorInfo(int(code), _format_message(fmt, args), file, function, line)
    handle_error(err)
    return err


def error_handle(code: int, fmt: str, *args) -> ErrorInfo:
    """Signal an error with a printf-style message; return its description."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        return _raise_info(caller, code, fmt, args)
    finally:
        del frame, caller


def error_check(expr, code: int, fmt: str, *args) -> Optional[ErrorInfo]:
    """Signal an error when ``expr`` is false; return its description, or ``None``."""
    if expr:
        return None
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        return _raise_info(caller, code, fmt, args)
    finally:
        del frame, caller