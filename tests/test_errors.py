import inspect

import pytest

from mcuutils.errors import (
    ERROR_MSG_BUFFER_SIZE,
    ErrorCode,
    ErrorInfo,
    default_error_handler,
    error_check,
    error_handle,
    format_error,
    handle_error,
    set_error_handler,
)


@pytest.fixture
def captured():
    reports = []
    previous = set_error_handler(reports.append)
    yield reports
    set_error_handler(previous)


def test_format_error_layout():
    err = ErrorInfo(-1, "boom", "main.c", "main", 12)
    assert format_error(err) == '[Error -1]: boom at "main.c":[12] in function [main]\r\n'


def test_default_handler_writes_to_stderr(capsys):
    err = ErrorInfo(ErrorCode.INVALID_ARGUMENT, "bad", "x.c", "f", 3)
    default_error_handler(err)
    captured_io = capsys.readouterr()
    assert captured_io.err == format_error(err)
    assert captured_io.out == ""


def test_default_handler_ignores_zero_code(capsys):
    default_error_handler(ErrorInfo(ErrorCode.NONE, "fine", "x.c", "f", 3))
    assert capsys.readouterr().err == ""


def test_error_handle_formats_and_locates(captured):
    expected_line = inspect.currentframe().f_lineno + 1
    err = error_handle(-1, "An error occurred in main function. %s", "Additional info")
    assert err.message == "An error occurred in main function. Additional info"
    assert err.code == -1
    assert err.function == "test_error_handle_formats_and_locates"
    assert err.file == __file__
    assert err.line == expected_line
    assert captured == [err]


def test_error_check_true_reports_nothing(captured):
    assert error_check(1 == 1, -2, "never") is None
    assert captured == []


def test_error_check_false_reports(captured):
    err = error_check(1 != 1, -2, "Check failed. Values are equal: %d and %d", 1, 1)
    assert err.message == "Check failed. Values are equal: 1 and 1"
    assert err.code == ErrorCode.INVALID_ARGUMENT
    assert captured == [err]


def test_message_is_truncated_to_buffer(captured):
    err = error_handle(-1, "%s", "x" * 1000)
    assert len(err.message) == ERROR_MSG_BUFFER_SIZE - 1
    assert err.message == "x" * (ERROR_MSG_BUFFER_SIZE - 1)


def test_set_error_handler_returns_previous_and_none_restores_default(capsys):
    reports = []
    previous = set_error_handler(reports.append)
    try:
        assert previous is default_error_handler
        err = ErrorInfo(-5, "m", "f.c", "fn", 1)
        handle_error(err)
        assert reports == [err]
        assert set_error_handler(None) == reports.append
        handle_error(err)
        assert capsys.readouterr().err == format_error(err)
        assert reports == [err]
    finally:
        set_error_handler(previous)


def test_handler_may_raise(captured):
    def raising(err):
        raise RuntimeError(err.message)

    previous = set_error_handler(raising)
    try:
        with pytest.raises(RuntimeError, match="timeout 5"):
            error_handle(ErrorCode.TIMEOUT, "timeout %d", 5)
    finally:
        set_error_handler(previous)