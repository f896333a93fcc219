import inspect

import pytest

from mcuutils.log import (
    LOG_BUF_SIZE,
    LogLevel,
    format_log,
    log_message,
    log_printf,
    set_log_color,
    set_log_level,
    set_log_output,
)


@pytest.fixture(autouse=True)
def reset_log_state():
    yield
    set_log_output(None)
    set_log_level(LogLevel.DEBUG)
    set_log_color(True)


def test_format_plain_line():
    assert format_log(LogLevel.INFO, "main", 7, "hello\n", False) == "[ INFO] [Fun:main Line:7] hello\n"


def test_format_colored_wraps_plain_text():
    plain = format_log(LogLevel.ERROR, "f", 1, "msg", False)
    colored = format_log(LogLevel.ERROR, "f", 1, "msg", True)
    assert colored == "\033[31m" + plain + "\033[0m"


def test_unknown_level_label_has_no_color():
    text = format_log(42, "f", 1, "msg", True)
    assert text.startswith("[UNKNOWN]")
    assert text.endswith("msg\033[0m")


def test_format_truncated_to_buffer():
    text = format_log(LogLevel.DEBUG, "f", 1, "y" * 1000, True)
    assert len(text) == LOG_BUF_SIZE - 1
    assert not text.endswith("\033[0m")


def test_custom_output_receives_line():
    lines = []
    set_log_output(lines.append)
    set_log_color(False)
    result = log_message(LogLevel.WARN, "fn", 3, "value %d\n", 9)
    assert lines == [result]
    assert result == format_log(LogLevel.WARN, "fn", 3, "value 9\n", False)


def test_default_output_is_stdout(capsys):
    result = log_message(LogLevel.INFO, "fn", 4, "hi\n")
    assert capsys.readouterr().out == result
    assert result == format_log(LogLevel.INFO, "fn", 4, "hi\n", True)


def test_level_filter_drops_lower_messages():
    lines = []
    set_log_output(lines.append)
    set_log_level(LogLevel.WARN)
    assert log_message(LogLevel.INFO, "fn", 1, "skip") is None
    assert log_message(LogLevel.DEBUG, "fn", 1, "skip") is None
    kept = log_message(LogLevel.ERROR, "fn", 1, "keep")
    assert lines == [kept]


def test_log_printf_uses_caller_location():
    lines = []
    set_log_output(lines.append)
    set_log_color(False)
    expected_line = inspect.currentframe().f_lineno + 1
    result = log_printf(LogLevel.ERROR, "code %d", 5)
    assert result == format_log(
        LogLevel.ERROR, "test_log_printf_uses_caller_location", expected_line, "code 5", False
    )
    assert lines == [result]


@pytest.mark.parametrize(
    "level, prefix",
    [
        (LogLevel.DEBUG, "[DEBUG] "),
        (LogLevel.INFO, "[ INFO] "),
        (LogLevel.WARN, "[ WARN] "),
        (LogLevel.ERROR, "[ERROR] "),
    ],
)
def test_level_labels_are_aligned(level, prefix):
    text = format_log(level, "f", 1, "m", False)
    assert text == prefix + "[Fun:f Line:1] m"