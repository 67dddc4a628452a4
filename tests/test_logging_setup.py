"""Tests for the logging setup."""

import logging
import os
from io import StringIO
from unittest.mock import patch

import pytest

from pybspc import config
from pybspc.logging_setup import LogObjects, ScreenLogFormatter, get_logger, init_logger, should_colorize


def make_record(level, msg="hello"):
    return logging.LogRecord("pybspc.test", level, __file__, 1, msg, None, None)


def test_should_colorize_respects_no_color():
    with patch.dict(os.environ, {"NO_COLOR": "1"}, clear=False):
        assert should_colorize() is False


def test_should_colorize_respects_force_color():
    stream = StringIO()
    with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}, clear=False):
        assert should_colorize(stream) is True


def test_should_colorize_non_tty():
    stream = StringIO()
    with patch.dict(os.environ, {"NO_COLOR": "", "FORCE_COLOR": ""}, clear=False):
        assert should_colorize(stream) is False


def test_formatter_colors_errors_only():
    formatter = ScreenLogFormatter(colored=True)
    assert "\x1b[" not in formatter.format(make_record(logging.INFO))
    assert formatter.format(make_record(logging.ERROR)).startswith("\x1b[31;2m")
    assert formatter.format(make_record(logging.CRITICAL)).endswith("\x1b[0m")


def test_formatter_without_colors():
    formatter = ScreenLogFormatter(colored=False)
    assert "\x1b[" not in formatter.format(make_record(logging.ERROR))
    assert "hello" in formatter.format(make_record(logging.WARNING))


@pytest.fixture
def saved_settings(monkeypatch):
    monkeypatch.setattr(config._settings_state, "value", config._settings_state.value)


@pytest.mark.usefixtures("saved_settings")
def test_get_logger_level_follows_debug():
    config.set_debug(True)
    assert get_logger("pybspc.test_debug").level == logging.DEBUG
    config.set_debug(False)
    assert get_logger("pybspc.test_quiet").level == logging.WARNING
    assert get_logger("pybspc.test_forced", level=logging.INFO).level == logging.INFO


def test_get_logger_does_not_duplicate_handlers():
    logger = get_logger("pybspc.test_handlers")
    count = len(logger.handlers)
    get_logger("pybspc.test_handlers")
    assert len(logger.handlers) == count
    assert all(handler in logger.handlers for handler in LogObjects.handlers)


@pytest.fixture
def restore_logging():
    "Puts back the handlers installed by pytest_configure"
    yield
    init_logger("/dev/null")


@pytest.mark.usefixtures("restore_logging")
def test_init_logger_releases_previous_handlers(tmp_path):
    logger = get_logger("pybspc.test_reinit")
    init_logger(str(tmp_path / "first.log"))
    old_file_handler = next(h for h in LogObjects.handlers if isinstance(h, logging.FileHandler))
    assert old_file_handler in logger.handlers

    init_logger(str(tmp_path / "second.log"))
    assert old_file_handler.stream is None  # closed
    assert old_file_handler not in logger.handlers
    assert all(handler in logger.handlers for handler in LogObjects.handlers)
    assert len(logger.handlers) == len(LogObjects.handlers)
