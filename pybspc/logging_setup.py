"""Logging setup and utilities."""

import logging
import os
import sys
from typing import TextIO

from .config import is_debug, set_debug

__all__ = [
    "LogObjects",
    "LogStyles",
    "get_logger",
    "init_logger",
    "should_colorize",
]

_ESC = "\x1b["
RESET = f"{_ESC}0m"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    Respects:
    - NO_COLOR environment variable (disables colors)
    - FORCE_COLOR environment variable (forces colors)
    - TTY detection (disables colors when piping)

    Args:
        stream: The output stream to check. Defaults to sys.stderr.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class LogStyles:
    """ANSI codes for log levels."""

    WARNING = ("33", "2")  # yellow, dim
    ERROR = ("31", "2")  # red, dim
    CRITICAL = ("31", "1")  # red, bold


def _style(codes: tuple[str, ...], colored: bool) -> tuple[str, str]:
    if not colored:
        return ("", "")
    return (f"{_ESC}{';'.join(codes)}m", RESET)


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    loggers: list[logging.Logger] = []


class ScreenLogFormatter(logging.Formatter):
    """A custom formatter, adding colors based on log level."""

    def __init__(self, colored: bool | None = None) -> None:
        super().__init__()
        if colored is None:
            colored = should_colorize()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        self._formatters = {
            logging.DEBUG: logging.Formatter(log_format),
            logging.INFO: logging.Formatter(log_format),
        }
        for level, codes in (
            (logging.WARNING, LogStyles.WARNING),
            (logging.ERROR, LogStyles.ERROR),
            (logging.CRITICAL, LogStyles.CRITICAL),
        ):
            prefix, suffix = _style(codes, colored)
            self._formatters[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._formatters.get(record.levelno, self._formatters[logging.INFO])
        return formatter.format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    # detach and close the handlers of a previous init
    for logger in LogObjects.loggers:
        for handler in LogObjects.handlers:
            logger.removeHandler(handler)
    for handler in LogObjects.handlers:
        handler.close()
    LogObjects.handlers.clear()

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)

    for logger in LogObjects.loggers:
        _attach_handlers(logger)


def _attach_handlers(logger: logging.Logger) -> None:
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)


def get_logger(name: str = "pybspc", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    if logger not in LogObjects.loggers:
        LogObjects.loggers.append(logger)
    if LogObjects.handlers:
        _attach_handlers(logger)
    return logger
