"""
Logging for Login Info.

Everything logs under the ``logininfo`` logger. The console handler colors the
level name; the optional file handler writes plain text with line numbers.
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional


ROOT_LOGGER_NAME = "logininfo"

_RESET = "\033[0m"

# Level name styling on the console
LEVEL_STYLES = {
    logging.DEBUG: "\033[2;36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;41;37m",
}

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
CONSOLE_DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"

# Third-party loggers that are noisy at DEBUG.
_QUIET_LOGGERS = ("asyncio",)


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI style."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        style = LEVEL_STYLES.get(record.levelno) if self.use_colors else None
        if style:
            # Copy so other handlers see the plain level name.
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{style}{record.levelname}{_RESET}"
        return super().format(record)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(ColoredFormatter(CONSOLE_DEBUG_FORMAT, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: str, level: int) -> logging.Handler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(FILE_FORMAT, use_colors=False))
    return handler


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace the ``logininfo`` handlers with a console handler and, optionally,
    a file handler.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Path of a log file to append to
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_console_handler(numeric_level))
    if log_file:
        root_logger.addHandler(_file_handler(log_file, numeric_level))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``logininfo`` namespace for *name*."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def format_exception_summary(
    error: BaseException,
    *,
    max_length: int = 180,
) -> str:
    """
    One-line ``ExceptionName: detail`` text for status lines and CLI errors.

    Whitespace in the detail is collapsed; the result is cut to *max_length*
    with a trailing ``...``.
    """
    name = type(error).__name__
    detail = " ".join(str(error).split())
    summary = f"{name}: {detail}" if detail else name
    if max_length <= 3 or len(summary) <= max_length:
        return summary
    return summary[: max_length - 3].rstrip() + "..."


def exception_exc_info(
    error: BaseException,
) -> tuple[type[BaseException], BaseException, TracebackType | None]:
    """``exc_info`` tuple for logging an exception outside its handler."""
    return (type(error), error, error.__traceback__)


def resolve_log_level(verbose: bool = False, log_level: Optional[str] = None) -> str:
    """``--log-level`` wins over ``--verbose``; the default is INFO."""
    if log_level:
        return log_level.upper()
    return "DEBUG" if verbose else "INFO"


def configure_logging_from_args(verbose: bool = False, log_level: Optional[str] = None,
                                log_file: Optional[str] = None) -> None:
    """Set up logging from the CLI's global flags."""
    setup_logging(level=resolve_log_level(verbose, log_level), log_file=log_file)
