"""Structured logging for Kalkulator Mini.

Every module logs under the ``kalkulator_mini`` namespace; the CLI calls
:func:`setup_logging` once, library callers may leave logging unconfigured.
"""

import logging
import sys
from datetime import datetime
from typing import Optional, Union

ROOT_LOGGER_NAME = "kalkulator_mini"


class StructuredFormatter(logging.Formatter):
    """One line per record: ISO timestamp, level, logger name, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(
    level: Union[str, int] = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Configure the ``kalkulator_mini`` logger.

    Handlers from an earlier call are closed and replaced, so repeated
    calls leave no open log files behind.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR) or numeric level;
            unknown names fall back to WARNING
        log_file: Also append records to this file

    Returns:
        The configured root logger of the package
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter()
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for one component, e.g. ``get_logger("solver")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
