"""Logging for ibexa-system-info.

All modules log through the shared ``logger``. Records go to stderr, which
keeps ``collect --json`` output on stdout machine readable.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

LOGGER_NAME = "ibexa_system_info"

TEXT_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        collector = getattr(record, "collector", None)
        if collector:
            entry["collector"] = collector
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Calling this again reuses the existing handler, only the level and
    format are updated.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Emit JSON lines instead of human readable text

    Returns:
        The package logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)

    if not package_logger.handlers:
        package_logger.addHandler(logging.StreamHandler(sys.stderr))

    formatter: logging.Formatter
    if structured:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)

    for handler in package_logger.handlers:
        handler.setFormatter(formatter)

    _apply_level(package_logger, _level(level))
    return package_logger


def _apply_level(target: logging.Logger, level: int) -> None:
    target.setLevel(level)
    for handler in target.handlers:
        handler.setLevel(level)


def set_log_level(level: str) -> None:
    """Change the level of the package logger and its handlers."""
    _apply_level(logger, _level(level))


logger = setup_logging()
