"""
bootstrap/logging_setup.py - Logging setup

Library code only creates loggers; host applications call setup_logging()
once to attach handlers.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import json
import logging
import sys

if TYPE_CHECKING:
    from .config import LoggingConfig

logger = logging.getLogger("modreload.bootstrap.logging_setup")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    json_format: bool = False,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        fmt: Format string for plain-text logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    logger.debug(f"Logging configured at {logging.getLevelName(log_level)}")


def setup_logging_from_config(config: "LoggingConfig") -> None:
    """Apply a LoggingConfig."""
    setup_logging(
        level=config.level,
        log_file=config.log_file,
        json_format=config.json_logs,
        fmt=config.format,
    )
