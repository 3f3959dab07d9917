"""
bootstrap/logging_setup.py - Logging configuration for host applications

The engine itself only creates module loggers; handlers are the host's call.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import json
import logging
import sys

if TYPE_CHECKING:
    from venueplan.bootstrap.config import LoggingConfig

logger = logging.getLogger("venueplan.bootstrap.logging")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

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
) -> logging.Logger:
    """
    Configure the ``venueplan`` logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        fmt: Format string for plain-text logs

    Returns:
        The configured ``venueplan`` logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter: logging.Formatter = JSONFormatter() if json_format else logging.Formatter(fmt)

    package_logger = logging.getLogger("venueplan")
    package_logger.setLevel(log_level)

    # Re-running setup replaces our handlers rather than stacking them
    for handler in list(package_logger.handlers):
        if getattr(handler, "_venueplan_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    console_handler._venueplan_handler = True
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        file_handler._venueplan_handler = True
        package_logger.addHandler(file_handler)

    logger.debug(f"Logging configured: level={level} json={json_format} file={log_file}")
    return package_logger


def setup_logging_from_config(config: Optional["LoggingConfig"] = None) -> logging.Logger:
    """Configure logging from a LoggingConfig (defaults to the global config)."""
    if config is None:
        from venueplan.bootstrap.config import get_config
        config = get_config().logging

    return setup_logging(
        level=config.level,
        log_file=config.log_file,
        json_format=config.json_logs,
        fmt=config.format,
    )
