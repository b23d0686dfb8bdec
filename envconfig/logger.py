"""Logging configuration for envconfig using loguru."""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = "<level>{message}</level>"
FILE_FORMAT = "{time:HH:mm:ss} | {level:<8} | {message}"

# Handler ids installed by setup_logger, so a second call replaces them
_handler_ids = []


def setup_logger(
    console_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    file_level: str = "DEBUG"
):
    """
    Set up loguru logger with a console output and an optional file output.

    Args:
        console_level: Log level for console output
        log_file: Path of a log file; no file output when None
        file_level: Log level for file output
    """
    while _handler_ids:
        logger.remove(_handler_ids.pop())

    # Console handler - diagnostics go to stderr
    _handler_ids.append(logger.add(
        sys.stderr,
        level=console_level,
        format=CONSOLE_FORMAT,
    ))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(logger.add(
            log_path,
            level=file_level,
            format=FILE_FORMAT,
            rotation="1 day",
            retention="7 days",
        ))


def get_component_logger(component: str):
    """
    Get a logger bound to a package component.

    Args:
        component: Component name (e.g., "environment", "cli")

    Returns:
        Bound logger for the component
    """
    return logger.bind(component=component)


# Remove default handler and initialize from the process environment
logger.remove()
setup_logger(
    console_level=os.getenv("ENVCONFIG_LOG_LEVEL", "INFO").upper(),
    log_file=os.getenv("ENVCONFIG_LOG_FILE") or None,
)

__all__ = ["logger", "setup_logger", "get_component_logger"]
