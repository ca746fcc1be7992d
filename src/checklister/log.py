"""Centralized logging configuration for Checklister.

Usage:
    from .log import get_logger
    logger = get_logger(__name__)

Environment variables:
    CHECKLISTER_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

ROOT_LOGGER_NAME = "checklister"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr currently is."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def parse_level(name: str | None, default: int = DEFAULT_LOG_LEVEL) -> int:
    """Map a level name like 'debug' to a logging constant."""
    if not name:
        return default
    return _LEVELS.get(name.strip().upper(), default)


def configure_logging(level: int | str | None = None) -> None:
    """Configure the checklister logger namespace.

    Args:
        level: Log level or level name. If None, reads CHECKLISTER_LOG_LEVEL
               or uses DEFAULT_LOG_LEVEL.
    """
    global _logging_configured

    if _logging_configured:
        return

    env_level = os.environ.get("CHECKLISTER_LOG_LEVEL")
    if env_level:
        resolved = parse_level(env_level)
    elif isinstance(level, str):
        resolved = parse_level(level)
    elif level is None:
        resolved = DEFAULT_LOG_LEVEL
    else:
        resolved = level

    log_format = LOG_FORMAT_DEBUG if resolved == logging.DEBUG else LOG_FORMAT

    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(log_format))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(resolved)
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Args:
        name: Module name, typically __name__

    Returns:
        Logger under the checklister namespace
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

