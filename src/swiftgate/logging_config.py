"""Logging configuration for swiftgate with log rotation.

The hook speaks to Claude Code through its exit code and stderr, so log
records never go to the console unless explicitly asked for. They go to a
rotating file instead.

Log Rotation Policy:
- Max file size: 1 MB per log file
- Backup count: 3 (keeps swiftgate.log, swiftgate.log.1, ..., swiftgate.log.3)
- Total max disk usage: ~4 MB for logs
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = "~/.swiftgate/logs"
DEFAULT_LOG_FILE = "swiftgate.log"
DEFAULT_MAX_BYTES = 1024 * 1024  # 1 MB per file
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ROOT_LOGGER_NAME = "swiftgate"

# Unconfigured loggers stay silent instead of falling back to stderr
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    log_level: int | str = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    console_output: bool = False,
) -> logging.Logger:
    """Configure swiftgate logging with automatic log rotation.

    Args:
        log_dir: Directory for log files (default: ~/.swiftgate/logs)
        log_file: Log file name (default: swiftgate.log)
        max_bytes: Maximum size per log file before rotation (default: 1 MB)
        backup_count: Number of backup files to keep (default: 3)
        log_level: Logging level, as an int or a name like "DEBUG"
        log_format: Log message format
        console_output: Whether to also log to stderr (default: False)

    Returns:
        The root swiftgate logger instance.

    Raises:
        OSError: If the log directory cannot be created or opened.
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = DEFAULT_LOG_LEVEL

    log_path = Path(os.path.expanduser(log_dir))
    log_path.mkdir(parents=True, exist_ok=True)
    full_log_path = log_path / log_file

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates on reconfiguration
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    file_handler = RotatingFileHandler(
        full_log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    root_logger.propagate = False

    root_logger.debug(f"Logging configured: file={full_log_path}")
    return root_logger


def disable_logging() -> logging.Logger:
    """Drop all swiftgate handlers and discard records."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(logging.NullHandler())
    root_logger.propagate = False
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a swiftgate component.

    Example:
        logger = get_logger("checker")
        logger.info("swift -parse finished")
        # Logs as: swiftgate.checker - INFO - swift -parse finished
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

