# utils/logger.py
"""
Centralized logging configuration for GeoMeasure application.
Rotating file log under the user's home plus a console handler that only
shows warnings and errors.
"""

import logging
import logging.handlers
from pathlib import Path
from constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_NAME,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_DIR_NAME
)


_loggers = {}  # Cache for loggers


def default_log_dir() -> Path:
    return Path.home() / LOG_DIR_NAME / "logs"


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """
    Resolve a level name such as 'debug' or 'WARNING'.

    Unknown names fall back to default.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(log_dir: str = None, level: int = logging.INFO,
                  console_level: int = logging.WARNING) -> Path:
    """
    Set up the root logger with file and console handlers.

    Args:
        log_dir: Directory for the log file (default: ~/.geomeasure/logs)
        level: Level for the root logger and file handler
        console_level: Level for the console handler

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir) if log_dir is not None else default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.info("=" * 60)
    root_logger.info("GeoMeasure logging initialized")
    root_logger.info(f"Log file: {log_file}")
    root_logger.info("=" * 60)
    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the module (typically __name__)
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]
