"""
Logger Module

Provides a centralized logging system that outputs to both console and file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Application log file path (relative to project root)
_LOG_FILE_NAME = "worksync.log"

# Environment override for the log file location
_LOG_FILE_ENV = "WORKSYNC_LOG_FILE"


def _get_project_root() -> Path:
    """Project root of a source checkout, else the working directory."""
    src_dir = Path(__file__).parent.parent
    if src_dir.name == "src":
        return src_dir.parent
    return Path.cwd()


def _resolve_log_path(log_file: Optional[str]) -> Path:
    if log_file:
        return Path(log_file)
    env_path = os.environ.get(_LOG_FILE_ENV)
    if env_path:
        return Path(env_path)
    return _get_project_root() / _LOG_FILE_NAME


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger with console and file handlers.

    Args:
        name: Logger name (typically a component name like "AttendanceTextParser")
        log_file: Optional custom log file path. If None, uses WORKSYNC_LOG_FILE
            or worksync.log in the project root

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler - INFO level and above
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler - DEBUG level and above
    log_path = _resolve_log_path(log_file)
    try:
        file_handler = logging.FileHandler(
            log_path,
            mode="a",
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except (OSError, PermissionError) as e:
        # If file logging fails, just log to console
        logger.warning(f"Cannot open log file {log_path}: {e}")

    return logger
