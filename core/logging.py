"""
Logging setup utility

Shared logging configuration for the web server and maintenance scripts.
- Console: INFO level
- File: INFO level (TimedRotatingFileHandler, daily)

Usage:
    from core.logging import setup_logging
    setup_logging("web")      # web server
    setup_logging("scripts")  # maintenance scripts
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


# Logging constants
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 30  # keep 30 days of files

# Loggers that produce a lot of noise (level raised to WARNING)
NOISY_LOGGERS = [
    "aiosqlite",       # executing/completed for every query
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access",  # one line per request
]


def _log_dir_for(process_name: str) -> Path:
    if process_name == "web":
        return Paths.WEB_LOGS_DIR
    elif process_name == "scripts":
        return Paths.SCRIPTS_LOGS_DIR
    return Paths.LOGS_DIR


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Initialize logging

    Writes file logs into a per-process directory with daily rotation
    at midnight.

    Args:
        process_name: process name ("web" or "scripts")
        console_level: console log level (default INFO)
        file_level: file log level (default INFO)
        log_dir: override for the log directory (tests)

    Returns:
        The configured root logger
    """
    if log_dir is None:
        log_dir = _log_dir_for(process_name)

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{process_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers do the filtering

    # Avoid duplicate handlers on re-initialization
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # 1. Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 2. File handler (daily)
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # web.log.2026-02-21
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # 3. Quiet down noisy loggers
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized: {process_name}")
    root_logger.info(f"  - console: {logging.getLevelName(console_level)}")
    root_logger.info(f"  - file: {log_file} ({logging.getLevelName(file_level)}, daily rotation)")

    return root_logger


def get_log_file_path(process_name: str) -> Path:
    """Return the log file path for a process

    Args:
        process_name: process name ("web" or "scripts")

    Returns:
        Log file Path
    """
    return _log_dir_for(process_name) / f"{process_name}.log"
