"""Logging configuration for skillbox."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .paths import get_log_dir

# Global flag to track if logging has been initialized
_logging_initialized = False
_log_file_path = None


def setup_logger(
    log_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    log_to_console: bool = False,
) -> None:
    """Configure the logging system globally.

    main() calls this once when --verbose is given. Each run gets its own
    skillbox_<timestamp>.log under the log directory (~/.skillbox/logs/ unless
    SKILLBOX_CONFIG_DIR points elsewhere).

    Args:
        log_dir: Directory to store log files (default: ~/.skillbox/logs/)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_console: Whether to also log to console
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized:
        return

    # Use runtime log directory by default
    if log_dir is None:
        log_dir = str(get_log_dir())

    # Get log level from Config if not provided
    if log_level is None:
        from config import Config

        log_level = Config.LOG_LEVEL

    # Set root logger level
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True, parents=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_path / f"skillbox_{timestamp}.log"
    _log_file_path = str(log_file)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logging.root.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        logging.root.addHandler(console_handler)

    _logging_initialized = True

    logging.info(f"Logging initialized. Level: {log_level}, File: {_log_file_path}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Store, registry and installer events reach the log file once --verbose has
    called setup_logger(). Before that, only warnings show, on stderr.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Get the path to the current log file.

    Returns:
        Path to log file, or None if logging to file is disabled
    """
    return _log_file_path
