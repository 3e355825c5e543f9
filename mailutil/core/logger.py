"""Centralized logging configuration for mailutil.

Provides the logger factory used by every mailutil module and an optional
``setup_logging`` helper for applications that want console and rotating
file output without writing their own handler setup.

Library modules only emit through ``get_logger(__name__)``; handlers are
installed exclusively by ``setup_logging``, which the application calls once
at startup. Configuration warnings (ignored credentials, missing properties
file, bad flags) arrive on the ``mailutil.config`` loggers.

Features:
    - Console handler plus optional rotating file handlers
    - Separate error log file
    - Per-module levels
    - Context strings for structured messages

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mailutil.config.settings import MailutilSettings

# Global configuration
_LOG_DIR = Path.cwd() / "logs"
_LOG_FORMAT_DETAILED = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)
_LOG_FORMAT_SIMPLE = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that follow log_level
_MODULE_LOGGERS = (
    "mailutil.config",
    "mailutil.clients",
    "mailutil.messages",
    "mailutil.models",
)


def setup_logging(
    log_dir: Path | None = None,
    log_level: str = "INFO",
    file_level: str = "DEBUG",
    console_level: str = "INFO",
    enable_file: bool = False,
    max_size_mb: int = 10,
    backup_count: int = 5,
    settings: Optional["MailutilSettings"] = None,
) -> logging.Logger:
    """Configure root logger with console and optional file handlers.

    Should be called once at application startup. When ``settings`` is given
    its ``LOG_*`` values override the keyword arguments.

    Args:
        log_dir: Directory for log files. Defaults to ./logs.
        log_level: Level applied to the mailutil module loggers.
        file_level: File handler level (usually DEBUG for comprehensive logging).
        console_level: Console handler level.
        enable_file: Whether to write logs to files.
        max_size_mb: Size of each log file before rotation.
        backup_count: Number of rotated files to keep.
        settings: Optional MailutilSettings supplying the values above.

    Returns:
        The configured root logger.

    Example:
        setup_logging(
            log_level="DEBUG",
            console_level="WARNING",  # Only show warnings and errors on console
        )
    """
    global _LOG_DIR

    if settings is not None:
        log_dir = Path(settings.LOG_DIR)
        log_level = settings.LOG_LEVEL
        console_level = settings.LOG_LEVEL
        enable_file = settings.LOG_TO_FILE
        max_size_mb = settings.LOG_MAX_SIZE_MB
        backup_count = settings.LOG_BACKUP_COUNT

    _LOG_DIR = Path(log_dir) if log_dir else Path.cwd() / "logs"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, handlers filter

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(
        logging.Formatter(_LOG_FORMAT_SIMPLE, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if enable_file:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "mailutil.log",
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, file_level.upper(), logging.DEBUG))
        file_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

        # Errors also go to mailutil.error.log
        error_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "mailutil.error.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(error_handler)

    level = getattr(logging, log_level.upper(), logging.INFO)
    for module_name in _MODULE_LOGGERS:
        logging.getLogger(module_name).setLevel(level)

    return root_logger


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ of calling module).
        log_level: Optional override for logger level (DEBUG, INFO, WARNING, ERROR).

    Returns:
        Logger instance ready for use.

    Example:
        from mailutil.core.logger import get_logger

        logger = get_logger(__name__)
        logger.warning("No file at /etc/smtp.properties")
    """
    logger = logging.getLogger(name)

    if log_level:
        logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return logger


def get_logs_directory() -> Path:
    """Get the logs directory path used by the last ``setup_logging`` call."""
    return _LOG_DIR


def log_context(operation: str, **kwargs) -> str:
    """Format a log context string with metadata.

    ``None`` values are skipped so optional fields can be passed as-is.

    Args:
        operation: Operation name (e.g., "send", "resolve").
        **kwargs: Additional context key-value pairs.

    Returns:
        Formatted context string for logging.

    Example:
        msg = log_context("send", host="smtp.example.com", port=587, mode="starttls")
        logger.debug(f"Starting: {msg}")
        # Output: Starting: send (host=smtp.example.com, port=587, mode=starttls)
    """
    extra = ", ".join(f"{k}={v}" for k, v in kwargs.items() if v is not None)
    if extra:
        return f"{operation} ({extra})"
    return operation
