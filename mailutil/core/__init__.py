"""Core module for mailutil.

Provides the exception hierarchy and logging configuration.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from mailutil.core.exceptions import (
    AddressParseError,
    ConfigParseError,
    MailutilError,
    SmtpInitializationError,
)
from mailutil.core.logger import (
    get_logger,
    get_logs_directory,
    log_context,
    setup_logging,
)

__all__ = [
    # Exceptions
    "MailutilError",
    "SmtpInitializationError",
    "ConfigParseError",
    "AddressParseError",
    # Logging
    "get_logger",
    "setup_logging",
    "get_logs_directory",
    "log_context",
]
