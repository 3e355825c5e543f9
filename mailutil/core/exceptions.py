"""Custom exceptions for mailutil.

Defines specific exception types for configuration and address failures
so callers can tell fatal setup problems from recoverable input problems.

Transport failures (``smtplib.SMTPException``, ``OSError``) are not wrapped;
they propagate unchanged from the SMTP client.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""


class MailutilError(Exception):
    """Base exception for all mailutil errors.

    Serves as the parent class for all custom exceptions in mailutil,
    allowing consumers to catch every library error with a single except block.

    Example:
        try:
            context = default_context()
        except MailutilError as e:
            logger.error(f"Mail setup failed: {e}")
    """

    pass


class SmtpInitializationError(MailutilError):
    """Exception raised when no usable SMTP context can be resolved.

    Fatal. Raised at resolution time, typically on first use of the default
    context, and never retried by the library.

    Example:
        raise SmtpInitializationError("No SMTP Host Configured")
    """

    pass


class ConfigParseError(SmtpInitializationError):
    """Exception raised for configuration values that cannot be converted.

    Indicates a malformed port, boolean flag or timeout in one of the
    configuration sources.

    Attributes:
        key (str): Property name of the offending setting.
        raw_value (str): Value exactly as found in the source.

    Example:
        raise ConfigParseError("mail.smtp.port", "twenty-five")
    """

    def __init__(self, key: str, raw_value: str, reason: str | None = None):
        """Initialize configuration parse error.

        Args:
            key: Property name of the offending setting.
            raw_value: Raw value that failed to convert.
            reason: Optional description of the expected format.
        """
        message = f"Bad value for SMTP setting '{key}': '{raw_value}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.key = key
        self.raw_value = raw_value


class AddressParseError(MailutilError):
    """Exception raised when address parsing or validation fails.

    Raised when strict validation rejects an address, or when exactly one
    address was expected and a different number was found. Recoverable by
    the caller (skip the recipient, ask again).

    Attributes:
        message (str): Description of the failure, including the
            underlying validator message when there is one.

    Example:
        raise AddressParseError(
            "Expected to parse one valid SMTP address, 2 found."
        )
    """

    pass
