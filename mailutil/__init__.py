"""mailutil - SMTP configuration resolution and one-call email sending.

Resolves one coherent SMTP setup from layered sources and sends plaintext,
HTML, or HTML-with-plaintext-alternative messages through it:
- Per-key precedence: explicit properties, properties file, system
  properties, then SMTP_* environment variables
- Authentication decided from user/password and the mail.smtp.auth flag
- Port and STARTTLS inferred when not configured
- Warnings (never exceptions) for contradictory settings
- Flexible address input: strings, Address objects, or lists of either

Architecture:
    - core: Exceptions, logger
    - config: Sources, resolver, default context, ambient settings
    - models: Address, Credentials, address parsing
    - clients: SmtpContext and its session handle (smtplib)
    - messages: compose_* and send_* functions

Usage:
    from mailutil import ConfigSource, resolve_context, send_html_plaintext_alternative

    context = resolve_context(ConfigSource.from_provider())
    send_html_plaintext_alternative(
        html="<p>Your report is ready.</p>",
        plaintext="Your report is ready.",
        subject="Weekly report",
        from_="Reports <reports@example.com>",
        to="jane@example.com, John Doe <john@example.com>",
        context=context,
    )

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

__version__ = "1.0.0"

# Clients
from mailutil.clients import SmtpContext, SmtpSession

# Configuration
from mailutil.config import (
    ConfigKey,
    ConfigProvider,
    ConfigSource,
    MailutilSettings,
    MappingConfigProvider,
    ProcessConfigProvider,
    configure_default_provider,
    default_context,
    load_properties,
    reset_default_context,
    resolve_context,
)

# Core utilities
from mailutil.core import (
    AddressParseError,
    ConfigParseError,
    MailutilError,
    SmtpInitializationError,
    get_logger,
    setup_logging,
)

# Messages
from mailutil.messages import (
    compose_html_only,
    compose_html_plaintext_alternative,
    compose_plaintext,
    compose_simple,
    send_html_only,
    send_html_plaintext_alternative,
    send_plaintext,
    send_simple,
    stamp_sent_date,
)

# Models
from mailutil.models import (
    Address,
    AddressInput,
    Credentials,
    SmtpPort,
    parse_comma_separated,
    parse_single,
    to_addresses,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "MailutilError",
    "SmtpInitializationError",
    "ConfigParseError",
    "AddressParseError",
    "get_logger",
    "setup_logging",
    # Configuration
    "MailutilSettings",
    "ConfigKey",
    "ConfigProvider",
    "ConfigSource",
    "MappingConfigProvider",
    "ProcessConfigProvider",
    "load_properties",
    "resolve_context",
    "default_context",
    "configure_default_provider",
    "reset_default_context",
    # Models
    "Address",
    "AddressInput",
    "Credentials",
    "SmtpPort",
    "parse_comma_separated",
    "parse_single",
    "to_addresses",
    # Clients
    "SmtpContext",
    "SmtpSession",
    # Messages
    "compose_simple",
    "compose_plaintext",
    "compose_html_only",
    "compose_html_plaintext_alternative",
    "send_simple",
    "send_plaintext",
    "send_html_only",
    "send_html_plaintext_alternative",
    "stamp_sent_date",
]
