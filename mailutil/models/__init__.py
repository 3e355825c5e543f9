"""Models module for mailutil.

Defines Pydantic v2 value types for addresses and SMTP credentials, plus the
address parsing helpers.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from mailutil.models.address import (
    Address,
    AddressInput,
    parse_comma_separated,
    parse_single,
    to_addresses,
)
from mailutil.models.smtp_config import Credentials, SmtpPort

__all__ = [
    # Models
    "Address",
    "Credentials",
    "SmtpPort",
    # Address parsing
    "AddressInput",
    "parse_comma_separated",
    "parse_single",
    "to_addresses",
]
