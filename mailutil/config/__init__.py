"""Configuration module for mailutil.

Layered SMTP configuration sources, resolution into an ``SmtpContext``,
the process-wide default context, and the library's ambient settings.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from mailutil.config.resolver import (
    configure_default_provider,
    default_context,
    reset_default_context,
    resolve_context,
)
from mailutil.config.settings import MailutilSettings
from mailutil.config.source import (
    ConfigKey,
    ConfigProvider,
    ConfigSource,
    MappingConfigProvider,
    ProcessConfigProvider,
    load_properties,
    system_properties,
)

__all__ = [
    "MailutilSettings",
    "ConfigKey",
    "ConfigProvider",
    "ConfigSource",
    "MappingConfigProvider",
    "ProcessConfigProvider",
    "load_properties",
    "system_properties",
    "resolve_context",
    "default_context",
    "configure_default_provider",
    "reset_default_context",
]
