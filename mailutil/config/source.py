"""Layered SMTP configuration sources.

Looks up the SMTP settings (host, port, credentials, flags) across an
in-memory property chain and the process environment.

Property chain, highest priority first:
    1. properties passed explicitly by code
    2. a properties file, when a path is configured under the system property
       ``mail.smtp.properties`` or the environment variable ``SMTP_PROPERTIES``
    3. process-wide system properties (``system_properties`` below)

The environment is consulted only when the whole property chain has no value
for a key. Every key is resolved on its own; values are never merged.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from __future__ import annotations

import os
from collections import ChainMap
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

from mailutil.core.logger import get_logger

logger = get_logger(__name__)

PROPERTIES_FILE_PROPERTY = "mail.smtp.properties"
PROPERTIES_FILE_ENV = "SMTP_PROPERTIES"

# Process-wide property store.
# Applications may fill it at startup; read through ProcessConfigProvider.
system_properties: dict[str, str] = {}


class ConfigKey(str, Enum):
    """Logical SMTP settings, valued by their property name.

    Attributes:
        HOST: SMTP server hostname.
        PORT: SMTP server port.
        AUTH: Explicit authentication flag (property only).
        USER: SMTP authentication username.
        PASSWORD: SMTP authentication password.
        STARTTLS: STARTTLS flag; two environment names, the first wins.
        DEBUG: Protocol debug flag.
        TIMEOUT: Socket timeout in seconds.
    """

    HOST = "mail.smtp.host"
    PORT = "mail.smtp.port"
    AUTH = "mail.smtp.auth"
    USER = "mail.smtp.user"
    PASSWORD = "mail.smtp.password"
    STARTTLS = "mail.smtp.starttls.enable"
    DEBUG = "mail.smtp.debug"
    TIMEOUT = "mail.smtp.timeout"

    @property
    def property_name(self) -> str:
        return self.value

    @property
    def env_names(self) -> tuple[str, ...]:
        """Environment variable names for this key, in priority order."""
        return _ENV_NAMES[self]


_ENV_NAMES: dict[ConfigKey, tuple[str, ...]] = {
    ConfigKey.HOST: ("SMTP_HOST",),
    ConfigKey.PORT: ("SMTP_PORT",),
    ConfigKey.AUTH: (),
    ConfigKey.USER: ("SMTP_USER",),
    ConfigKey.PASSWORD: ("SMTP_PASSWORD",),
    ConfigKey.STARTTLS: ("SMTP_STARTTLS", "SMTP_START_TLS"),
    ConfigKey.DEBUG: ("SMTP_DEBUG",),
    ConfigKey.TIMEOUT: ("SMTP_TIMEOUT",),
}


class ConfigProvider(Protocol):
    """Supplier of the ambient configuration inputs."""

    def system_properties(self) -> Mapping[str, str]: ...

    def environment(self) -> Mapping[str, str]: ...


class ProcessConfigProvider:
    """Reads the real process state: ``system_properties`` and ``os.environ``."""

    def system_properties(self) -> Mapping[str, str]:
        return system_properties

    def environment(self) -> Mapping[str, str]:
        return os.environ


class MappingConfigProvider:
    """Provider over fixed mappings, for tests and explicit wiring.

    Args:
        system_properties: Stand-in for the process property store.
        environment: Stand-in for the process environment.
    """

    def __init__(
        self,
        system_properties: Mapping[str, str] | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> None:
        self._system_properties = dict(system_properties or {})
        self._environment = dict(environment or {})

    def system_properties(self) -> Mapping[str, str]:
        return self._system_properties

    def environment(self) -> Mapping[str, str]:
        return self._environment


def load_properties(path: Path | str) -> dict[str, str]:
    """Read a ``key=value`` properties file.

    Lines starting with ``#`` are comments; values may be quoted. Keys
    without a value are dropped.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, encoding="utf-8") as stream:
        values = dotenv_values(stream=stream, interpolate=False)
    return {key: value for key, value in values.items() if value is not None}


def _default_properties(provider: ConfigProvider) -> Mapping[str, str]:
    """Build the property chain from the provider, honouring a configured file.

    A missing or unreadable file is reported as a warning and the chain falls
    back to the system properties alone.
    """
    sysprops = provider.system_properties()
    env = provider.environment()

    path_str = sysprops.get(PROPERTIES_FILE_PROPERTY) or env.get(PROPERTIES_FILE_ENV)
    if not path_str:
        return sysprops

    path = Path(path_str).expanduser()
    if not path.exists():
        logger.warning(
            f"[SMTP config] No file at {path} (perhaps specified by environment variable "
            f"'{PROPERTIES_FILE_ENV}'). Reverting to system properties only."
        )
        return sysprops

    try:
        file_properties = load_properties(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(
            f"[SMTP config] Reverting to system properties only. Exception while loading "
            f"SMTP properties at path specified by {PROPERTIES_FILE_ENV}, {path}: {e}",
            exc_info=True,
        )
        return sysprops

    logger.debug(f"[SMTP config] Loaded {len(file_properties)} properties from {path}")
    return ChainMap(file_properties, sysprops)


class ConfigSource:
    """Read-only resolver over a property chain and an environment.

    Attributes:
        properties: Property mapping, consulted first.
        environment: Environment mapping, consulted second.
    """

    def __init__(
        self,
        properties: Mapping[str, str] | None = None,
        environment: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize configuration source.

        Args:
            properties: Property names to values (``mail.smtp.*``).
            environment: Environment variable names to values (``SMTP_*``).
        """
        self.properties: Mapping[str, str] = properties if properties is not None else {}
        self.environment: Mapping[str, str] = environment if environment is not None else {}

    def resolve(self, key: ConfigKey) -> str | None:
        """Return the first value defined for ``key``, or None.

        Args:
            key: Logical setting to look up.

        Returns:
            Raw string value from the first source defining it.
        """
        value = self.properties.get(key.property_name)
        if value is not None:
            return value
        for env_name in key.env_names:
            value = self.environment.get(env_name)
            if value is not None:
                return value
        return None

    @classmethod
    def from_provider(
        cls,
        provider: ConfigProvider | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> ConfigSource:
        """Build the standard layered source.

        Args:
            provider: Ambient inputs; the real process when None.
            properties: Explicit properties layered above everything else.
        """
        provider = provider or ProcessConfigProvider()
        defaults = _default_properties(provider)
        chain = ChainMap(dict(properties), defaults) if properties else defaults
        return cls(chain, provider.environment())

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        require_present: bool = True,
        provider: ConfigProvider | None = None,
    ) -> ConfigSource:
        """Build a source from an explicit properties file over the defaults.

        Args:
            path: Properties file to load.
            require_present: Raise when the file is missing instead of warning.
            provider: Ambient inputs for the default layers.

        Raises:
            FileNotFoundError: If the file is missing and ``require_present``.
        """
        provider = provider or ProcessConfigProvider()
        defaults = _default_properties(provider)
        path = Path(path).expanduser()

        if path.exists():
            return cls(ChainMap(load_properties(path), defaults), provider.environment())

        if require_present:
            raise FileNotFoundError(f"Properties file '{path}' required, not found.")

        logger.warning(
            f"[SMTP config] No file at specified {path}. "
            f"Reverting to default configuration strategy only."
        )
        return cls(defaults, provider.environment())
