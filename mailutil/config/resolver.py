"""SMTP context resolution.

Turns the values found in a ``ConfigSource`` into one coherent
``SmtpContext``: decides whether to authenticate, infers STARTTLS and the
port when they are not configured, and warns about contradictory settings.

Also owns the process-wide default context, resolved once on first use.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from __future__ import annotations

import threading

from mailutil.clients.smtp import SmtpContext
from mailutil.config.source import (
    ConfigKey,
    ConfigProvider,
    ConfigSource,
    ProcessConfigProvider,
)
from mailutil.core.exceptions import ConfigParseError, SmtpInitializationError
from mailutil.core.logger import get_logger, log_context
from mailutil.models.smtp_config import Credentials, SmtpPort

logger = get_logger(__name__)

_default_provider: ConfigProvider = ProcessConfigProvider()
_default_context: SmtpContext | None = None
_default_lock = threading.Lock()


def _parse_bool(key: ConfigKey, raw: str) -> bool:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigParseError(key.property_name, raw, "expected 'true' or 'false'")


def _parse_port(raw: str) -> int:
    try:
        port = int(raw.strip())
    except ValueError as e:
        raise ConfigParseError(ConfigKey.PORT.property_name, raw, "expected an integer") from e
    if not 1 <= port <= 65535:
        raise ConfigParseError(ConfigKey.PORT.property_name, raw, "expected 1-65535")
    return port


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw.strip())
    except ValueError as e:
        raise ConfigParseError(
            ConfigKey.TIMEOUT.property_name, raw, "expected a number of seconds"
        ) from e
    if timeout <= 0:
        raise ConfigParseError(ConfigKey.TIMEOUT.property_name, raw, "expected a positive number")
    return timeout


def _optional_text(source: ConfigSource, key: ConfigKey) -> str | None:
    raw = source.resolve(key)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _resolve_credentials(
    auth_flag: str | None,
    user: str | None,
    password: str | None,
) -> Credentials | None:
    """Decide between authenticated and unauthenticated delivery.

    First matching rule wins:
        flag true, user and password      -> authenticated
        no flag, user and password        -> authenticated
        flag false, user and password     -> unauthenticated, warning
        flag false                        -> unauthenticated
        bad flag, user and password       -> authenticated, warning
        user without password             -> unauthenticated, warning
        anything else                     -> unauthenticated

    The flag must be exactly ``true`` or ``false``; any other spelling is bad.
    """
    auth_prop = ConfigKey.AUTH.property_name
    both = user is not None and password is not None

    if both and auth_flag in ("true", None):
        return Credentials(user=user, password=password)
    if auth_flag == "false":
        if both:
            logger.warning(
                f"SMTP user and password are both configured, but property '{auth_prop}' "
                f"is false, so authentication is disabled."
            )
        return None
    if both:
        logger.warning(
            f"Ignoring bad SMTP property '{auth_prop}' set to '{auth_flag}'. "
            f"User and password are set so authentication is enabled."
        )
        return Credentials(user=user, password=password)
    if user is not None and password is None:
        logger.warning(
            f"A user '{user}' is configured, but no password is set, "
            f"so authentication is disabled."
        )
    return None


def resolve_context(source: ConfigSource) -> SmtpContext:
    """Resolve a complete SMTP context from a configuration source.

    Args:
        source: Layered configuration to read.

    Returns:
        Frozen SmtpContext.

    Raises:
        SmtpInitializationError: If no host is configured.
        ConfigParseError: If port, a flag or the timeout is malformed.
    """
    host = _optional_text(source, ConfigKey.HOST)
    if host is None:
        raise SmtpInitializationError("No SMTP Host Configured")

    user = _optional_text(source, ConfigKey.USER)
    password = _optional_text(source, ConfigKey.PASSWORD)
    credentials = _resolve_credentials(source.resolve(ConfigKey.AUTH), user, password)

    raw_port = source.resolve(ConfigKey.PORT)
    specified_port = _parse_port(raw_port) if raw_port is not None else None

    # Inferred from the configured port only, never from the defaulted one.
    raw_start_tls = source.resolve(ConfigKey.STARTTLS)
    if raw_start_tls is not None:
        start_tls = _parse_bool(ConfigKey.STARTTLS, raw_start_tls)
    else:
        start_tls = specified_port == SmtpPort.STARTTLS

    if specified_port is not None:
        port = specified_port
    elif credentials is None:
        port = SmtpPort.PLAIN
    elif start_tls:
        port = SmtpPort.STARTTLS
    else:
        port = SmtpPort.IMPLICIT_TLS

    raw_debug = source.resolve(ConfigKey.DEBUG)
    debug = _parse_bool(ConfigKey.DEBUG, raw_debug) if raw_debug is not None else False

    raw_timeout = source.resolve(ConfigKey.TIMEOUT)
    timeout = _parse_timeout(raw_timeout) if raw_timeout is not None else None

    context = SmtpContext(
        host=host,
        port=int(port),
        credentials=credentials,
        start_tls=start_tls,
        debug=debug,
        timeout=timeout,
    )
    logger.debug(
        "SMTP context resolved: "
        + log_context(
            "resolve",
            host=context.host,
            port=context.port,
            user=credentials.user if credentials else None,
            start_tls=context.start_tls,
            debug=context.debug,
        )
    )
    return context


def default_context() -> SmtpContext:
    """Return the process-wide default context, resolving it on first use.

    Exactly one resolution happens even under concurrent first access. A
    failed resolution is not cached, so the next call tries again.

    Raises:
        SmtpInitializationError: If the ambient configuration has no host.
    """
    global _default_context

    context = _default_context
    if context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = resolve_context(ConfigSource.from_provider(_default_provider))
            context = _default_context
    return context


def configure_default_provider(provider: ConfigProvider | None) -> None:
    """Replace the provider used for the default context and forget the cached one.

    Args:
        provider: New provider; the real process when None.
    """
    global _default_provider, _default_context

    with _default_lock:
        _default_provider = provider or ProcessConfigProvider()
        _default_context = None


def reset_default_context() -> None:
    """Forget the cached default context; the next access resolves again."""
    global _default_context

    with _default_lock:
        _default_context = None
