"""SMTP context and transport handling.

Holds the resolved SMTP connection settings and delivers finished messages
through ``smtplib``.

Delivery modes:
- No credentials: plain SMTP, upgraded with STARTTLS only when enabled and
  offered by the server; no login.
- Credentials: STARTTLS (required) when enabled, implicit TLS otherwise;
  then login.

Every send opens its own connection and closes it before returning, on
success and on failure. Transport errors are logged and re-raised unchanged.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from __future__ import annotations

import smtplib
import ssl
from collections.abc import Mapping
from email import policy
from email.message import EmailMessage
from email.utils import getaddresses
from functools import cached_property
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from mailutil.core.logger import get_logger, log_context
from mailutil.models.smtp_config import Credentials, SmtpPort

logger = get_logger(__name__)

_RECIPIENT_HEADERS = ("To", "Cc", "Bcc")


class SmtpSession:
    """Session handle shared by all sends of one context.

    Immutable. Carries the exported property view, the message policy and
    the debug/timeout settings, and creates a fresh ``smtplib`` transport for
    every send; transports are never shared.

    Attributes:
        properties: Read-only property view of the owning context.
        policy: ``email.policy`` used to build messages for this session.
        debug: Whether transports print the SMTP protocol trace.
        timeout: Socket timeout in seconds, or None for the library default.
    """

    def __init__(
        self,
        properties: Mapping[str, str],
        debug: bool = False,
        timeout: float | None = None,
    ) -> None:
        self.properties = MappingProxyType(dict(properties))
        self.policy = policy.SMTP
        self.debug = debug
        self.timeout = timeout

    def ssl_context(self) -> ssl.SSLContext:
        """Return a TLS context with certificate and hostname verification."""
        return ssl.create_default_context()

    def transport(self, protocol: str = "smtp") -> smtplib.SMTP:
        """Create an unconnected transport.

        Args:
            protocol: ``"smtp"`` for a plain connection (optionally upgraded
                with STARTTLS), ``"smtps"`` for implicit TLS.

        Returns:
            New ``smtplib.SMTP`` or ``smtplib.SMTP_SSL`` instance.

        Raises:
            ValueError: If the protocol is unknown.
        """
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        if protocol == "smtp":
            transport = smtplib.SMTP(**kwargs)
        elif protocol == "smtps":
            transport = smtplib.SMTP_SSL(context=self.ssl_context(), **kwargs)
        else:
            raise ValueError(f"Unknown SMTP transport protocol: {protocol}")

        transport.set_debuglevel(1 if self.debug else 0)
        return transport


def _recipients(message: EmailMessage) -> list[str]:
    """Collect every envelope recipient from To, Cc and Bcc."""
    values = [str(value) for header in _RECIPIENT_HEADERS for value in message.get_all(header, [])]
    return [address for _name, address in getaddresses(values) if address]


class SmtpContext(BaseModel):
    """Resolved SMTP connection settings plus the ability to send.

    Frozen; equality covers the fields only. Usually built by
    ``mailutil.config.resolve_context``.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port (1-65535).
        credentials: Login credentials, or None for unauthenticated delivery.
        start_tls: Whether to negotiate STARTTLS on the plain connection.
        debug: Whether to emit the SMTP protocol trace.
        timeout: Socket timeout in seconds (None: transport default).
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="SMTP server hostname")
    port: int = Field(default=SmtpPort.PLAIN.value, ge=1, le=65535, description="SMTP server port")
    credentials: Credentials | None = Field(default=None, description="Login credentials")
    start_tls: bool = Field(default=False, description="Negotiate STARTTLS")
    debug: bool = Field(default=False, description="SMTP protocol trace")
    timeout: float | None = Field(default=None, gt=0, description="Socket timeout (seconds)")

    @property
    def authenticated(self) -> bool:
        return self.credentials is not None

    def to_properties(self) -> dict[str, str]:
        """Export the settings as ``mail.smtp.*`` properties.

        Credentials are never exported; only whether authentication is on.
        """
        properties = {
            "mail.smtp.host": self.host,
            "mail.smtp.port": str(self.port),
            "mail.smtp.auth": str(self.authenticated).lower(),
            "mail.smtp.starttls.enable": str(self.start_tls).lower(),
            "mail.smtp.debug": str(self.debug).lower(),
        }
        if self.timeout is not None:
            properties["mail.smtp.timeout"] = str(self.timeout)
        return properties

    @cached_property
    def session(self) -> SmtpSession:
        """Session handle, created on first access and reused afterwards."""
        return SmtpSession(self.to_properties(), debug=self.debug, timeout=self.timeout)

    def send(self, message: EmailMessage) -> None:
        """Deliver a finished message to every To, Cc and Bcc recipient.

        Args:
            message: Fully composed message (Date already set).

        Raises:
            smtplib.SMTPException: Protocol, authentication or recipient errors.
            OSError: Connection failures.
        """
        recipients = _recipients(message)
        try:
            if self.credentials is None:
                self._send_unauthenticated(message, recipients)
            else:
                self._send_authenticated(message, recipients, self.credentials)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email via {self.host}:{self.port}: {e}")
            raise

        logger.info(
            f"Email sent via {self.host}:{self.port} to {len(recipients)} recipient(s) - "
            f"Subject: {str(message.get('Subject', ''))[:50]}"
        )

    def _send_unauthenticated(self, message: EmailMessage, recipients: list[str]) -> None:
        if self.debug:
            logger.debug(log_context("send", host=self.host, port=self.port, mode="plain"))

        with self.session.transport("smtp") as transport:
            transport.connect(self.host, self.port)
            if self.start_tls:
                transport.ehlo_or_helo_if_needed()
                if transport.has_extn("starttls"):
                    logger.debug("Starting TLS...")
                    transport.starttls(context=self.session.ssl_context())
                else:
                    logger.debug("Server does not offer STARTTLS, continuing unencrypted")
            transport.send_message(message, to_addrs=recipients)

    def _send_authenticated(
        self,
        message: EmailMessage,
        recipients: list[str],
        credentials: Credentials,
    ) -> None:
        protocol = "smtp" if self.start_tls else "smtps"
        if self.debug:
            logger.debug(
                log_context(
                    "send",
                    host=self.host,
                    port=self.port,
                    mode="starttls" if self.start_tls else "implicit-tls",
                    user=credentials.user,
                )
            )

        with self.session.transport(protocol) as transport:
            transport.connect(self.host, self.port)
            if self.start_tls:
                logger.debug("Starting TLS...")
                transport.starttls(context=self.session.ssl_context())
            logger.debug("Authenticating...")
            transport.login(credentials.user, credentials.password_value())
            transport.send_message(message, to_addrs=recipients)
