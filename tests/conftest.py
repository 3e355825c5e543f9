"""Pytest configuration and fixtures for mailutil tests.

Provides reusable fixtures for unit and integration tests including
fake configuration providers, mocked SMTP transports and ready-made
SMTP contexts.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from mailutil.clients.smtp import SmtpContext
from mailutil.config.resolver import configure_default_provider
from mailutil.config.source import MappingConfigProvider
from mailutil.models.smtp_config import Credentials


# =============================================================================
# Default Context Isolation
# =============================================================================
@pytest.fixture(autouse=True)
def isolated_default_context() -> Generator[None, None, None]:
    """Keep the process-wide default context away from the real environment."""
    configure_default_provider(MappingConfigProvider())
    yield
    configure_default_provider(None)


# =============================================================================
# SMTP Context Fixtures
# =============================================================================
@pytest.fixture
def credentials() -> Credentials:
    """Create test credentials."""
    return Credentials(user="mailer@test.com", password="testpassword")


@pytest.fixture
def plain_context() -> SmtpContext:
    """Create an unauthenticated context on port 25."""
    return SmtpContext(host="smtp.test.com")


@pytest.fixture
def starttls_context(credentials: Credentials) -> SmtpContext:
    """Create an authenticated STARTTLS context on port 587."""
    return SmtpContext(host="smtp.test.com", port=587, credentials=credentials, start_tls=True)


@pytest.fixture
def implicit_tls_context(credentials: Credentials) -> SmtpContext:
    """Create an authenticated implicit-TLS context on port 465."""
    return SmtpContext(host="smtp.test.com", port=465, credentials=credentials)


# =============================================================================
# SMTP Transport Fixtures
# =============================================================================
def _connection_mock() -> MagicMock:
    smtp = MagicMock()
    smtp.__enter__.return_value = smtp
    smtp.__exit__.return_value = None
    smtp.connect.return_value = (220, b"smtp.test.com ESMTP ready")
    smtp.has_extn.return_value = True
    smtp.starttls.return_value = (220, b"TLS ready")
    smtp.login.return_value = (235, b"Authentication successful")
    smtp.send_message.return_value = {}
    return smtp


@pytest.fixture
def mock_smtp_connection() -> MagicMock:
    """Create a mock plain SMTP connection."""
    return _connection_mock()


@pytest.fixture
def mock_smtp_ssl_connection() -> MagicMock:
    """Create a mock implicit-TLS SMTP connection."""
    return _connection_mock()


@pytest.fixture
def smtp_transports(
    mock_smtp_connection: MagicMock,
    mock_smtp_ssl_connection: MagicMock,
) -> Generator[tuple[MagicMock, MagicMock], None, None]:
    """Patch smtplib.SMTP and smtplib.SMTP_SSL with mocks.

    Yields:
        The patched (SMTP, SMTP_SSL) classes.
    """
    with patch(
        "mailutil.clients.smtp.smtplib.SMTP", return_value=mock_smtp_connection
    ) as smtp_cls, patch(
        "mailutil.clients.smtp.smtplib.SMTP_SSL", return_value=mock_smtp_ssl_connection
    ) as smtp_ssl_cls:
        yield smtp_cls, smtp_ssl_cls


# =============================================================================
# Properties File Fixtures
# =============================================================================
@pytest.fixture
def properties_file(tmp_path) -> Generator[str, None, None]:
    """Create a properties file with a full authenticated setup."""
    path = tmp_path / "smtp.properties"
    path.write_text(
        "# SMTP settings\n"
        "mail.smtp.host=file.smtp.test.com\n"
        "mail.smtp.port=587\n"
        "mail.smtp.user=fileuser\n"
        "mail.smtp.password=filepassword\n",
        encoding="utf-8",
    )
    yield str(path)
