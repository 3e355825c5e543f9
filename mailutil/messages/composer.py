"""Message composition and one-call sending.

Builds ``EmailMessage`` objects with subject, addresses and either a single
body part or an HTML/plaintext alternative, and sends them through an
``SmtpContext``.

``compose_*`` functions return the finished message without a Date header;
a caller that sends one itself must call ``stamp_sent_date`` first.
``send_*`` functions compose, stamp the Date and send.

Every function takes ``context``; when it is None the process-wide
``default_context()`` is used.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime
from email.message import EmailMessage
from email.utils import format_datetime, formatdate, make_msgid

from mailutil.clients.smtp import SmtpContext
from mailutil.config.resolver import default_context
from mailutil.core.logger import get_logger
from mailutil.models.address import Address, AddressInput, to_addresses

logger = get_logger(__name__)


def _resolve(context: SmtpContext | None) -> SmtpContext:
    return context if context is not None else default_context()


def _header_value(addresses: list[Address]) -> str:
    return ", ".join(address.formatted() for address in addresses)


def _set_headers(
    msg: EmailMessage,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput,
    bcc: AddressInput,
    reply_to: AddressInput,
    strict: bool,
) -> None:
    msg["Subject"] = subject
    for header, value in (
        ("From", from_),
        ("To", to),
        ("Cc", cc),
        ("Bcc", bcc),
        ("Reply-To", reply_to),
    ):
        addresses = to_addresses(value, strict)
        if addresses:
            msg[header] = _header_value(addresses)


def _finalize(msg: EmailMessage) -> EmailMessage:
    if "Message-ID" not in msg:
        msg["Message-ID"] = make_msgid()
    return msg


def stamp_sent_date(msg: EmailMessage, when: datetime | None = None) -> EmailMessage:
    """Set the Date header, replacing any existing one.

    Args:
        msg: Message to stamp.
        when: Timezone-aware send time; now (local time) when None.

    Returns:
        The same message.
    """
    del msg["Date"]
    msg["Date"] = format_datetime(when) if when is not None else formatdate(localtime=True)
    return msg


def _send(msg: EmailMessage, context: SmtpContext) -> None:
    stamp_sent_date(msg)
    _finalize(msg)
    context.send(msg)


def compose_simple(
    mime_type: str,
    contents: str | bytes,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> EmailMessage:
    """Compose a single-part message of any MIME type.

    Args:
        mime_type: Content type such as ``text/plain`` or ``application/pdf``.
        contents: ``str`` for ``text/*`` types, ``bytes`` otherwise.
        subject: Subject line.
        from_, to, cc, bcc, reply_to: Address inputs (string, Address, or
            a sequence of either).
        strict: Validate every address.
        context: SMTP context; the default context when None.

    Returns:
        Finished message without a Date header.

    Raises:
        AddressParseError: If strict validation rejects an address.
        ValueError: If ``mime_type`` is not ``maintype/subtype``, or the
            contents type does not match it.
    """
    maintype, _, subtype = mime_type.partition("/")
    if not maintype or not subtype:
        raise ValueError(f"Invalid MIME type: {mime_type}")
    if maintype == "text" and not isinstance(contents, str):
        raise ValueError(f"Contents for {mime_type} must be str, got {type(contents).__name__}")
    if maintype != "text" and not isinstance(contents, bytes):
        raise ValueError(f"Contents for {mime_type} must be bytes, got {type(contents).__name__}")

    msg = EmailMessage(policy=_resolve(context).session.policy)
    if maintype == "text":
        msg.set_content(contents, subtype=subtype)
    else:
        msg.set_content(contents, maintype=maintype, subtype=subtype)
    _set_headers(msg, subject, from_, to, cc, bcc, reply_to, strict)

    logger.debug(f"Composed {mime_type} message - Subject: {subject[:50]}")
    return _finalize(msg)


def send_simple(
    mime_type: str,
    contents: str | bytes,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> None:
    """Compose and send a single-part message. See ``compose_simple``."""
    context = _resolve(context)
    msg = compose_simple(
        mime_type, contents, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )
    _send(msg, context)


def compose_plaintext(
    plaintext: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> EmailMessage:
    """Compose a ``text/plain`` message."""
    return compose_simple(
        "text/plain", plaintext, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )


def send_plaintext(
    plaintext: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> None:
    """Compose and send a ``text/plain`` message."""
    send_simple(
        "text/plain", plaintext, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )


def compose_html_only(
    html: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> EmailMessage:
    """Compose a ``text/html`` message with no plaintext alternative."""
    return compose_simple(
        "text/html", html, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )


def send_html_only(
    html: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> None:
    """Compose and send a ``text/html`` message."""
    send_simple(
        "text/html", html, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )


def compose_html_plaintext_alternative(
    html: str,
    plaintext: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> EmailMessage:
    """Compose a ``multipart/alternative`` message with HTML and plaintext.

    The plaintext part comes first and the HTML part last; mail clients
    prefer the last alternative they can display.

    Returns:
        Finished message without a Date header.

    Raises:
        AddressParseError: If strict validation rejects an address.
    """
    msg = EmailMessage(policy=_resolve(context).session.policy)
    msg.set_content(plaintext, subtype="plain")
    msg.add_alternative(html, subtype="html")
    _set_headers(msg, subject, from_, to, cc, bcc, reply_to, strict)

    logger.debug(f"Composed multipart/alternative message - Subject: {subject[:50]}")
    return _finalize(msg)


def send_html_plaintext_alternative(
    html: str,
    plaintext: str,
    subject: str,
    from_: AddressInput,
    to: AddressInput,
    cc: AddressInput = None,
    bcc: AddressInput = None,
    reply_to: AddressInput = None,
    strict: bool = True,
    *,
    context: SmtpContext | None = None,
) -> None:
    """Compose and send an HTML message with a plaintext alternative."""
    context = _resolve(context)
    msg = compose_html_plaintext_alternative(
        html, plaintext, subject, from_, to, cc, bcc, reply_to, strict, context=context
    )
    _send(msg, context)
