"""Messages module for mailutil.

Composes plaintext, HTML and HTML-with-plaintext-alternative messages and
sends them through an SMTP context.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from mailutil.messages.composer import (
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

__all__ = [
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
