"""Clients module for mailutil.

Contains the SMTP context and the session handle that talks to SMTP servers.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from mailutil.clients.smtp import SmtpContext, SmtpSession

__all__ = ["SmtpContext", "SmtpSession"]
