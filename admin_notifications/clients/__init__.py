"""Clients module for the admin notification service.

Contains the SMTP mail transport.
"""

from admin_notifications.clients.smtp import MailTransport

__all__ = ["MailTransport"]
