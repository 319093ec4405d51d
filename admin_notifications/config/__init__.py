"""Configuration module for the admin notification service.

Loads and validates settings from environment variables or .env file.
"""

from admin_notifications.config.settings import IMPLICIT_TLS_PORT, NotificationSettings

__all__ = ["NotificationSettings", "IMPLICIT_TLS_PORT"]
