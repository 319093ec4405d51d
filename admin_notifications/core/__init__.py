"""Core module for the admin notification service.

Provides the exception hierarchy and logging configuration.
"""

from admin_notifications.core.exceptions import (
    ConfigurationMissingError,
    DirectoryLookupError,
    EmailDeliveryError,
    NotificationServiceError,
    TemplateRenderError,
    TransportNotConfiguredError,
)
from admin_notifications.core.logger import (
    get_logger,
    get_logs_directory,
    log_context,
    setup_logging,
)

__all__ = [
    # Exceptions
    "NotificationServiceError",
    "ConfigurationMissingError",
    "TransportNotConfiguredError",
    "EmailDeliveryError",
    "TemplateRenderError",
    "DirectoryLookupError",
    # Logging
    "get_logger",
    "setup_logging",
    "get_logs_directory",
    "log_context",
]
