"""Models module for the admin notification service.

Defines Pydantic v2 models for notification events, outbound messages,
directory users and SMTP transport configuration.
"""

from admin_notifications.models.events import (
    DEFAULT_POSITION,
    AlertSeverity,
    JobApplicationEvent,
    LeadEvent,
    NotificationEvent,
    ReviewEvent,
    SystemAlertEvent,
)
from admin_notifications.models.message import (
    NotificationType,
    OutboundMessage,
    RenderedEmail,
    strip_tags,
)
from admin_notifications.models.transport import TransportConfig
from admin_notifications.models.user import (
    NOTIFIABLE_ROLES,
    AdminUser,
    NotificationPreferences,
    UserPreferences,
    UserRole,
)

__all__ = [
    # Enums
    "AlertSeverity",
    "NotificationType",
    "UserRole",
    # Events
    "NotificationEvent",
    "JobApplicationEvent",
    "LeadEvent",
    "ReviewEvent",
    "SystemAlertEvent",
    "DEFAULT_POSITION",
    # Messages
    "OutboundMessage",
    "RenderedEmail",
    "strip_tags",
    # Directory
    "AdminUser",
    "UserPreferences",
    "NotificationPreferences",
    "NOTIFIABLE_ROLES",
    # Transport
    "TransportConfig",
]
