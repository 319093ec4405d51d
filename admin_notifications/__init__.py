"""Admin Notifications - email alerts for the website back-office.

Emails administrators when visitors submit a job application, a lead or a
review, and when the system raises an alert:
- Recipient resolution from the MongoDB user directory
- Per-user email opt-out (absent preference means opted in)
- Jinja2 HTML templates per event kind
- SMTP delivery, disabled cleanly when SMTP is not configured
- Failures logged, never raised to the triggering request

Architecture:
    - Mail transport (SMTP, one attempt per message)
    - User directory (motor / MongoDB)
    - Template renderer (Jinja2)
    - Notification dispatcher (async entry points)

Modules:
    - core: Exceptions, logger
    - config: Pydantic v2 settings
    - models: Events, messages, users, transport config
    - clients: SMTP mail transport
    - directory: Admin user lookup
    - templates: Email template rendering
    - dispatcher: Notification entry points
    - scripts: Operator command-line tools

Usage:
    from admin_notifications import create_dispatcher

    dispatcher = create_dispatcher()

    await dispatcher.notify_new_lead({
        "name": "Joe",
        "email": "joe@example.com",
        "service": "BPO Services",
        "message": "hello",
    })
"""

__version__ = "1.0.0"

# Clients
from admin_notifications.clients import MailTransport

# Configuration
from admin_notifications.config import NotificationSettings

# Core utilities
from admin_notifications.core import (
    ConfigurationMissingError,
    DirectoryLookupError,
    EmailDeliveryError,
    NotificationServiceError,
    TemplateRenderError,
    TransportNotConfiguredError,
    get_logger,
    setup_logging,
)

# Directory
from admin_notifications.directory import AdminDirectory, UserDirectory

# Dispatcher
from admin_notifications.dispatcher import NotificationDispatcher, create_dispatcher

# Models
from admin_notifications.models import (
    AdminUser,
    AlertSeverity,
    JobApplicationEvent,
    LeadEvent,
    NotificationType,
    OutboundMessage,
    RenderedEmail,
    ReviewEvent,
    SystemAlertEvent,
    TransportConfig,
    UserRole,
)

# Templates
from admin_notifications.templates import TemplateRenderer

__all__ = [
    # Version
    "__version__",
    # Core
    "NotificationServiceError",
    "ConfigurationMissingError",
    "TransportNotConfiguredError",
    "EmailDeliveryError",
    "TemplateRenderError",
    "DirectoryLookupError",
    "get_logger",
    "setup_logging",
    # Configuration
    "NotificationSettings",
    # Models
    "AlertSeverity",
    "NotificationType",
    "UserRole",
    "AdminUser",
    "JobApplicationEvent",
    "LeadEvent",
    "ReviewEvent",
    "SystemAlertEvent",
    "OutboundMessage",
    "RenderedEmail",
    "TransportConfig",
    # Clients
    "MailTransport",
    # Directory
    "AdminDirectory",
    "UserDirectory",
    # Templates
    "TemplateRenderer",
    # Dispatcher
    "NotificationDispatcher",
    "create_dispatcher",
]
