"""Notification dispatcher - admin emails for website events.

Turns a business event (job application, lead, review, system alert) into
one email to every eligible administrator: resolves recipients from the
user directory, renders the event template and hands the message to the
mail transport.

Notification is a side effect of saving a record, so no failure in here
reaches the caller: every public ``notify_*`` coroutine logs the error and
returns None.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from functools import wraps
from typing import Any, TypeVar

from admin_notifications.clients.smtp import MailTransport
from admin_notifications.config import NotificationSettings
from admin_notifications.core.logger import get_logger, log_context
from admin_notifications.directory.users import AdminDirectory, UserDirectory
from admin_notifications.models.events import (
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
)
from admin_notifications.templates.renderer import TemplateRenderer

logger = get_logger(__name__)

E = TypeVar("E", bound=NotificationEvent)


# =============================================================================
# Isolation Decorator
# =============================================================================
def notification_isolation(
    label: str,
) -> Callable[[Callable[..., Awaitable[None]]], Callable[..., Awaitable[None]]]:
    """Decorator that keeps notification failures away from the caller.

    Any exception raised while resolving, rendering or sending is logged
    with its traceback and the coroutine returns None.

    Args:
        label: Human-readable notification name used in the error log.

    Example:
        @notification_isolation("lead")
        async def notify_new_lead(self, lead):
            ...
    """

    def decorator(
        func: Callable[..., Awaitable[None]],
    ) -> Callable[..., Awaitable[None]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> None:
            try:
                await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Failed to send {label} notification: {e}", exc_info=True)
            return None

        return wrapper

    return decorator


def _as_event(model: type[E], data: E | Mapping[str, Any]) -> E:
    """Accept a typed event or the raw form payload."""
    if isinstance(data, model):
        return data
    return model.model_validate(data)


class NotificationDispatcher:
    """Emails administrators about website events.

    Attributes:
        transport: Mail transport used for delivery.
        directory: Source of notification candidates.
        renderer: Template renderer for the event emails.
    """

    def __init__(
        self,
        transport: MailTransport,
        directory: AdminDirectory,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Mail transport, initialized by the caller.
            directory: User directory to resolve recipients from.
            renderer: Template renderer (built from transport settings if None).
        """
        self.transport = transport
        self.directory = directory
        self.renderer = renderer or TemplateRenderer(settings=transport.settings)

    async def resolve_recipients(self, notification_type: NotificationType) -> list[str]:
        """Find the addresses that should receive a notification.

        Every event kind currently draws on the same pool: active admins and
        moderators whose email preference is not explicitly False.

        Args:
            notification_type: Kind of notification being sent.

        Returns:
            Recipient addresses in directory order; empty if the directory
            could not be queried.
        """
        try:
            users = await self.directory.find_notification_candidates()
        except Exception as e:
            logger.error(f"Error fetching notification recipients: {e}", exc_info=True)
            return []

        recipients: list[str] = []
        for user in users:
            if not user.is_notifiable:
                logger.debug(f"Skipping {user.email} - not an active admin/moderator")
                continue

            if not user.email_notifications_enabled:
                logger.info(f"Skipping {user.email} - email notifications disabled")
                continue

            if not user.email:
                logger.warning("Admin user found without email address")
                continue

            recipients.append(user.email)

        logger.info(
            f"Found {len(recipients)} notification recipient(s) "
            f"for {notification_type.value}"
        )
        if recipients:
            logger.debug(f"Recipients: {', '.join(recipients)}")

        return recipients

    @notification_isolation("job application")
    async def notify_new_job_application(
        self, application: JobApplicationEvent | Mapping[str, Any]
    ) -> None:
        """Notify admins about a new job application."""
        event = _as_event(JobApplicationEvent, application)
        logger.info(
            "Attempting to send job application notification: "
            + log_context("job_application", full_name=event.full_name, email=event.email)
        )
        await self._dispatch(
            NotificationType.JOB_APPLICATIONS,
            "job application",
            lambda: self.renderer.render_job_application(event),
        )

    @notification_isolation("lead")
    async def notify_new_lead(self, lead: LeadEvent | Mapping[str, Any]) -> None:
        """Notify admins about a new contact form lead."""
        event = _as_event(LeadEvent, lead)
        logger.info(
            "Attempting to send lead notification: "
            + log_context("lead", name=event.name, email=event.email, service=event.service)
        )
        await self._dispatch(
            NotificationType.NEW_LEADS,
            "lead",
            lambda: self.renderer.render_lead(event),
        )

    @notification_isolation("review")
    async def notify_new_review(self, review: ReviewEvent | Mapping[str, Any]) -> None:
        """Notify admins about a new review awaiting moderation."""
        event = _as_event(ReviewEvent, review)
        logger.info(
            "Attempting to send review notification: "
            + log_context("review", reviewer_name=event.reviewer_name, company=event.company)
        )
        await self._dispatch(
            NotificationType.REVIEWS,
            "review",
            lambda: self.renderer.render_review(event),
        )

    @notification_isolation("system alert")
    async def notify_system_alert(self, alert: SystemAlertEvent | Mapping[str, Any]) -> None:
        """Notify admins about a system alert."""
        event = _as_event(SystemAlertEvent, alert)
        logger.info(
            "Attempting to send system alert notification: "
            + log_context("system_alert", title=event.title, severity=event.severity.value)
        )
        await self._dispatch(
            NotificationType.SYSTEM_ALERTS,
            "system alert",
            lambda: self.renderer.render_system_alert(event),
        )

    async def _dispatch(
        self,
        notification_type: NotificationType,
        label: str,
        render: Callable[[], RenderedEmail],
    ) -> None:
        """Resolve recipients, render and send one notification."""
        recipients = await self.resolve_recipients(notification_type)

        if not recipients:
            logger.warning(f"No recipients found for {label} notification. Check:")
            logger.warning("   1. Are there admin users in the database?")
            logger.warning("   2. Do admin users have email addresses?")
            logger.warning("   3. Are email notifications enabled in user preferences?")
            return

        rendered = render()
        message = OutboundMessage(to=recipients, subject=rendered.subject, html=rendered.html)
        logger.debug(f"Email template generated, sending to: {message.recipients_header}")

        # smtplib blocks; keep the event loop free while delivering
        await asyncio.to_thread(self.transport.send, message)

        logger.info(
            f"{label.capitalize()} notification sent successfully "
            f"to {len(recipients)} admin(s)"
        )


def create_dispatcher(settings: NotificationSettings | None = None) -> NotificationDispatcher:
    """Wire a dispatcher from settings, as done once at process startup.

    Initializes the mail transport (disabled with a warning when SMTP is not
    configured) and creates the MongoDB user directory.

    Args:
        settings: Service settings (loaded from the environment if None).

    Returns:
        Ready-to-use dispatcher.
    """
    settings = settings or NotificationSettings()

    transport = MailTransport(settings)
    transport.initialize()

    directory = UserDirectory(settings)
    renderer = TemplateRenderer(settings=settings)

    return NotificationDispatcher(transport, directory, renderer)
