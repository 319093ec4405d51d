"""Dispatcher module for the admin notification service.

Turns website events into admin notification emails.
"""

from admin_notifications.dispatcher.notifier import (
    NotificationDispatcher,
    create_dispatcher,
    notification_isolation,
)

__all__ = ["NotificationDispatcher", "create_dispatcher", "notification_isolation"]
