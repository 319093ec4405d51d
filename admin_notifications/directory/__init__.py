"""Directory module for the admin notification service.

Contains the MongoDB-backed lookup of back-office users.
"""

from admin_notifications.directory.users import AdminDirectory, UserDirectory

__all__ = ["AdminDirectory", "UserDirectory"]
