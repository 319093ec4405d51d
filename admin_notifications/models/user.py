"""Admin user models.

Read-only view of the user directory documents: only the fields that decide
whether a user receives notification email.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NOTIFIABLE_ROLES = ("admin", "moderator")


class UserRole(str, Enum):
    """Back-office user role."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    VIEWER = "viewer"


class NotificationPreferences(BaseModel):
    """Per-user notification switches.

    ``email`` is three-state: True or None (absent) means send,
    False means suppress.
    """

    model_config = ConfigDict(extra="ignore")

    email: bool | None = Field(default=None, description="Email notifications")


class UserPreferences(BaseModel):
    model_config = ConfigDict(extra="ignore")

    notifications: NotificationPreferences | None = None


class AdminUser(BaseModel):
    """Back-office user as stored in the directory.

    Attributes:
        email: Login and notification address (may be missing in bad data).
        is_active: Whether the account is active.
        role: admin, moderator or viewer.
        preferences: Optional user preferences.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    email: str | None = Field(default=None, description="User email")
    is_active: bool = Field(default=True, alias="isActive", description="Active flag")
    role: UserRole = Field(default=UserRole.VIEWER, description="User role")
    preferences: UserPreferences | None = Field(default=None, description="Preferences")

    @property
    def email_notifications_enabled(self) -> bool:
        """Default-allow preference: only an explicit False opts out."""
        if self.preferences is None or self.preferences.notifications is None:
            return True
        return self.preferences.notifications.email is not False

    @property
    def is_notifiable(self) -> bool:
        """Active admin or moderator."""
        return self.is_active and self.role.value in NOTIFIABLE_ROLES
