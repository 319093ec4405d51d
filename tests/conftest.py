"""Pytest configuration and fixtures for admin notification tests.

Provides reusable fixtures for settings, mocked SMTP connections, directory
users and a dispatcher wired to mocks.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from admin_notifications.config import NotificationSettings
from admin_notifications.dispatcher import NotificationDispatcher
from admin_notifications.models.transport import TransportConfig
from admin_notifications.models.user import AdminUser
from admin_notifications.templates import TemplateRenderer

SMTP_ENV_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_FROM",
    "CLIENT_URL",
)


@pytest.fixture(autouse=True)
def clean_smtp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of settings under test."""
    for name in SMTP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Settings Fixtures
# =============================================================================
@pytest.fixture
def settings() -> NotificationSettings:
    """Settings with a complete SMTP configuration."""
    return NotificationSettings(
        _env_file=None,
        SMTP_HOST="smtp.test.com",
        SMTP_PORT=587,
        SMTP_USER="test@test.com",
        SMTP_PASS="testpassword",
        CLIENT_URL="https://careermap.test",
        LOG_TO_FILE=False,
    )


@pytest.fixture
def unconfigured_settings() -> NotificationSettings:
    """Settings without any SMTP configuration."""
    return NotificationSettings(_env_file=None, LOG_TO_FILE=False)


@pytest.fixture
def transport_config() -> TransportConfig:
    return TransportConfig(
        host="smtp.test.com",
        port=587,
        user="test@test.com",
        password="testpassword",
        secure=False,
        timeout=30,
    )


# =============================================================================
# SMTP Fixtures
# =============================================================================
@pytest.fixture
def mock_smtp_connection() -> MagicMock:
    """Create a mock SMTP connection."""
    smtp = MagicMock()
    smtp.ehlo.return_value = (250, b"OK")
    smtp.has_extn.return_value = True
    smtp.starttls.return_value = (220, b"TLS ready")
    smtp.login.return_value = (235, b"Authentication successful")
    smtp.send_message.return_value = {}
    smtp.quit.return_value = (221, b"Bye")
    return smtp


# =============================================================================
# Directory Fixtures
# =============================================================================
def make_user(
    email: str | None,
    role: str = "admin",
    is_active: bool = True,
    email_pref: bool | None = None,
    with_preferences: bool = True,
) -> AdminUser:
    """Build an AdminUser from a directory-shaped document."""
    document: dict[str, Any] = {"isActive": is_active, "role": role}
    if email is not None:
        document["email"] = email
    if with_preferences:
        notifications = {} if email_pref is None else {"email": email_pref}
        document["preferences"] = {"notifications": notifications}
    return AdminUser.model_validate(document)


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def mock_directory() -> AsyncMock:
    """Directory returning no users unless a test sets some."""
    directory = AsyncMock()
    directory.find_notification_candidates.return_value = []
    return directory


@pytest.fixture
def mock_transport() -> MagicMock:
    transport = MagicMock()
    transport.send.return_value = None
    transport.is_configured = True
    return transport


@pytest.fixture
def renderer(settings: NotificationSettings) -> TemplateRenderer:
    return TemplateRenderer(settings=settings)


@pytest.fixture
def dispatcher(
    mock_transport: MagicMock,
    mock_directory: AsyncMock,
    renderer: TemplateRenderer,
) -> NotificationDispatcher:
    return NotificationDispatcher(mock_transport, mock_directory, renderer)
