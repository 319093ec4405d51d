"""Notification service configuration with Pydantic v2.

Manages SMTP settings, the user directory connection, template options and
logging, loaded from environment variables or a .env file.

SMTP settings are optional at load time: a process without them runs with
email delivery disabled instead of failing to start.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from admin_notifications.core.exceptions import ConfigurationMissingError
from admin_notifications.models.transport import TransportConfig

IMPLICIT_TLS_PORT = 465


class NotificationSettings(BaseSettings):
    """Admin notification service configuration.

    Attributes:
        SMTP_HOST: SMTP server hostname (required for delivery).
        SMTP_PORT: SMTP server port (required; 465 means implicit TLS).
        SMTP_USER: SMTP authentication username, also the default sender.
        SMTP_PASS: SMTP authentication password.
        SMTP_FROM: Sender address override.
        SMTP_TIMEOUT: SMTP socket timeout in seconds.
        DEFAULT_FROM_DOMAIN: Domain of the last-resort noreply sender.
        CLIENT_URL: Base URL of the admin panel used in email links.
        COMPANY_NAME: Name shown in email footers.
        MONGODB_URI: MongoDB connection string for the user directory.
        MONGODB_DATABASE: Database holding the users collection.
        USERS_COLLECTION: Collection holding admin users.
        TEMPLATE_DIR: Directory containing Jinja2 email templates.
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        LOG_TO_FILE: Whether to log to file.
        LOG_DIR: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ========================================================================
    # SMTP Configuration
    # ========================================================================
    SMTP_HOST: str | None = Field(default=None, description="SMTP server hostname")
    SMTP_PORT: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="SMTP server port",
    )
    SMTP_USER: str | None = Field(default=None, description="SMTP username")
    SMTP_PASS: str | None = Field(default=None, description="SMTP password")
    SMTP_FROM: str | None = Field(default=None, description="Sender address override")
    SMTP_TIMEOUT: int = Field(
        default=30,
        ge=5,
        le=300,
        description="SMTP connection timeout in seconds",
    )
    DEFAULT_FROM_DOMAIN: str = Field(
        default="careermapsolutions.com",
        description="Domain of the noreply sender used when nothing else is set",
    )

    # ========================================================================
    # Template Configuration
    # ========================================================================
    CLIENT_URL: str = Field(
        default="http://localhost:5005",
        description="Admin panel base URL embedded in email links",
    )
    COMPANY_NAME: str = Field(
        default="CareerMap Solutions",
        description="Company name shown in email footers",
    )
    TEMPLATE_DIR: str = Field(
        default_factory=lambda: str(Path(__file__).parent.parent / "templates" / "html"),
        description="Directory containing Jinja2 email templates",
    )

    # ========================================================================
    # User Directory Configuration
    # ========================================================================
    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    MONGODB_DATABASE: str = Field(
        default="careermap",
        description="MongoDB database name",
    )
    USERS_COLLECTION: str = Field(
        default="users",
        description="Collection containing admin users",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================
    LOG_LEVEL: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    LOG_TO_FILE: bool = Field(default=False, description="Whether to log to file")
    LOG_DIR: str = Field(default="./logs", description="Directory for log files")

    @field_validator("SMTP_HOST", "SMTP_USER", "SMTP_FROM", "SMTP_PORT", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat blank environment values as unset.

        Args:
            v: Raw value from the environment.

        Returns:
            Stripped value, or None when blank.
        """
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("SMTP_PASS", mode="before")
    @classmethod
    def clean_smtp_pass(cls, v):
        """Remove spaces from the SMTP password.

        Gmail app passwords are displayed with spaces for readability but
        must be used without them. Whitespace-only values count as unset.
        """
        if isinstance(v, str):
            v = v.replace(" ", "")
            return v if v.strip() else None
        return v

    @field_validator("CLIENT_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize CLIENT_URL so paths can be appended with a single slash."""
        return v.strip().rstrip("/")

    def missing_smtp_settings(self) -> list[str]:
        """List the required SMTP variables that are not set."""
        required = {
            "SMTP_HOST": self.SMTP_HOST,
            "SMTP_PORT": self.SMTP_PORT,
            "SMTP_USER": self.SMTP_USER,
            "SMTP_PASS": self.SMTP_PASS,
        }
        return [name for name, value in required.items() if value is None]

    def default_from_address(self) -> str:
        """Resolve the default sender: SMTP_FROM, then SMTP_USER, then noreply."""
        return self.SMTP_FROM or self.SMTP_USER or f"noreply@{self.DEFAULT_FROM_DOMAIN}"

    def transport_config(self) -> TransportConfig:
        """Build the SMTP transport configuration.

        Returns:
            Validated TransportConfig.

        Raises:
            ConfigurationMissingError: If a required SMTP setting is absent.
        """
        missing = self.missing_smtp_settings()
        if missing:
            raise ConfigurationMissingError(missing)

        return TransportConfig(
            host=self.SMTP_HOST,
            port=self.SMTP_PORT,
            user=self.SMTP_USER,
            password=self.SMTP_PASS,
            from_address=self.SMTP_FROM,
            default_from_domain=self.DEFAULT_FROM_DOMAIN,
            secure=self.SMTP_PORT == IMPLICIT_TLS_PORT,
            timeout=self.SMTP_TIMEOUT,
        )
