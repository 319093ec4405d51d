"""SMTP transport configuration model.

Defines the Pydantic model for the SMTP connection parameters derived from
the environment.
"""

from pydantic import BaseModel, Field, field_validator


class TransportConfig(BaseModel):
    """SMTP transport configuration model.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port (1-65535).
        user: SMTP authentication username.
        password: SMTP authentication password.
        from_address: Sender override (SMTP_FROM), if any.
        default_from_domain: Domain of the last-resort noreply sender.
        secure: Implicit TLS (port 465) instead of STARTTLS.
        timeout: Connection timeout in seconds.
    """

    host: str = Field(..., min_length=1, description="SMTP server hostname")
    port: int = Field(..., ge=1, le=65535, description="SMTP server port")
    user: str = Field(..., min_length=1, description="SMTP authentication username")
    password: str = Field(..., description="SMTP authentication password")
    from_address: str | None = Field(default=None, description="Sender override")
    default_from_domain: str = Field(
        default="careermapsolutions.com",
        description="Domain of the noreply fallback sender",
    )
    secure: bool = Field(default=False, description="Use implicit TLS")
    timeout: int = Field(
        default=30, ge=1, le=300, description="Connection timeout (seconds)"
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password is not empty.

        Raises:
            ValueError: If password is empty or whitespace.
        """
        if not v or not v.strip():
            raise ValueError("SMTP password cannot be empty")
        return v

    @property
    def default_sender(self) -> str:
        """Sender used when a message carries no ``from`` of its own."""
        return self.from_address or self.user or f"noreply@{self.default_from_domain}"
