"""Custom exceptions for the admin notification service.

Defines specific exception types for the transport, directory and template
failures so the dispatcher can log them precisely before absorbing them.
"""

from __future__ import annotations


class NotificationServiceError(Exception):
    """Base exception for all notification service errors.

    Example:
        try:
            transport.send(message)
        except NotificationServiceError as e:
            logger.error(f"Notification error: {e}")
    """

    pass


class ConfigurationMissingError(NotificationServiceError):
    """Exception raised when required SMTP settings are absent.

    Only raised internally while initializing the mail transport, where it is
    downgraded to a warning.

    Attributes:
        missing (list[str]): Names of the absent environment variables.

    Example:
        raise ConfigurationMissingError(["SMTP_HOST", "SMTP_PASS"])
    """

    def __init__(self, missing: list[str]):
        """Initialize configuration error.

        Args:
            missing: Names of the absent environment variables.
        """
        super().__init__(
            f"Required SMTP settings missing: {', '.join(missing)}"
        )
        self.missing = missing


class TransportNotConfiguredError(NotificationServiceError):
    """Exception raised when sending through an uninitialized transport."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Email service is not configured. "
            "Set SMTP_HOST, SMTP_PORT, SMTP_USER and SMTP_PASS."
        )


class EmailDeliveryError(NotificationServiceError):
    """Exception raised for SMTP connection/delivery failures.

    Carries the diagnostics of the underlying error. Delivery is never
    retried; ``is_transient`` is informational only.

    Attributes:
        message (str): Description of the SMTP error.
        code (int | None): SMTP reply code or OS errno, when known.
        command (str | None): SMTP command that failed, when known.
        is_transient (bool): Whether the error looks temporary.

    Example:
        raise EmailDeliveryError(
            "Authentication rejected",
            code=535,
            command="AUTH",
        )
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        command: str | None = None,
        is_transient: bool = False,
    ):
        """Initialize delivery error.

        Args:
            message: Error description.
            code: SMTP reply code or errno of the underlying error.
            command: SMTP command being executed when the error occurred.
            is_transient: Whether error is temporary.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.command = command
        self.is_transient = is_transient


class TemplateRenderError(NotificationServiceError):
    """Exception raised for template rendering failures.

    Attributes:
        template_name (str, optional): Name of the template that failed.
    """

    def __init__(self, message: str, template_name: str | None = None):
        """Initialize template render error.

        Args:
            message: Error description.
            template_name: Optional name of the template that failed.
        """
        super().__init__(message)
        self.template_name = template_name


class DirectoryLookupError(NotificationServiceError):
    """Exception raised when the user directory cannot be queried."""

    pass
