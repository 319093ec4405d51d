"""SMTP mail transport.

Owns the SMTP configuration of the process and delivers one message per
call. Port 465 connects with implicit TLS; any other port connects in plain
text and upgrades with STARTTLS when the server offers it.

Features:
- Disabled (not failing) when SMTP settings are missing
- Multipart emails (plaintext + HTML)
- Delivery errors carry SMTP code and failing command
- Single attempt per send: no retry, queueing or pooling
"""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid, parseaddr

from pydantic import ValidationError

from admin_notifications.config import NotificationSettings
from admin_notifications.core.exceptions import (
    ConfigurationMissingError,
    EmailDeliveryError,
    TransportNotConfiguredError,
)
from admin_notifications.core.logger import get_logger, log_context
from admin_notifications.models.message import OutboundMessage
from admin_notifications.models.transport import TransportConfig

logger = get_logger(__name__)

# Timeout used when checking settings that have not been saved yet
VERIFY_CONFIG_TIMEOUT = 10


@dataclass
class _CommandTrace:
    """SMTP command in flight, reported with delivery errors."""

    command: str = "CONN"


def _open_connection(
    config: TransportConfig,
    trace: _CommandTrace,
    timeout: int | None = None,
) -> smtplib.SMTP:
    """Connect, negotiate TLS and authenticate.

    Args:
        config: SMTP transport configuration.
        trace: Updated with the command being executed.
        timeout: Socket timeout override.

    Returns:
        Authenticated SMTP connection.
    """
    timeout = timeout or config.timeout
    context = ssl.create_default_context()

    trace.command = "CONN"
    logger.debug(f"Connecting to SMTP: {config.host}:{config.port} (secure={config.secure})")
    if config.secure:
        smtp = smtplib.SMTP_SSL(config.host, config.port, timeout=timeout, context=context)
    else:
        smtp = smtplib.SMTP(config.host, config.port, timeout=timeout)

    try:
        trace.command = "EHLO"
        smtp.ehlo()

        if not config.secure and smtp.has_extn("starttls"):
            trace.command = "STARTTLS"
            logger.debug("Starting TLS...")
            smtp.starttls(context=context)
            smtp.ehlo()

        trace.command = "AUTH"
        smtp.login(config.user, config.password)
    except BaseException:
        _close_quietly(smtp)
        raise

    logger.debug("SMTP connection established")
    return smtp


def _close_quietly(smtp: smtplib.SMTP) -> None:
    """Close an SMTP connection, ignoring errors on the way out."""
    try:
        smtp.quit()
    except (smtplib.SMTPException, OSError) as e:
        logger.debug(f"Error closing SMTP connection (non-critical): {e}")
        smtp.close()


class MailTransport:
    """SMTP mail transport.

    Built once at process startup and handed to the dispatcher. Stays
    uninitialized until ``initialize()`` finds a complete SMTP
    configuration; after that the configuration is only read.

    Attributes:
        settings: Service settings the configuration is read from.
        config: SMTP configuration, or None while uninitialized.
    """

    def __init__(self, settings: NotificationSettings | None = None) -> None:
        """Create an uninitialized transport.

        Args:
            settings: Service settings (loaded from the environment if None).
        """
        self.settings = settings or NotificationSettings()
        self.config: TransportConfig | None = None

    @property
    def is_configured(self) -> bool:
        return self.config is not None

    def initialize(self) -> bool:
        """Read the SMTP configuration from settings.

        Missing or invalid settings leave the transport disabled and log a
        warning; nothing is raised. Calling again replaces the held configuration.

        Returns:
            True if the transport is ready to send.
        """
        try:
            self.config = self.settings.transport_config()
        except ConfigurationMissingError as e:
            logger.warning(f"Email service not configured: {e}")
            logger.warning(
                "Set SMTP_HOST, SMTP_PORT, SMTP_USER and SMTP_PASS "
                "to enable email notifications."
            )
            return False
        except ValidationError as e:
            logger.warning(f"Email service disabled, invalid SMTP settings: {e}")
            return False

        logger.info(
            f"Mail transport initialized: {self.config.host}:{self.config.port} "
            f"(secure={self.config.secure})"
        )
        return True

    def verify_connection(self) -> bool:
        """Test SMTP connection and authentication.

        Returns:
            True if the handshake succeeds, False if uninitialized or on any
            error.
        """
        if self.config is None:
            logger.debug("SMTP verification skipped: transport not configured")
            return False

        try:
            logger.info("Testing SMTP connection...")
            smtp = _open_connection(self.config, _CommandTrace())
            _close_quietly(smtp)
            logger.info("SMTP connection test successful")
            return True

        except Exception as e:
            logger.error(f"SMTP connection test failed: {e}")
            return False

    @classmethod
    def verify_config(cls, config: TransportConfig) -> bool:
        """Verify SMTP settings that are not active yet.

        Used before saving new SMTP settings, so the reason for a failure is
        raised instead of being reduced to False.

        Args:
            config: Candidate SMTP configuration.

        Returns:
            True when the server accepts the connection and credentials.

        Raises:
            EmailDeliveryError: If connecting or authenticating fails.
        """
        trace = _CommandTrace()
        try:
            smtp = _open_connection(config, trace, timeout=VERIFY_CONFIG_TIMEOUT)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP verification failed for {config.host}:{config.port}: {e}")
            raise cls._delivery_error(e, trace) from e

        _close_quietly(smtp)
        return True

    def send(self, message: OutboundMessage) -> None:
        """Deliver a message in a single SMTP transaction.

        Args:
            message: Message to send.

        Raises:
            TransportNotConfiguredError: If the transport is uninitialized.
            EmailDeliveryError: If the SMTP transaction fails.
        """
        config = self.config
        if config is None:
            logger.error(
                "Email service is not configured. "
                "Required: SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS"
            )
            raise TransportNotConfiguredError()

        sender = message.from_address or config.default_sender
        mime = self._build_message(message, sender)
        ctx = log_context(
            "send",
            recipient=message.recipients_header,
            subject=message.subject[:60],
        )
        logger.info(f"Sending email: {ctx} (from={sender})")

        trace = _CommandTrace()
        try:
            smtp = _open_connection(config, trace)
            try:
                trace.command = "DATA"
                refused = smtp.send_message(
                    mime,
                    from_addr=parseaddr(sender)[1] or sender,
                    to_addrs=message.to,
                )
            finally:
                _close_quietly(smtp)

        except (smtplib.SMTPException, OSError) as e:
            error = self._delivery_error(e, trace)
            logger.error(
                f"Failed to send email: {ctx} | error={error.message} "
                f"code={error.code} command={error.command}"
            )
            raise error from e

        if refused:
            logger.warning(f"Some recipients were refused: {', '.join(refused)}")

        logger.info(f"Email sent successfully: {ctx} (message_id={mime['Message-ID']})")

    def send_test_email(self, recipient: str) -> bool:
        """Send a test email to verify configuration.

        Args:
            recipient: Address to send the test email to.

        Returns:
            True if the test email was sent, False otherwise.
        """
        try:
            logger.info(f"Sending test email to {recipient}...")
            self.send(
                OutboundMessage(
                    to=[recipient],
                    subject="Admin Notifications - Test Email",
                    html="<h1>Test Email</h1><p>Email notifications are working correctly.</p>",
                    text="Test Email\n\nEmail notifications are working correctly.",
                )
            )
            return True

        except Exception as e:
            logger.error(f"Test email failed: {e}")
            return False

    @staticmethod
    def _build_message(message: OutboundMessage, sender: str) -> MIMEMultipart:
        """Build the multipart/alternative MIME message."""
        mime = MIMEMultipart("alternative")
        mime["From"] = sender
        mime["To"] = message.recipients_header
        mime["Subject"] = message.subject
        mime["Date"] = formatdate(localtime=True)
        domain = parseaddr(sender)[1].rpartition("@")[2] or None
        mime["Message-ID"] = make_msgid(domain=domain)

        mime.attach(MIMEText(message.text_body, "plain", "utf-8"))
        mime.attach(MIMEText(message.html, "html", "utf-8"))
        return mime

    @classmethod
    def _delivery_error(cls, error: BaseException, trace: _CommandTrace) -> EmailDeliveryError:
        """Translate an smtplib/socket error into EmailDeliveryError."""
        code: int | None = None
        command = trace.command

        if isinstance(error, smtplib.SMTPResponseException):
            code = error.smtp_code
            detail = error.smtp_error
            if isinstance(detail, bytes):
                detail = detail.decode("utf-8", errors="replace")
            text = f"{detail} ({code})"
        elif isinstance(error, smtplib.SMTPRecipientsRefused):
            codes = [c for c, _ in error.recipients.values()]
            code = codes[0] if codes else None
            text = f"All recipients were refused: {', '.join(error.recipients)}"
        else:
            text = str(error) or error.__class__.__name__
            if isinstance(error, OSError) and error.errno is not None:
                code = error.errno

        if isinstance(error, smtplib.SMTPSenderRefused):
            command = "MAIL FROM"
        elif isinstance(error, smtplib.SMTPRecipientsRefused):
            command = "RCPT TO"

        return EmailDeliveryError(
            f"Failed to send email: {text}",
            code=code,
            command=command,
            is_transient=cls._is_transient_error(error),
        )

    @staticmethod
    def _is_transient_error(error: BaseException) -> bool:
        """Determine if error looks temporary.

        Args:
            error: Exception to analyze.

        Returns:
            True if error is likely transient.
        """
        if isinstance(error, smtplib.SMTPResponseException) and 400 <= error.smtp_code < 500:
            return True

        error_str = str(error).lower()
        transient_keywords = [
            "timeout",
            "timed out",
            "connection",
            "temporarily",
            "try again",
            "unavailable",
            "refused",
            "reset",
            "broken pipe",
        ]
        return any(keyword in error_str for keyword in transient_keywords)
