#!/usr/bin/env python3
"""Validate SMTP configuration and connectivity.

Tests SMTP server reachability, TLS and authentication with the settings the
notification service would use.

Usage:
    python -m admin_notifications.scripts.validate_smtp
    python -m admin_notifications.scripts.validate_smtp --verbose
    python -m admin_notifications.scripts.validate_smtp --test-email user@example.com
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from admin_notifications.clients.smtp import MailTransport
from admin_notifications.config import NotificationSettings
from admin_notifications.core.logger import get_logger, mask_secret, setup_logging

logger = get_logger(__name__)


def print_header() -> None:
    print("\n" + "=" * 80)
    print("  📧 Admin Notifications SMTP Validator")
    print("=" * 80)


def print_footer() -> None:
    print("=" * 80 + "\n")


def print_config(settings: NotificationSettings) -> None:
    """Print loaded SMTP configuration (with credentials masked).

    Args:
        settings: Loaded settings.
    """
    print("\n📋 Loaded Configuration:")
    print(f"  SMTP Host:      {settings.SMTP_HOST or '(not set)'}")
    print(f"  SMTP Port:      {settings.SMTP_PORT or '(not set)'}")
    print(f"  SMTP Username:  {settings.SMTP_USER or '(not set)'}")
    print(f"  SMTP Password:  {mask_secret(settings.SMTP_PASS)}")
    print(f"  SMTP From:      {settings.default_from_address()}")
    print(f"  Implicit TLS:   {'Yes' if settings.SMTP_PORT == 465 else 'No (STARTTLS)'}")
    print(f"  Timeout:        {settings.SMTP_TIMEOUT}s")
    print(f"  Client URL:     {settings.CLIENT_URL}")


def validate_smtp_connection(transport: MailTransport) -> bool:
    """Validate SMTP connection.

    Returns:
        True if connection successful, False otherwise.
    """
    print("\n🧪 Testing SMTP Connection...")

    if not transport.is_configured:
        missing = ", ".join(transport.settings.missing_smtp_settings())
        print(f"❌ SMTP is not configured (missing: {missing})")
        return False

    if transport.verify_connection():
        print("✅ SMTP connection test PASSED")
        return True

    print("❌ SMTP connection test FAILED")
    return False


def send_test_email(transport: MailTransport, test_recipient: str) -> bool:
    """Send test email to verify configuration.

    Returns:
        True if test email sent successfully, False otherwise.
    """
    print(f"\n📧 Sending Test Email to: {test_recipient}")

    if transport.send_test_email(test_recipient):
        print(f"✅ Test email sent successfully to {test_recipient}")
        print("   Check your inbox for the test email!")
        return True

    print(f"❌ Failed to send test email to {test_recipient}")
    return False


def print_recommendations(success: bool, test_email_success: Optional[bool] = None) -> None:
    """Print recommendations based on test results.

    Args:
        success: Whether SMTP connection test passed.
        test_email_success: Whether test email was sent (None if not attempted).
    """
    print("\n" + "-" * 80)
    print("📌 Recommendations:")

    if success:
        if test_email_success is None:
            print("  ✅ SMTP configuration is valid and connection works!")
            print("  → Optionally test delivery with: --test-email your-email@example.com")
        elif test_email_success:
            print("  ✅ SMTP configuration is valid and test email was delivered!")
            print("  → Admin notifications are ready to be sent")
        else:
            print("  ⚠️  SMTP connection works but test email delivery failed")
            print("  → Check recipient email address format")
            print("  → Check that SMTP_FROM is an address or alias the server accepts")
    else:
        print("  ❌ SMTP connection failed. Troubleshooting steps:")
        print("  1. Verify SMTP_HOST and SMTP_PORT")
        print("     - Port 465 uses implicit TLS, 587 uses STARTTLS")
        print("  2. Verify SMTP_USER and SMTP_PASS")
        print("     - Gmail: use a 16-char app password, not the account password")
        print("  3. Check that outbound TCP to the SMTP port is allowed")
        print("  4. Run again with --verbose to see detailed errors")


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 if all tests passed, 1 if any test failed.
    """
    parser = argparse.ArgumentParser(
        description="Validate SMTP configuration and connectivity for admin notifications.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal output (only errors and results)",
    )
    parser.add_argument(
        "--test-email",
        "-t",
        type=str,
        metavar="EMAIL",
        help="Send a test email to the specified address",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Suppress header and footer output",
    )

    args = parser.parse_args(argv)

    setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        console_level="DEBUG" if args.verbose else "WARNING" if args.quiet else "INFO",
        enable_file=False,
    )

    if not args.no_header:
        print_header()

    exit_code = 0

    try:
        settings = NotificationSettings()

        if not args.quiet:
            print_config(settings)

        transport = MailTransport(settings)
        transport.initialize()

        connection_success = validate_smtp_connection(transport)

        test_email_success = None
        if args.test_email and connection_success:
            test_email_success = send_test_email(transport, args.test_email)

        if not args.quiet:
            print_recommendations(connection_success, test_email_success)

        if not connection_success or test_email_success is False:
            exit_code = 1

    except Exception as e:
        if not args.quiet:
            print(f"\n❌ Validation script error: {e}")
        logger.exception("Validation script failed")
        exit_code = 1

    finally:
        if not args.no_header:
            print_footer()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
