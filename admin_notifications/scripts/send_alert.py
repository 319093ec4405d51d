#!/usr/bin/env python3
"""Send a system alert notification to the admins.

Usage:
    python -m admin_notifications.scripts.send_alert --title "Disk Low" --message "90% full"
    python -m admin_notifications.scripts.send_alert -t "Backup done" -m "Nightly backup OK" -s info
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from admin_notifications.config import NotificationSettings
from admin_notifications.core.logger import get_logger, setup_logging
from admin_notifications.dispatcher import create_dispatcher
from admin_notifications.models.events import AlertSeverity, SystemAlertEvent

logger = get_logger(__name__)


async def send_alert(event: SystemAlertEvent, settings: NotificationSettings) -> int:
    """Dispatch the alert and report whether email delivery was possible."""
    dispatcher = create_dispatcher(settings)
    try:
        if not dispatcher.transport.is_configured:
            logger.warning("SMTP is not configured; the alert will only be logged")
        await dispatcher.notify_system_alert(event)
    finally:
        close = getattr(dispatcher.directory, "close", None)
        if close is not None:
            close()

    return 0 if dispatcher.transport.is_configured else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Email a system alert to admins.")
    parser.add_argument("--title", "-t", required=True, help="Alert title")
    parser.add_argument("--message", "-m", required=True, help="Alert message")
    parser.add_argument(
        "--severity",
        "-s",
        choices=[s.value for s in AlertSeverity],
        default=AlertSeverity.INFO.value,
        help="Alert severity (default: info)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    settings = NotificationSettings()
    setup_logging(
        log_level="DEBUG" if args.verbose else settings.LOG_LEVEL,
        console_level="DEBUG" if args.verbose else settings.LOG_LEVEL,
        enable_file=settings.LOG_TO_FILE,
        log_dir=Path(settings.LOG_DIR),
        settings=settings if args.verbose else None,
    )

    event = SystemAlertEvent(
        title=args.title,
        message=args.message,
        severity=AlertSeverity(args.severity),
    )
    return asyncio.run(send_alert(event, settings))


if __name__ == "__main__":
    sys.exit(main())
