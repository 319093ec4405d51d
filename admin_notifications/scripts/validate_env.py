"""Validate that the SMTP environment variables needed for email are set.

Reads the same sources as the service (environment and .env file) and lists
the required variables that are missing. Without them the service runs with
email notifications disabled.

Usage:
    python -m admin_notifications.scripts.validate_env
"""

import sys

from admin_notifications.config import NotificationSettings


def validate_env(settings: NotificationSettings | None = None) -> tuple[bool, list[str]]:
    """Check that every required SMTP variable is present.

    Returns:
        Tuple of (is_valid, missing_vars).
    """
    settings = settings or NotificationSettings()
    missing = settings.missing_smtp_settings()
    return len(missing) == 0, missing


def main() -> int:
    """Main entry point for validation script.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    is_valid, missing_vars = validate_env()

    if is_valid:
        print("✅ SMTP configuration complete - email notifications enabled")
        return 0

    print("❌ Missing required SMTP variables (email notifications disabled):")
    for var in missing_vars:
        print(f"   - {var}")
    print("\n📝 Set them in the environment or in a .env file")
    return 1


if __name__ == "__main__":
    sys.exit(main())
