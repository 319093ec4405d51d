"""Centralized logging configuration for the admin notification service.

Provides the logger factory used by every module, plus a one-shot
``setup_logging`` for processes (scripts, host applications) that want
console and rotating file output.

Features:
    - Console handler on stdout
    - Optional rotating file handlers (all levels + errors only)
    - Per-module log levels
    - Configuration summary with the SMTP secret masked
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from admin_notifications.config.settings import NotificationSettings

_ROOT_LOGGER: logging.Logger | None = None
_LOG_DIR = Path("./logs")
_LOG_FORMAT_DETAILED = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)
_LOG_FORMAT_SIMPLE = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_MODULE_LEVELS = {
    "admin_notifications.dispatcher": logging.DEBUG,
    "admin_notifications.clients": logging.DEBUG,
    "admin_notifications.directory": logging.DEBUG,
    "admin_notifications.templates": logging.INFO,
    "admin_notifications.config": logging.INFO,
}

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
    "blue": "\033[34m",
}


def mask_secret(secret: str | None) -> str:
    """Mask a secret for display, showing only first and last char.

    Args:
        secret: Secret to mask.

    Returns:
        Masked string, or "(not set)" when empty.
    """
    if not secret:
        return "(not set)"
    if len(secret) <= 2:
        return "***"
    return f"{secret[0]}{'*' * (len(secret) - 2)}{secret[-1]}"


def print_config_summary(settings: "NotificationSettings") -> None:
    """Print a formatted configuration summary organized by categories.

    Args:
        settings: Loaded NotificationSettings.
    """
    c = COLORS

    def _line(label: str, value: str, color: str = "cyan") -> None:
        print(f"  {c['dim']}│{c['reset']} {label:<22} {c[color]}{value}{c['reset']}")

    def _header(title: str, color: str) -> None:
        print(f"\n  {c[color]}▶ {title}{c['reset']}")
        print(f"  {c['dim']}├{'─' * 50}{c['reset']}")

    def _unset(value: object) -> str:
        return "yellow" if value in (None, "") else "cyan"

    _header("SMTP Configuration", "magenta")
    _line("Host", settings.SMTP_HOST or "(not set)", _unset(settings.SMTP_HOST))
    _line("Port", str(settings.SMTP_PORT or "(not set)"), _unset(settings.SMTP_PORT))
    _line("User", settings.SMTP_USER or "(not set)", _unset(settings.SMTP_USER))
    _line("Password", mask_secret(settings.SMTP_PASS), _unset(settings.SMTP_PASS))
    _line("From", settings.default_from_address())
    _line("Implicit TLS", str(settings.SMTP_PORT == 465).lower())
    _line("Timeout", f"{settings.SMTP_TIMEOUT}s")

    _header("Directory Configuration", "blue")
    _line("Database", settings.MONGODB_DATABASE)
    _line("Collection", settings.USERS_COLLECTION)

    _header("Templates", "green")
    _line("Client URL", settings.CLIENT_URL)
    _line("Company", settings.COMPANY_NAME)

    _header("Logging Configuration", "yellow")
    _line("Level", settings.LOG_LEVEL, "green")
    _line("Log to File", str(settings.LOG_TO_FILE).lower())
    _line("Directory", settings.LOG_DIR)
    print()


def setup_logging(
    log_dir: Path | None = None,
    log_level: str = "INFO",
    file_level: str = "DEBUG",
    console_level: str = "INFO",
    enable_file: bool = False,
    settings: Optional["NotificationSettings"] = None,
) -> None:
    """Configure root logger with console and optional file handlers.

    Should be called once at process startup. Library consumers that
    already configure logging can skip it; module loggers propagate.

    Args:
        log_dir: Directory for log files.
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_level: File handler level.
        console_level: Console handler level.
        enable_file: Whether to write logs to files.
        settings: Optional settings for printing a configuration summary.
    """
    global _ROOT_LOGGER, _LOG_DIR

    if log_dir:
        _LOG_DIR = Path(log_dir)
    elif settings is not None:
        _LOG_DIR = Path(settings.LOG_DIR)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(
        logging.Formatter(_LOG_FORMAT_SIMPLE, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if enable_file:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)

        # 10MB per file, keep 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "admin_notifications.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, file_level.upper(), logging.DEBUG))
        file_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "admin_notifications.error.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(error_handler)

    for module_name, level in _MODULE_LEVELS.items():
        logging.getLogger(module_name).setLevel(level)

    _ROOT_LOGGER = root_logger

    if settings:
        print_config_summary(settings)


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ of calling module).
        log_level: Optional override for the logger level.

    Returns:
        Logger instance.

    Example:
        from admin_notifications.core.logger import get_logger

        logger = get_logger(__name__)
        logger.info("Resolving recipients")
    """
    logger = logging.getLogger(name)

    if log_level:
        logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return logger


def get_logs_directory() -> Path:
    """Get the logs directory path."""
    return _LOG_DIR


def log_context(
    operation: str,
    recipient: str | None = None,
    **kwargs,
) -> str:
    """Format a log context string with metadata.

    Args:
        operation: Operation name (e.g., "notify_new_lead", "send").
        recipient: Recipient address(es) if applicable.
        **kwargs: Additional context key-value pairs.

    Returns:
        Formatted context string for logging.

    Example:
        msg = log_context("send", recipient="a@x.com", subject="New Lead")
        # send | →a@x.com (subject=New Lead)
    """
    context_parts = [operation]

    if recipient:
        context_parts.append(f"→{recipient}")

    context = " | ".join(context_parts)

    if kwargs:
        extra = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        context = f"{context} ({extra})"

    return context
