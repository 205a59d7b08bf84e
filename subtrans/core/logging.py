"""Logging configuration."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from subtrans.core.config import Settings, get_settings
from subtrans.core.log_filter import SensitiveDataFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "subtrans.log"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure stdout and rotating file logging for the service.

    Every handler gets the redaction filter when enabled, since provider keys
    can surface in SDK error messages. Loggers listed in ``quiet_loggers``
    are raised to WARNING so per-chunk HTTP requests don't flood the log.
    """
    if settings is None:
        settings = get_settings()

    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(
            logs_dir / LOG_FILENAME,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        ),
    ]

    if settings.enable_log_redaction:
        log_filter = SensitiveDataFilter()
        for handler in handlers:
            handler.addFilter(log_filter)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=LOG_FORMAT,
        handlers=handlers,
    )

    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module."""
    return logging.getLogger(name)
