"""Logging setup driven by the ``logging`` config section."""

import logging
import logging.handlers
from typing import Optional

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(settings: LoggingConfig, level: Optional[str] = None) -> logging.Logger:
    """
    Install console and rotating file handlers on the package logger.

    Args:
        settings: Logging section of the configuration
        level: Optional level name overriding settings.level

    Returns:
        The configured ``mailroom_robots`` logger.
    """
    root = logging.getLogger("mailroom_robots")
    root.setLevel(getattr(logging, (level or settings.level).upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if settings.console_enabled:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if settings.file_enabled:
        file_handler = logging.handlers.RotatingFileHandler(
            settings.file_path,
            maxBytes=settings.max_file_size,
            backupCount=settings.backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    # Keep records off the host application's root handlers
    root.propagate = False

    return root
