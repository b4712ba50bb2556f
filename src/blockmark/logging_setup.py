"""Logging configuration for command-line use.

Library code only creates module loggers; handlers are installed here, and
only when an entry point asks for them.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from .settings import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install stderr (and optional rotating file) handlers on the package logger.

    Args:
        level: Level name overriding ``settings.log_level``.
    """
    logger = logging.getLogger("blockmark")
    logger.setLevel((level or settings.log_level).upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if settings.log_path is not None:
        settings.log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_path,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
