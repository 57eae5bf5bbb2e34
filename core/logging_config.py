# core/logging_config.py
"""Global logging setup (console + rotating file)."""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the root logger once per process.

    Args:
        level: Level name (defaults to settings.LOG_LEVEL)
        log_file: Rotating log file path (defaults to settings.LOG_FILE)

    Returns:
        The root logger
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    handlers = [
        logging.StreamHandler(),  # Console
        RotatingFileHandler(log_file or settings.LOG_FILE, maxBytes=5*1024*1024, backupCount=3)  # 5MB file
    ]

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger()
