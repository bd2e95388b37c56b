# app/utils/logger.py
"""
Centralised logging configuration for the entire application.
Logs to console and to a rotating file in /logs/ named by settings.LOG_FILE.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FORMAT = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_configured = False


def build_file_handler(filename: str = None, log_dir: str = LOG_DIR) -> RotatingFileHandler:
    """Rotating file handler, keeps the last 10 × 5MB files."""
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        filename=os.path.join(log_dir, filename or settings.LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(LOG_FORMAT)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    console = logging.StreamHandler()
    console.setLevel(LOG_LEVEL)
    console.setFormatter(LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    root.addHandler(console)

    if not settings.LOG_FILE:
        return
    try:
        root.addHandler(build_file_handler())
    except OSError as e:
        root.warning(f"File logging disabled, cannot write {settings.LOG_FILE} to {LOG_DIR}: {e}")


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
