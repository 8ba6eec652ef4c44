"""
Application logging.

``setup_logging`` is called once when the API module is imported. It
replaces whatever handlers the root logger had with a console handler and,
when ``ENABLE_FILE_LOGGING`` is set, a size-rotated ``classifieds.log``
under ``LOG_FILE_DIR``. Per-package levels keep request handlers and
services verbose while the database driver and HTTP client stay quiet.

Formats:
- simple: level, logger and message
- detailed: adds time, source location and function
- json: one JSON object per line for log shippers
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from classifieds.server.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.enable_file_logging

LOG_FILE_NAME = "classifieds.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"source": "%(filename)s:%(lineno)d", "function": "%(funcName)s", '
    '"message": "%(message)s"}'
)

_FORMATS = {
    "simple": SIMPLE_FORMAT,
    "detailed": DETAILED_FORMAT,
    "json": JSON_FORMAT,
}

MODULE_LOG_LEVELS = {
    "classifieds": "INFO",
    "classifieds.core.database": "INFO",
    "classifieds.server": "INFO",
    "classifieds.server.api": "DEBUG",
    "classifieds.server.services": "DEBUG",
    # drivers and clients
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "asyncpg": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _file_handler(directory: str, formatter: logging.Formatter) -> logging.Handler:
    log_dir = Path(directory)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Install the marketplace log handlers on the root logger.

    Args:
        log_level: Console level, defaults to ``LOG_LEVEL`` (case-insensitive)
        log_format: ``simple``, ``detailed`` or ``json``; anything else falls back to ``detailed``
        enable_file: Allow the rotating file handler when ``ENABLE_FILE_LOGGING`` is on
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(_FORMATS.get(fmt, DETAILED_FORMAT), datefmt=DATE_FORMAT)

    # handlers filter, the root logger lets everything through
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    write_file = enable_file and ENABLE_FILE_LOGGING
    if write_file:
        root_logger.addHandler(_file_handler(LOG_FILE_DIR, formatter))

    for package, package_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(package).setLevel(package_level)

    root_logger.info(f"Logging ready: level={level}, format={fmt}, file={write_file}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a marketplace module, usually called with ``__name__``."""
    return logging.getLogger(name)
