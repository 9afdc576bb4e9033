"""
Logging setup shared by the API process and the test-suite.

``setup_logging`` attaches a console handler and, when a log file is
configured, a size-rotated file handler to the root logger.  Records
look like ``2024-03-15 10:00:00 [INFO] travel_agency_api...: message``.
Calling it again is a no-op, so ``create_app`` can run repeatedly.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request access lines from uvicorn duplicate what the services log.
DEFAULT_LOGGER_LEVELS: Mapping[str, str] = {"uvicorn.access": "WARNING"}


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    logger_levels: Mapping[str, str] = DEFAULT_LOGGER_LEVELS,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Configure and return the root logger.

    Parameters
    ----------
    level : str
        Root level name, case insensitive.  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        File to write to in addition to the console.  Rotated after
        ``max_bytes`` with ``backup_count`` old files kept.
    logger_levels : Mapping[str, str]
        Level overrides for individual named loggers.
    """
    root = logging.getLogger()
    if root.handlers:
        return root

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name, name_level in logger_levels.items():
        logging.getLogger(name).setLevel(getattr(logging, name_level.upper(), logging.WARNING))
    return root
