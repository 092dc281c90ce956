# app/logging_config.py
from __future__ import annotations

import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

from app.config import LOG_BACKUP_DAYS, LOG_LEVEL, LOG_PATH

LOG_FORMAT = "%(asctime)sZ %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def configure_logging(
    level: str = LOG_LEVEL,
    log_path: str = LOG_PATH,
    backup_days: int = LOG_BACKUP_DAYS,
) -> logging.Logger:
    """
    Configure the "app" logger tree once.
    Always logs to stderr; also writes a daily-rotated file when log_path is set.
    """
    global _configured

    logger = logging.getLogger("app")
    if _configured:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    formatter.converter = time.gmtime

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_path:
        directory = os.path.dirname(log_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = TimedRotatingFileHandler(
            log_path,
            when="D",
            interval=1,
            backupCount=backup_days,
            encoding="utf-8",
            utc=True,
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level.upper())
    logger.propagate = False
    _configured = True

    logger.info("logger configured")
    return logger
