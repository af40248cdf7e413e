from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .constants import ENV_LOG_LEVEL, LOGGER_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level_name: str | None = None, log_dir: str | Path | None = None) -> logging.Logger:
    resolved = (level_name or os.getenv(ENV_LOG_LEVEL, "INFO")).upper()
    level = getattr(logging, resolved, logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    has_stream = any(
        isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
        for handler in logger.handlers
    )
    if not has_stream:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_dir is None:
        return logger

    log_path = Path(log_dir) / "ebr.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    has_daily_file = any(
        isinstance(handler, TimedRotatingFileHandler) and getattr(handler, "baseFilename", "") == str(log_path.resolve())
        for handler in logger.handlers
    )
    if not has_daily_file:
        file_handler = TimedRotatingFileHandler(
            filename=log_path,
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
