"""Logging helpers."""
from __future__ import annotations

import logging
from logging import handlers
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(log_path: Path, level: Union[int, str] = logging.INFO) -> logging.Handler:
    """Send all board logging to a rotating file and return its handler."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = handlers.RotatingFileHandler(
        log_path, maxBytes=512000, backupCount=3, encoding="utf-8"
    )
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)
    return handler
