"""Debug log with a plain ``[timestamp] message`` layout."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sheetgeo.common.constants import LOG_FILENAME
from sheetgeo.common.errors import FileSystemError
from sheetgeo.common.fs import ensure_dir
from sheetgeo.common.time_utils import utc_timestamp_iso

LOGGER_NAME = "sheetgeo"


class DebugLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        text = f"[{utc_timestamp_iso()}] {record.getMessage()}"
        data = getattr(record, "data", None)
        if data:
            blob = data if isinstance(data, str) else json.dumps(data, indent=2, ensure_ascii=False)
            text = f"{text}\n{blob}"
        return text


def build_logger(cache_dir: Path, level: str = "INFO") -> logging.Logger:
    """Return the run logger, truncating ``debug-log.txt`` under ``cache_dir``."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    log_path = cache_dir / LOG_FILENAME
    ensure_dir(log_path.parent)
    try:
        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(f"Cannot open log file {log_path}: {exc}") from exc
    file_handler.setFormatter(DebugLogFormatter())
    logger.addHandler(file_handler)

    stream = logging.StreamHandler()
    stream.setFormatter(DebugLogFormatter())
    logger.addHandler(stream)

    log_event(logger, "Debug logging initialized")
    return logger


def close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def log_event(logger: logging.Logger, message: str, *, level: int = logging.INFO, data: Any = None) -> None:
    logger.log(level, message, extra={"data": data})
