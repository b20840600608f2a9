"""Logging setup for the ``catalog_rag`` logger tree."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "catalog_rag"
TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s | %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JSONExceptionFormatter(logging.Formatter):
    """One JSON object per record.

    Exceptions from the Catalog RAG hierarchy also contribute their error
    code and context. Extra keys passed as ``extra={"fields": {...}}`` are
    merged at the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.filename,
                "function": record.funcName,
                "line": record.lineno,
            },
        }
        entry.update(getattr(record, "fields", None) or {})

        if record.exc_info and record.exc_info[0] is not None:
            exc = record.exc_info[1]
            details: dict[str, Any] = {
                "type": record.exc_info[0].__name__,
                "message": str(exc) if exc else None,
                "traceback": self.formatException(record.exc_info),
            }
            if getattr(exc, "error_code", None):
                details["code"] = exc.error_code
                details["context"] = getattr(exc, "extra_context", {})
            entry["exception"] = details

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Attach fresh console (and optional file) handlers to the package logger.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_file: Also write to this file, creating parent directories.
        json_format: Emit JSON lines instead of the pipe-separated text format.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = (
        JSONExceptionFormatter() if json_format else logging.Formatter(TEXT_FORMAT, TEXT_DATEFMT)
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """``catalog_rag`` or its child ``catalog_rag.<name>``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME)
