"""Logging setup for the reply assistant.

Log records always go to stderr: stdout carries the rendered reply and
mailto links, which users pipe into other tools.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

LOG_FORMATS = ("text", "json")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Google client libraries log every HTTP request at DEBUG/INFO
NOISY_LOGGERS = ("googleapiclient", "google.auth", "google_auth_oauthlib", "urllib3")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message[, exception]."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _resolve_level(level_override: str | None) -> int:
    name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _build_formatter(format_override: str | None) -> logging.Formatter:
    log_format = (format_override or os.getenv("LOG_FORMAT", "text")).lower()
    if log_format == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT)


def configure_logging(
    level_override: str | None = None,
    format_override: str | None = None,
) -> None:
    """Replace root handlers with a single stderr handler.

    Args:
        level_override: Takes precedence over LOG_LEVEL (default INFO).
        format_override: "text" or "json"; takes precedence over LOG_FORMAT.
    """
    level = _resolve_level(level_override)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter(format_override))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
