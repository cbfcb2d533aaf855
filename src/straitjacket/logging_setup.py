"""JSON logging for the ``straitjacket`` logger tree."""
from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

ROOT_LOGGER = "straitjacket"

# Extras attached by the numeric helpers; rendered as top-level JSON keys.
NUMERIC_FIELDS = ("operation", "dtype", "policy")

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record: level, logger, message, numeric context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in NUMERIC_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        extras = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if not key.startswith("_") and key not in _RESERVED and key not in NUMERIC_FIELDS
        }
        if extras:
            payload["context"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except TypeError:
        return repr(value)
    return value


def configure_structured_logging(*, level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    """
    Send ``straitjacket.*`` records to `stream` (stderr by default) as JSON.

    Only the library's own logger is touched; the root logger and other
    libraries keep their configuration. The level falls back to
    STRAITJACKET_LOG_LEVEL, then WARNING.
    """
    desired_level = str(level or os.getenv("STRAITJACKET_LOG_LEVEL", "WARNING")).upper()
    numeric_level = getattr(logging, desired_level, logging.WARNING)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JsonLogFormatter}},
            "handlers": {
                "straitjacket": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": stream if stream is not None else "ext://sys.stderr",
                }
            },
            "loggers": {
                ROOT_LOGGER: {
                    "level": numeric_level,
                    "handlers": ["straitjacket"],
                    "propagate": False,
                }
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``straitjacket`` namespace."""

    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
