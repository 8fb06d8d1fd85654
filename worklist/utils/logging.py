"""
Logging setup for the worklist CLI and library code.

Every module logs through `get_logger(__name__)`. Fetch outcomes are logged by
the controller with the profiler's measurements passed as `extra=` fields;
the JSON formatter lifts those fields to top-level keys so a log collector can
index `request`, `kind`, `rows` and `duration_seconds` directly.

The HTTP client libraries log one INFO line per request. They are held at
WARNING unless the worklist itself runs at DEBUG.

Usage:
    from worklist.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.info("[FETCH COMMITTED]", extra={"request": 3, "rows": 10})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"
HTTP_LOGGERS = ("httpx", "httpcore")

# Attributes every LogRecord carries; anything else was passed via `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }
    # Older call sites pass a single dict as `extra={"extra": {...}}`.
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        fields.update(nested)
    return fields


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as one JSON object per line."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update(_record_fields(record))
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def _dict_config(level: str, formatter_name: str) -> Dict[str, Any]:
    http_level = "DEBUG" if level.upper() == "DEBUG" else "WARNING"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": CONSOLE_DATEFMT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": formatter_name,
                "level": level,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {name: {"level": http_level} for name in HTTP_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Configure root logging for the worklist.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Emit one JSON object per record instead of the console format.
    force : bool
        Replace an existing configuration. With False, a root logger that
        already has handlers (an embedding application) is left untouched.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_dict_config(level, "json" if json_logs else "console"))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
