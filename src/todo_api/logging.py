"""Logging setup.

Configures the root logger once at startup. Development gets a plain,
human-readable line format; production gets one JSON object per line so
hosted log collectors can index the fields.
"""

from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from traceback import format_exception

MAX_STACK_CHARS = 4000


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for production logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }

        http_ctx = {
            k: v
            for k, v in {
                "method": getattr(record, "http_method", None),
                "path": getattr(record, "path", None),
                "status": getattr(record, "status_code", None),
            }.items()
            if v is not None
        }
        if http_ctx:
            payload["http"] = http_ctx

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            stack = "".join(format_exception(*record.exc_info))
            payload["error"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "stack": stack[:MAX_STACK_CHARS]
                + ("...(truncated)" if len(stack) > MAX_STACK_CHARS else ""),
            }

        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "plain") -> None:
    """Install handlers and formatters on the root logger.

    Args:
        level: Root log level name (e.g. "DEBUG", "info").
        fmt: "json" for structured output, anything else for plain text.
    """
    level = level.upper()
    formatter_name = "json" if fmt.lower() == "json" else "plain"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,  # keep uvicorn loggers
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": formatter_name,
                }
            },
            "root": {"level": level, "handlers": ["stream"]},
            "loggers": {
                # motor/pymongo are chatty at DEBUG
                "pymongo": {"level": "WARNING"},
            },
        }
    )


__all__ = ["JsonFormatter", "setup_logging"]
