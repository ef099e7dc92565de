"""Logging setup for the rental API.

Everything goes to stdout, as text or JSON lines. Driven by environment
variables rather than Settings because it runs before the app is built.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from typing import Any


def env_bool(name: str, *, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


# Attached via `extra=` by the request middleware and exception handlers
_EXTRA_KEYS = (
    "method",
    "path",
    "query",
    "status_code",
    "duration_ms",
    "client_ip",
    "user_agent",
    "error_type",
    "account_id",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying request and account extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key in _EXTRA_KEYS:
            if key in record.__dict__:
                payload[key] = record.__dict__[key]

        return json.dumps(payload, ensure_ascii=False)


def _library_loggers(level: str, *, uvicorn_access: bool) -> dict[str, Any]:
    """Per-library logger levels; everything propagates to the root handler."""
    levels = {
        "uvicorn": level,
        "uvicorn.error": level,
        # Our middleware already logs each request
        "uvicorn.access": "INFO" if uvicorn_access else "WARNING",
        "urllib3": os.getenv("HTTP_CLIENT_LOG_LEVEL", "WARNING"),
        "sqlalchemy.engine": os.getenv("SQL_LOG_LEVEL", "WARNING"),
        "sqladmin": "WARNING",
    }
    return {
        name: {"level": lvl.upper(), "propagate": True} for name, lvl in levels.items()
    }


def configure_logging() -> None:
    """Configure stdlib logging for the app, uvicorn and noisy libraries.

    Env vars:
    - LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    - LOG_JSON: emit JSON lines instead of text (default: false)
    - LOG_REQUESTS: per-request access log from our middleware (default: true)
    - LOG_UVICORN_ACCESS: uvicorn's own access log; defaults to the
      opposite of LOG_REQUESTS so requests are not logged twice
    - SQL_LOG_LEVEL, HTTP_CLIENT_LOG_LEVEL: library overrides (default: WARNING)
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_requests = env_bool("LOG_REQUESTS", default=True)
    uvicorn_access = env_bool("LOG_UVICORN_ACCESS", default=not log_requests)
    formatter = "json" if env_bool("LOG_JSON", default=False) else "text"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                },
                "json": {"()": "rental_api.core.logging.JsonFormatter"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": formatter,
                    "stream": sys.stdout,
                }
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": _library_loggers(level, uvicorn_access=uvicorn_access),
        }
    )
