"""HTTP request/response logging middleware."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import parse_qsl, urlencode

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from rental_api.core.logging import env_bool

# Query parameters whose values must never reach the logs
SENSITIVE_QUERY_KEYS = frozenset({"token", "code", "password", "reset_token"})
REDACTED = "***"


def redact_query(query: str) -> str:
    """Mask credential-like query parameter values."""
    if not query:
        return ""
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode(
        [(k, REDACTED if k.lower() in SENSITIVE_QUERY_KEYS else v) for k, v in pairs],
        safe="*",
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("rental_api.request")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code: int | None = response.status_code if response else None
            query = redact_query(request.url.query)

            extra: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "query": query,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent"),
            }
            # Set by the bearer authenticator on protected routes
            account = getattr(request.state, "account", None)
            if account is not None:
                extra["account_id"] = str(account.id)

            log = (
                self.logger.error
                if status_code is None or status_code >= 500
                else self.logger.info
            )
            log(
                "%s %s%s -> %s (%.2fms)",
                request.method,
                request.url.path,
                f"?{query}" if query else "",
                status_code,
                duration_ms,
                extra=extra,
            )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach request logging middleware (disable with LOG_REQUESTS=false)."""
    if not env_bool("LOG_REQUESTS", default=True):
        return
    app.add_middleware(RequestLoggingMiddleware)
