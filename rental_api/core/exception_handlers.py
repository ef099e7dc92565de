"""Global exception handlers for consistent error responses.

This module registers exception handlers that convert all exceptions
to a unified JSON envelope:

    {"success": false, "error": {"type", "message", "status_code", "errors"?}}
"""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rental_api.core.exceptions import AppException, ValidationError
from rental_api.core.settings import get_settings

logger = logging.getLogger("rental_api.exception")


def _error_content(
    error_type: str,
    message: str,
    status_code: int,
    errors: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {
        "type": error_type,
        "message": message,
        "status_code": status_code,
    }
    if errors:
        error["errors"] = errors
    return {"success": False, "error": error}


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses."""
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": exc.status_code,
        "error_type": exc.error_type,
    }
    if exc.status_code >= 500:
        logger.error("AppException: %s - %s", exc.error_type, exc.message, extra=extra)
    else:
        logger.info("AppException: %s - %s", exc.error_type, exc.message, extra=extra)

    errors = exc.errors if isinstance(exc, ValidationError) else None
    content = _error_content(exc.error_type, exc.message, exc.status_code, errors)
    content.update(exc.extra_content())
    return JSONResponse(status_code=exc.status_code, content=content)


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTPException (e.g. unknown routes, wrong methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content("http_error", str(exc.detail), exc.status_code),
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part not in ("body", "query", "path"))


def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with unified format."""
    errors = []
    for error in exc.errors():
        field = _field_name(tuple(error["loc"])) or "unknown"
        errors.append({"field": field, "message": error["msg"]})

    return JSONResponse(
        status_code=400,
        content=_error_content("validation_error", "Validation failed", 400, errors),
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors."""
    logger.error(
        "Unhandled exception: %s %s - %s",
        request.method,
        request.url.path,
        exc,
        extra={"method": request.method, "path": request.url.path, "status_code": 500},
        exc_info=True,
    )
    content = _error_content("internal_error", "Internal Server Error", 500)
    if get_settings().is_development:
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
