"""
App-wide constants for route configuration.

This module provides a single source of truth for route prefixes, tags,
and common response definitions for API routes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from rental_api.models.error import ErrorResponse


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    AUTH = RouteConfig(prefix="/auth", tag="auth")
    PROFILE = RouteConfig(prefix="/profile", tag="profile")
    VEHICLE = RouteConfig(prefix="/vehicles", tag="vehicles")
    HEALTH = RouteConfig(prefix="/health", tag="health")


def _error(description: str) -> dict[str, Any]:
    return {"description": description, "model": ErrorResponse}


# Common response definitions for reuse across routers
# Use these when configuring APIRouter or individual endpoints
class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    UNAUTHORIZED: dict[int, dict[str, Any]] = {
        401: _error("Not authenticated or invalid credentials")
    }
    FORBIDDEN: dict[int, dict[str, Any]] = {
        403: _error("Unverified email or insufficient role")
    }
    NOT_FOUND: dict[int, dict[str, Any]] = {404: _error("Resource not found")}
    CONFLICT: dict[int, dict[str, Any]] = {409: _error("Resource already exists")}
    BAD_REQUEST: dict[int, dict[str, Any]] = {400: _error("Invalid request data")}


# HTML Templates Directory
EmailTemplatesDir = Path(__file__).parent.parent / "templates" / "emails"
CompiledEmailTemplatesDir = EmailTemplatesDir / "compiled"

# Jinja2 environment for source templates (used by compile script)
JinjaEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(EmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml", "j2"]),
)

# Jinja2 environment for compiled templates (used at runtime)
JinjaCompiledEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(CompiledEmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml"]),
)
