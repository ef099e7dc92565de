"""Error response schemas for consistent API error formatting."""

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single invalid input field."""

    field: str
    message: str


class ErrorBody(BaseModel):
    type: str
    message: str
    status_code: int
    errors: list[FieldError] | None = None


class ErrorResponse(BaseModel):
    """Standard error response schema.

    All API errors return this format for consistency.
    """

    success: bool = False
    error: ErrorBody
    stack: str | None = None
