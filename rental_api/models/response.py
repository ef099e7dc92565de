"""Success response envelope shared by all routers."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope: ``{"success": true, "message"?, "data"?}``."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class MessageResponse(BaseModel):
    """Envelope for endpoints that only report an outcome."""

    success: bool = True
    message: str
