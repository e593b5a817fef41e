"""
Generic response envelope.
Every endpoint answers {"success": ..., "message": ..., "data": ...}; errors add
"errors" and are produced by the exception handlers.
"""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Success envelope wrapping an endpoint-specific data payload."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class MessageResponse(BaseModel):
    """Envelope for endpoints that return no data (deletes, password change)."""

    success: bool = True
    message: str
