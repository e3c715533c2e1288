"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    name: str = Field(..., description="Error class name, e.g. ScheduleConflictError.")
    message: str
    error_code: int
    status_code: int


# OpenAPI documentation for the domain error body, shared by every router.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 403, 404, 409, 500)
}
