"""Common response schemas."""
from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    """Body returned for any failed request."""
    error: str
    request_id: str
