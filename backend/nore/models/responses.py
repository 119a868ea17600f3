"""API response models."""

from pydantic import BaseModel
from typing import Literal


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str
    environment: str
    uptime_seconds: float


class ErrorResponse(BaseModel):
    """Body of 5xx responses."""

    error: str
    message: str
