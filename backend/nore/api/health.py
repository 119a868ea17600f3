"""Health check endpoint."""

import time
from fastapi import APIRouter

from nore import __version__
from nore.config import get_settings
from nore.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check with uptime."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=get_settings().ENVIRONMENT,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
