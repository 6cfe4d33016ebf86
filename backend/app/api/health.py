"""Health check endpoint."""

import time
from fastapi import APIRouter

from app.config import get_settings
from app.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Service health with strategy and model configuration."""
    settings = get_settings()

    # Only the remote strategy depends on the key; local mode never needs it
    degraded = settings.VALIDATION_MODE == "remote" and not settings.has_model_credential
    status = "degraded" if degraded else "healthy"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        validation_mode=settings.VALIDATION_MODE,
        model_configured=settings.has_model_credential,
        model=settings.VALIDATOR_MODEL,
    )
