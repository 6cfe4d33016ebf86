"""API response models."""

from pydantic import BaseModel
from typing import Optional, Literal


class ShapeConfigResponse(BaseModel):
    """A supported shape and the fields it requires."""

    shape: str
    label: str
    fields: list[str]


class ErrorResponse(BaseModel):
    """Error body for transport and configuration failures."""

    error: str
    message: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Service health."""

    status: Literal["healthy", "degraded"]
    uptime_seconds: float
    validation_mode: Literal["local", "remote"]
    model_configured: bool
    model: str
