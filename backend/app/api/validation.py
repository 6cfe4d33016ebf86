"""Validation API — model-backed endpoint for delegating clients, local endpoint, shape list."""

from fastapi import APIRouter, Depends, HTTPException

import structlog

from app.config import get_settings
from app.models.requests import ValidateShapeRequest
from app.models.responses import ErrorResponse, ShapeConfigResponse
from app.services.remote_validation import RemoteValidationClient
from app.validators import SHAPE_CONFIGS, ValidationResult, geometry_validator

logger = structlog.get_logger()

router = APIRouter()


def get_model_validator() -> RemoteValidationClient:
    """Server-side model client. Requires the server's own credential."""
    settings = get_settings()
    if not settings.has_model_credential:
        # Without a key the client would delegate back to this very endpoint
        raise HTTPException(
            status_code=503,
            detail={
                "error": "model_not_configured",
                "message": "Layanan AI belum dikonfigurasi di server.",
            },
        )
    return RemoteValidationClient(settings=settings)


@router.get("/shapes", response_model=list[ShapeConfigResponse])
async def list_shapes():
    """List supported shapes with their display labels and required fields."""
    return [
        ShapeConfigResponse(shape=config.kind.value, label=config.label, fields=list(config.fields))
        for config in SHAPE_CONFIGS.values()
    ]


@router.post(
    "/validate",
    response_model=ValidationResult,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def validate_with_model(
    request_body: ValidateShapeRequest,
    validator: RemoteValidationClient = Depends(get_model_validator),
):
    """Validate measurements with the model. This is the delegated-mode target."""
    result = await validator.validate(request_body.shape, request_body.inputs)

    logger.info(
        "model_validation_served",
        shape=request_body.shape,
        shape_label=request_body.shape_label,
        is_valid=result.is_valid,
    )
    return result


@router.post("/validate/local", response_model=ValidationResult)
async def validate_locally(request_body: ValidateShapeRequest):
    """Validate measurements with the deterministic rules."""
    return geometry_validator.validate(request_body.shape, request_body.inputs)
