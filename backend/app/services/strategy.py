"""Validation strategies — one interface, local or remote implementation.

Callers ask get_validation_strategy() once and never branch on the mode
themselves.
"""

import asyncio
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Mapping, Optional, Union

from app.config import Settings, get_settings
from app.validators.engine import GeometryValidator, geometry_validator
from app.validators.models import ShapeKind, ValidationResult


class ValidationStrategy(ABC):
    """Shared contract: validate(shape, inputs) → ValidationResult."""

    name: str

    @abstractmethod
    async def validate(self, shape: Union[ShapeKind, str], inputs: Mapping[str, Any]) -> ValidationResult:
        ...


class LocalValidationStrategy(ValidationStrategy):
    """Runs the deterministic GeometryValidator inside the async contract."""

    name = "local"

    def __init__(self, validator: Optional[GeometryValidator] = None, delay_seconds: float = 0.0):
        self.validator = validator or geometry_validator
        self.delay_seconds = delay_seconds

    async def validate(self, shape: Union[ShapeKind, str], inputs: Mapping[str, Any]) -> ValidationResult:
        # Pacing only, the result does not depend on it
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return self.validator.validate(shape, inputs)


def create_validation_strategy(settings: Settings) -> ValidationStrategy:
    """Build the strategy named by VALIDATION_MODE."""
    if settings.VALIDATION_MODE == "remote":
        from app.services.remote_validation import RemoteValidationClient

        return RemoteValidationClient(settings=settings)
    return LocalValidationStrategy(delay_seconds=settings.LOCAL_VALIDATION_DELAY_SECONDS)


@lru_cache
def get_validation_strategy() -> ValidationStrategy:
    """Process-wide strategy, resolved once from settings."""
    return create_validation_strategy(get_settings())
