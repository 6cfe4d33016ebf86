"""Geometry Validator — deterministic validation layer for shape measurements.

Usage:
    from app.validators import geometry_validator, ShapeKind

    result = geometry_validator.validate(ShapeKind.RIGHT_TRIANGLE, {"a": "3", "b": "4", "c": "5"})
    if result.is_valid:
        print(result.keliling)
"""

from app.validators.engine import GeometryValidator, geometry_validator
from app.validators.models import (
    EPSILON,
    SUCCESS_PHRASE,
    ShapeConfig,
    ShapeKind,
    ValidationResult,
)
from app.validators.registry import SHAPE_CONFIGS, SHAPE_RULES, get_rule, resolve_shape

__all__ = [
    "GeometryValidator",
    "geometry_validator",
    "EPSILON",
    "SUCCESS_PHRASE",
    "ShapeConfig",
    "ShapeKind",
    "ValidationResult",
    "SHAPE_CONFIGS",
    "SHAPE_RULES",
    "get_rule",
    "resolve_shape",
]
