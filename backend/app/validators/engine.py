"""Geometry Validator — deterministic validation of shape measurements.

This is the local strategy's core. It parses raw inputs, applies the
positivity gate, runs the registered shape rule, and assembles the result.

Usage:
    validator = GeometryValidator()
    result = validator.validate(ShapeKind.SQUARE, {"sisi1": "5", ...})
    if not result.is_valid:
        # result.explanation says why, result.keliling == 0
"""

import math
import time
from typing import Any, Mapping, Optional, Union

import structlog

from app.validators.base import BaseShapeRule
from app.validators.models import (
    INVALID_INPUT_MESSAGE,
    OUT_OF_RANGE_MESSAGE,
    UNKNOWN_SHAPE_MESSAGE,
    ShapeKind,
    ValidationResult,
)
from app.validators.registry import SHAPE_RULES, resolve_shape

logger = structlog.get_logger()

RawInputs = Mapping[str, Any]


def parse_measurement(value: Any) -> Optional[float]:
    """Parse one raw field into a float, None if not a finite number.

    Accepts numbers and numeric strings (surrounding whitespace allowed).
    Booleans, blanks, digit separators, NaN and infinities are rejected.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        # float() also takes digit separators like "1_000"; user input does not
        if not value or "_" in value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_inputs(inputs: RawInputs, fields) -> Optional[dict[str, float]]:
    """Parse every field, None if any is missing, non-numeric or not positive."""
    values: dict[str, float] = {}
    for field in fields:
        number = parse_measurement(inputs.get(field))
        if number is None or number <= 0:
            return None
        values[field] = number
    return values


class GeometryValidator:
    """Validates measurements against the registered shape rules.

    Design principles:
        - Deterministic: same input → same output
        - Never raises: every failure is an isValid=false result
        - Extensible: add shape rules without modifying the validator
    """

    def __init__(self, rules: Optional[dict[ShapeKind, BaseShapeRule]] = None):
        self.rules = rules if rules is not None else dict(SHAPE_RULES)

    def validate(self, shape: Union[ShapeKind, str], inputs: RawInputs) -> ValidationResult:
        """Validate raw inputs for the given shape.

        Args:
            shape: ShapeKind or its wire token
            inputs: Field name → value as typed by the user

        Returns:
            ValidationResult; keliling is 0 whenever is_valid is False
        """
        start_time = time.perf_counter()

        kind = resolve_shape(shape)
        rule = self.rules.get(kind) if kind else None

        # Unknown shapes still go through the positivity gate on whatever was supplied
        fields = rule.fields if rule else tuple(inputs)
        values = parse_inputs(inputs, fields)

        if values is None:
            result = ValidationResult.invalid(INVALID_INPUT_MESSAGE)
        elif rule is None:
            result = ValidationResult.invalid(UNKNOWN_SHAPE_MESSAGE)
        else:
            failure = rule.check(values)
            if failure is None:
                keliling = rule.perimeter(values)
                if math.isfinite(keliling):
                    result = ValidationResult.valid(rule.success_message, keliling)
                else:
                    result = ValidationResult.invalid(OUT_OF_RANGE_MESSAGE)
            else:
                result = ValidationResult.invalid(failure)

        logger.debug(
            "geometry_validation_complete",
            shape=kind.value if kind else str(shape),
            is_valid=result.is_valid,
            keliling=result.keliling,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )

        return result


# Module-level singleton
geometry_validator = GeometryValidator()
