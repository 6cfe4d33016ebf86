"""Validation models — shape kinds, shape metadata, and the validation result.

The result contract is shared by the deterministic validator and the
model-backed client: same fields, same wire names, same invalid → keliling=0 rule.
"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# Literal marker every successful explanation must contain
SUCCESS_PHRASE = "Mantap, Anda dapat proyek!"

INVALID_INPUT_MESSAGE = "Semua ukuran harus berupa angka positif."
UNKNOWN_SHAPE_MESSAGE = "Bangun tidak dikenali."
OUT_OF_RANGE_MESSAGE = "Ukuran terlalu besar untuk dihitung."

# Two measurements are equal when their absolute difference is below this
EPSILON = 0.01


class ShapeKind(str, Enum):
    """Supported shapes. Values are the wire tokens."""

    SQUARE = "square"
    RECTANGLE = "rectangle"
    RIGHT_TRIANGLE = "right_triangle"
    RIGHT_TRAPEZOID = "right_trapezoid"


class ShapeConfig(BaseModel):
    """Static per-shape metadata: display label and required fields in order."""

    model_config = ConfigDict(frozen=True)

    kind: ShapeKind
    label: str
    fields: tuple[str, ...]


class ValidationResult(BaseModel):
    """Outcome of a single validation request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(
        alias="isValid",
        description="Apakah ukurannya membentuk bangun yang valid.",
    )
    explanation: str = Field(
        min_length=1,
        description="Penjelasan singkat tentang hasil validasi dalam Bahasa Indonesia.",
    )
    keliling: float = Field(
        default=0.0,
        description=(
            "Keliling dari bangun tersebut jika ukurannya valid. "
            "Jika tidak valid, nilainya harus 0."
        ),
    )

    @field_validator("keliling")
    @classmethod
    def _zero_perimeter_when_invalid(cls, keliling: float, info: ValidationInfo) -> float:
        # is_valid is declared first, so info.data holds its coerced value
        if info.data.get("is_valid") is False:
            return 0.0
        if not math.isfinite(keliling):
            raise ValueError("keliling must be a finite number")
        return keliling

    @classmethod
    def valid(cls, explanation: str, keliling: float) -> "ValidationResult":
        return cls(is_valid=True, explanation=explanation, keliling=round(keliling, 2))

    @classmethod
    def invalid(cls, explanation: str) -> "ValidationResult":
        return cls(is_valid=False, explanation=explanation, keliling=0.0)

    def to_wire(self) -> dict:
        """Serialize with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True)
