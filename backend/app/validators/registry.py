"""Shape rule registry — the single source of per-shape metadata.

Both the deterministic validator and the model prompt read from here,
so the rule set cannot drift between the two strategies.
"""

from typing import Optional, Union

from app.validators.base import BaseShapeRule
from app.validators.models import ShapeConfig, ShapeKind
from app.validators.rectangle_validator import RectangleRule
from app.validators.right_trapezoid_validator import RightTrapezoidRule
from app.validators.right_triangle_validator import RightTriangleRule
from app.validators.square_validator import SquareRule

SHAPE_RULES: dict[ShapeKind, BaseShapeRule] = {
    rule.kind: rule
    for rule in (SquareRule(), RectangleRule(), RightTriangleRule(), RightTrapezoidRule())
}

SHAPE_CONFIGS: dict[ShapeKind, ShapeConfig] = {
    kind: rule.config for kind, rule in SHAPE_RULES.items()
}


def resolve_shape(shape: Union[ShapeKind, str, None]) -> Optional[ShapeKind]:
    """Map a wire token (or enum member) to a ShapeKind, None if unknown."""
    if isinstance(shape, ShapeKind):
        return shape
    try:
        return ShapeKind(shape)
    except ValueError:
        return None


def get_rule(shape: Union[ShapeKind, str, None]) -> Optional[BaseShapeRule]:
    kind = resolve_shape(shape)
    return SHAPE_RULES.get(kind) if kind else None
