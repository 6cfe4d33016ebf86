"""Base shape rule — abstract class implementing the Strategy Pattern.

Each shape is a standalone, independently testable rule entry:
field list + validity check + perimeter formula + prose for the model prompt.
New shapes are added by registering a rule, without modifying the validator.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.validators.models import EPSILON, ShapeConfig, ShapeKind


class BaseShapeRule(ABC):
    """Abstract base for all shape rules.

    Contract:
        - check() is deterministic: same input → same output
        - check() only runs on inputs that already passed the positivity gate
        - check() returns None when valid, or a failure explanation
        - No LLM calls, no network calls, no randomness
    """

    kind: ShapeKind
    label: str
    fields: tuple[str, ...]

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @property
    def config(self) -> ShapeConfig:
        return ShapeConfig(kind=self.kind, label=self.label, fields=self.fields)

    @property
    @abstractmethod
    def prompt_rule(self) -> str:
        """The validity rule restated in prose for the remote model."""
        ...

    @property
    @abstractmethod
    def success_message(self) -> str:
        ...

    @abstractmethod
    def check(self, values: dict[str, float]) -> Optional[str]:
        """Apply the geometric rule.

        Args:
            values: Parsed, strictly positive measurements keyed by field name

        Returns:
            None if the measurements form a valid shape, else the reason why not
        """
        ...

    @abstractmethod
    def perimeter(self, values: dict[str, float]) -> float:
        ...

    # ── Helper Methods ──

    @staticmethod
    def _close(x: float, y: float) -> bool:
        """Epsilon-equality with a fixed, unscaled tolerance."""
        return abs(x - y) < EPSILON

    @staticmethod
    def _fmt(value: float) -> str:
        """Format a measurement for explanations: 5.0 → '5', 5.657 → '5.657'."""
        return f"{value:g}"
