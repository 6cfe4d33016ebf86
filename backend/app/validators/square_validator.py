"""Square rule — four sides of equal length."""

from typing import Optional

from app.validators.base import BaseShapeRule
from app.validators.models import SUCCESS_PHRASE, ShapeKind


class SquareRule(BaseShapeRule):
    """Validates that all four sides of a square are the same length."""

    kind = ShapeKind.SQUARE
    label = "Persegi"
    fields = ("sisi1", "sisi2", "sisi3", "sisi4")

    @property
    def prompt_rule(self) -> str:
        return (
            "verifikasi bahwa semua empat sisi (sisi1, sisi2, sisi3, sisi4) memiliki "
            "panjang yang sama dan positif. Jika valid, kelilingnya adalah 4 * sisi1."
        )

    @property
    def success_message(self) -> str:
        return f"{SUCCESS_PHRASE} Keempat sisi persegi sama panjang."

    def check(self, values: dict[str, float]) -> Optional[str]:
        sides = [values[f] for f in self.fields]

        # Chained: each side must match its neighbour
        if all(self._close(x, y) for x, y in zip(sides, sides[1:])):
            return None

        listed = ", ".join(f"{f} = {self._fmt(values[f])}" for f in self.fields)
        return f"Keempat sisi persegi harus sama panjang, tetapi {listed}."

    def perimeter(self, values: dict[str, float]) -> float:
        return 4 * values["sisi1"]
