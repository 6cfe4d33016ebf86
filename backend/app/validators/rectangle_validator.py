"""Rectangle rule — opposite sides of equal length."""

from typing import Optional

from app.validators.base import BaseShapeRule
from app.validators.models import SUCCESS_PHRASE, ShapeKind


class RectangleRule(BaseShapeRule):
    """Validates that sisi1 matches sisi3 and sisi2 matches sisi4."""

    kind = ShapeKind.RECTANGLE
    label = "Persegi Panjang"
    fields = ("sisi1", "sisi2", "sisi3", "sisi4")

    @property
    def prompt_rule(self) -> str:
        return (
            "verifikasi bahwa sisi yang berhadapan memiliki panjang yang sama "
            "(sisi1 sama dengan sisi3, dan sisi2 sama dengan sisi4) dan semua sisi positif. "
            "Jika valid, kelilingnya adalah 2 * (sisi1 + sisi2)."
        )

    @property
    def success_message(self) -> str:
        return f"{SUCCESS_PHRASE} Sisi-sisi yang berhadapan sama panjang."

    def check(self, values: dict[str, float]) -> Optional[str]:
        mismatched = [
            (first, second)
            for first, second in (("sisi1", "sisi3"), ("sisi2", "sisi4"))
            if not self._close(values[first], values[second])
        ]
        if not mismatched:
            return None

        details = "; ".join(
            f"{first} = {self._fmt(values[first])} tidak sama dengan {second} = {self._fmt(values[second])}"
            for first, second in mismatched
        )
        return f"Sisi yang berhadapan pada persegi panjang harus sama panjang: {details}."

    def perimeter(self, values: dict[str, float]) -> float:
        return 2 * (values["sisi1"] + values["sisi2"])
