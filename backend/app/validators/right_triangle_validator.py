"""Right triangle rule — hypotenuse ordering and the Pythagorean theorem."""

import math
from typing import Optional

from app.validators.base import BaseShapeRule
from app.validators.models import OUT_OF_RANGE_MESSAGE, SUCCESS_PHRASE, ShapeKind

HYPOTENUSE_NOT_LONGEST_MESSAGE = "Sisi miring (c) harus merupakan sisi terpanjang."


class RightTriangleRule(BaseShapeRule):
    """Validates a right triangle with legs a, b and hypotenuse c."""

    kind = ShapeKind.RIGHT_TRIANGLE
    label = "Segitiga Siku-Siku"
    fields = ("a", "b", "c")

    @property
    def prompt_rule(self) -> str:
        return (
            "verifikasi teorema Pythagoras (a² + b² = c², dimana c adalah sisi "
            "terpanjang/miring). Pastikan sisi miring (c) selalu sisi terpanjang. "
            "Jika valid, kelilingnya adalah a + b + c."
        )

    @property
    def success_message(self) -> str:
        return f"{SUCCESS_PHRASE} Ukuran memenuhi teorema Pythagoras."

    def check(self, values: dict[str, float]) -> Optional[str]:
        short1, short2, longest = sorted(values[f] for f in self.fields)

        # Exact comparison: c has to be the numeric maximum, not tied with a leg
        if values["c"] != longest or short2 == longest:
            return HYPOTENUSE_NOT_LONGEST_MESSAGE

        legs_sq, hyp_sq = short1 * short1 + short2 * short2, longest * longest
        if not (math.isfinite(legs_sq) and math.isfinite(hyp_sq)):
            return OUT_OF_RANGE_MESSAGE

        if self._close(legs_sq, hyp_sq):
            return None

        a_sq, b_sq, c_sq = (values[f] * values[f] for f in self.fields)
        return (
            "Ukuran tidak memenuhi teorema Pythagoras: "
            f"a² = {a_sq:.2f}, b² = {b_sq:.2f}, a² + b² = {a_sq + b_sq:.2f}, "
            f"sedangkan c² = {c_sq:.2f}."
        )

    def perimeter(self, values: dict[str, float]) -> float:
        return values["a"] + values["b"] + values["c"]
