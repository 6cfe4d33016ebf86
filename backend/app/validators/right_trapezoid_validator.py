"""Right trapezoid rule — parallel sides ordering and the slanted side length."""

import math
from typing import Optional

from app.validators.base import BaseShapeRule
from app.validators.models import OUT_OF_RANGE_MESSAGE, SUCCESS_PHRASE, ShapeKind

BASE_NOT_LONGER_MESSAGE = "Sisi bawah harus lebih panjang dari sisi atas."


class RightTrapezoidRule(BaseShapeRule):
    """Validates a right trapezoid.

    The height, the difference of the parallel sides and the slanted side
    form a right triangle, so tinggi² + (bawah - atas)² must equal miring².
    """

    kind = ShapeKind.RIGHT_TRAPEZOID
    label = "Trapesium Siku-Siku"
    fields = ("atas", "bawah", "tinggi", "miring")

    @property
    def prompt_rule(self) -> str:
        return (
            "verifikasi hubungan pythagoras antara tinggi, selisih sisi sejajar, dan sisi "
            "miring (tinggi² + (bawah - atas)² = miring²). Pastikan juga sisi bawah lebih "
            "panjang dari sisi atas dan semua ukuran positif. Jika valid, kelilingnya "
            "adalah atas + bawah + tinggi + miring."
        )

    @property
    def success_message(self) -> str:
        return f"{SUCCESS_PHRASE} Sisi miring sesuai dengan tinggi dan selisih sisi sejajar."

    def check(self, values: dict[str, float]) -> Optional[str]:
        atas, bawah = values["atas"], values["bawah"]
        tinggi, miring = values["tinggi"], values["miring"]

        if not bawah > atas:
            return BASE_NOT_LONGER_MESSAGE

        leg = bawah - atas
        expected_sq, miring_sq = tinggi * tinggi + leg * leg, miring * miring
        if not (math.isfinite(expected_sq) and math.isfinite(miring_sq)):
            return OUT_OF_RANGE_MESSAGE

        if self._close(expected_sq, miring_sq):
            return None

        required = math.sqrt(expected_sq)
        return (
            f"Sisi miring tidak sesuai: dengan tinggi {self._fmt(tinggi)} dan selisih sisi "
            f"sejajar {self._fmt(leg)}, sisi miring seharusnya {required:.2f}, "
            f"bukan {self._fmt(miring)}."
        )

    def perimeter(self, values: dict[str, float]) -> float:
        return values["atas"] + values["bawah"] + values["tinggi"] + values["miring"]
