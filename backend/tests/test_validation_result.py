"""ValidationResult contract shared by both strategies."""

import pytest
from pydantic import ValidationError

from app.validators import ValidationResult


def test_invalid_result_forces_zero_perimeter():
    result = ValidationResult.model_validate(
        {"isValid": False, "explanation": "Sisi tidak sama.", "keliling": 12.5}
    )

    assert result.is_valid is False
    assert result.keliling == 0


@pytest.mark.parametrize("falsy", [False, 0, "false", "no", "0", "off"])
def test_coerced_false_verdicts_still_force_zero_perimeter(falsy):
    result = ValidationResult.model_validate(
        {"isValid": falsy, "explanation": "Sisi tidak sama.", "keliling": 12}
    )

    assert result.is_valid is False
    assert result.keliling == 0


@pytest.mark.parametrize("keliling", [float("inf"), "inf", "nan"])
def test_valid_result_rejects_non_finite_perimeter(keliling):
    with pytest.raises(ValidationError):
        ValidationResult.model_validate(
            {"isValid": True, "explanation": "Mantap, Anda dapat proyek!", "keliling": keliling}
        )


def test_invalid_result_with_non_finite_perimeter_is_zeroed():
    result = ValidationResult.model_validate(
        {"isValid": "false", "explanation": "Tidak valid.", "keliling": "inf"}
    )

    assert result.keliling == 0


def test_valid_factory_rounds_perimeter():
    result = ValidationResult.valid("Mantap, Anda dapat proyek!", 19.657)

    assert result.keliling == 19.66


def test_wire_format_uses_camel_case():
    result = ValidationResult.invalid("Bangun tidak dikenali.")

    assert result.to_wire() == {
        "isValid": False,
        "explanation": "Bangun tidak dikenali.",
        "keliling": 0.0,
    }


def test_snake_case_names_are_accepted():
    result = ValidationResult(is_valid=True, explanation="ok", keliling=4)

    assert result.is_valid is True
    assert result.keliling == 4.0


def test_explanation_must_not_be_empty():
    with pytest.raises(ValidationError):
        ValidationResult(is_valid=False, explanation="", keliling=0)


def test_missing_fields_are_rejected():
    with pytest.raises(ValidationError):
        ValidationResult.model_validate({"explanation": "no verdict"})


def test_results_are_immutable():
    result = ValidationResult.valid("Mantap, Anda dapat proyek!", 20)

    with pytest.raises(ValidationError):
        result.keliling = 0
