"""Geometry Expert Agent — asks the model to validate measurements and compute the perimeter.

The rules in the prompt are rendered from the shape rule registry, so the
model is told exactly what the deterministic validator checks.
"""

import json
from typing import Any, Mapping, Optional

from app.agents.base import BaseAgent
from app.validators.engine import parse_measurement
from app.validators.models import SUCCESS_PHRASE, ValidationResult
from app.validators.registry import SHAPE_RULES

SYSTEM_PROMPT = """Anda adalah seorang ahli geometri. Seorang pengguna telah memberikan ukuran untuk bangun tertentu.
Tugas Anda adalah memvalidasi apakah ukuran-ukuran ini dapat membentuk bangun yang ditentukan DAN menghitung kelilingnya jika valid.

Jawab HANYA dengan objek JSON sesuai skema yang diberikan, tanpa teks lain."""


def _field_schema(field: str, json_type: str) -> dict:
    return {
        "type": json_type,
        "description": ValidationResult.model_fields[field].description,
    }


# Structured output contract: exactly the three ValidationResult fields
RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "isValid": _field_schema("is_valid", "boolean"),
        "explanation": _field_schema("explanation", "string"),
        "keliling": _field_schema("keliling", "number"),
    },
    "required": ["isValid", "explanation", "keliling"],
    "additionalProperties": False,
}

RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "validation_result",
        "strict": True,
        "schema": RESPONSE_SCHEMA,
    },
}


def to_numeric_payload(inputs: Mapping[str, Any]) -> dict[str, Optional[float]]:
    """Convert raw inputs to numbers for the prompt; unparseable values become None."""
    payload: dict[str, Optional[float]] = {}
    for key, value in inputs.items():
        number = parse_measurement(value)
        if number is not None and number.is_integer():
            number = int(number)
        payload[key] = number
    return payload


def render_rules() -> str:
    """Restate every registered shape rule as a prompt bullet."""
    return "\n".join(f"- Untuk {rule.label}, {rule.prompt_rule}" for rule in SHAPE_RULES.values())


def build_prompt(shape_label: str, numeric_inputs: Mapping[str, Any]) -> str:
    """Build the instruction sent to the model, both locally and by the backend."""
    return (
        f"Bangun: {shape_label}\n"
        f"Ukuran: {json.dumps(dict(numeric_inputs), ensure_ascii=False)}\n\n"
        "Jawab dalam format JSON sesuai dengan skema yang diberikan, dengan tepat tiga field: "
        "isValid (boolean), explanation (string), keliling (number).\n"
        f"- Jika ukurannya valid, 'explanation' HARUS berisi teks \"{SUCCESS_PHRASE}\".\n"
        "- Jika ukurannya tidak valid, 'explanation' harus berisi penjelasan singkat mengapa "
        "ukuran tersebut tidak valid dalam Bahasa Indonesia.\n"
        "- Semua ukuran harus berupa angka positif; jika ada yang kosong, bukan angka, nol, "
        "atau negatif, ukurannya tidak valid.\n"
        "- Dua nilai dianggap sama jika selisihnya kurang dari 0.01.\n\n"
        "Berikut adalah aturan validasi:\n"
        f"{render_rules()}\n\n"
        "Jika valid, bulatkan keliling menjadi 2 angka desimal.\n"
        "Jika ukurannya TIDAK VALID, nilai 'keliling' harus 0."
    )


class GeometryExpertAgent(BaseAgent):
    """Validates shape measurements through the chat model."""

    def __init__(self, api_key: Optional[str] = None, llm: Any = None):
        super().__init__(
            name="geometry_expert",
            role="Geometry Expert",
            max_output_tokens=512,
            response_format=RESPONSE_FORMAT,
            api_key=api_key,
            llm=llm,
        )

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_message(self, shape_label: str, numeric_inputs: Mapping[str, Any]) -> str:
        return build_prompt(shape_label, numeric_inputs)

    def parse_response(self, raw_response: Any) -> ValidationResult:
        """Parse the model's JSON into a ValidationResult (invalid → keliling 0)."""
        return ValidationResult.model_validate(self._parse_json(raw_response))
