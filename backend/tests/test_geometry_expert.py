"""Prompt construction and response parsing for the model-backed check."""

import json

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from app.agents.base import EmptyResponseError
from app.agents.geometry_expert import (
    RESPONSE_FORMAT,
    RESPONSE_SCHEMA,
    GeometryExpertAgent,
    build_prompt,
    render_rules,
    to_numeric_payload,
)
from app.validators import SHAPE_RULES, SUCCESS_PHRASE


def test_prompt_names_shape_and_embeds_inputs():
    prompt = build_prompt("Segitiga Siku-Siku", {"a": 3, "b": 4, "c": 5})

    assert "Bangun: Segitiga Siku-Siku" in prompt
    assert '{"a": 3, "b": 4, "c": 5}' in prompt


def test_prompt_restates_every_rule_and_the_output_contract():
    prompt = build_prompt("Persegi", {"sisi1": 5})

    for rule in SHAPE_RULES.values():
        assert f"Untuk {rule.label}, {rule.prompt_rule}" in prompt
    assert SUCCESS_PHRASE in prompt
    assert "isValid" in prompt
    assert "'keliling' harus 0" in prompt


def test_rules_render_one_bullet_per_shape():
    assert len(render_rules().splitlines()) == len(SHAPE_RULES)


def test_numeric_payload_parses_values_and_nulls_garbage():
    payload = to_numeric_payload({"a": "3", "b": "x", "c": "4.5", "d": ""})

    assert payload == {"a": 3, "b": None, "c": 4.5, "d": None}
    assert json.dumps(payload) == '{"a": 3, "b": null, "c": 4.5, "d": null}'


def test_response_schema_has_exactly_the_result_fields():
    assert set(RESPONSE_SCHEMA["properties"]) == {"isValid", "explanation", "keliling"}
    assert RESPONSE_SCHEMA["required"] == ["isValid", "explanation", "keliling"]
    assert RESPONSE_FORMAT["json_schema"]["schema"] is RESPONSE_SCHEMA
    assert "0" in RESPONSE_SCHEMA["properties"]["keliling"]["description"]


def test_parse_response_strips_code_fences():
    agent = GeometryExpertAgent(llm=object())
    raw = '```json\n{"isValid": true, "explanation": "Mantap, Anda dapat proyek!", "keliling": 12}\n```'

    result = agent.parse_response(raw)

    assert result.is_valid is True
    assert result.keliling == 12.0


def test_parse_response_rejects_empty_text():
    agent = GeometryExpertAgent(llm=object())

    with pytest.raises(EmptyResponseError):
        agent.parse_response("   ")


def test_parse_response_rejects_malformed_json():
    agent = GeometryExpertAgent(llm=object())

    with pytest.raises(ValueError):
        agent.parse_response("isValid: yes")


def test_parse_response_rejects_non_object_json():
    agent = GeometryExpertAgent(llm=object())

    with pytest.raises(ValueError):
        agent.parse_response("[1, 2, 3]")


@pytest.mark.asyncio
async def test_run_sends_system_and_user_messages(fake_llm):
    llm = fake_llm('{"isValid": false, "explanation": "Sisi tidak sama.", "keliling": 20}')
    agent = GeometryExpertAgent(llm=llm)

    result = await agent.run("Persegi", {"sisi1": 5, "sisi2": 5, "sisi3": 5, "sisi4": 6})

    assert result.is_valid is False
    assert result.keliling == 0
    system, human = llm.calls[0]
    assert isinstance(system, SystemMessage)
    assert isinstance(human, HumanMessage)
    assert "Bangun: Persegi" in human.content


@pytest.mark.asyncio
async def test_run_reraises_model_errors(fake_llm):
    agent = GeometryExpertAgent(llm=fake_llm(error=RuntimeError("quota exceeded")))

    with pytest.raises(RuntimeError, match="quota exceeded"):
        await agent.run("Persegi", {"sisi1": 5})
