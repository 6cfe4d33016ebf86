"""Shared fixtures: isolated settings and a stand-in chat model."""

from types import SimpleNamespace

import pytest

from app.config import Settings


class FakeChatModel:
    """Answers every ainvoke() with canned content, or raises."""

    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=self.content,
            usage_metadata={"input_tokens": 120, "output_tokens": 30},
        )


@pytest.fixture
def make_settings():
    """Build Settings that ignore the developer's .env and environment key."""

    def _make(**overrides):
        values = {"OPENAI_API_KEY": "", "VALIDATION_MODE": "local"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def fake_llm():
    return FakeChatModel
