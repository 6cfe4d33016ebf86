"""Base agent class with LLM integration and response cleanup."""

from abc import ABC, abstractmethod
from typing import Any, Optional
import json
import time

import structlog
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.config import get_settings

logger = structlog.get_logger()


class EmptyResponseError(ValueError):
    """The model answered with no text at all."""


class BaseAgent(ABC):
    """Abstract base class for model-backed agents.

    One call per run(): no retries, no internal timeout. Retry policy
    belongs to the caller.
    """

    def __init__(
        self,
        name: str,
        role: str,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: int = 1024,
        response_format: Optional[dict] = None,
        api_key: Optional[str] = None,
        llm: Any = None,
    ):
        settings = get_settings()
        self.name = name
        self.role = role
        self.model_name = model_name or settings.VALIDATOR_MODEL
        self.temperature = settings.VALIDATOR_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens
        self.response_format = response_format
        self.api_key = api_key
        self._llm = llm

    @property
    def llm(self):
        """Lazy-initialize the LLM client."""
        if self._llm is None:
            self._llm = self._create_llm()
        return self._llm

    def _create_llm(self):
        """Create the OpenAI LLM client."""
        settings = get_settings()

        kwargs = {
            "model": self.model_name,
            "api_key": self.api_key or settings.OPENAI_API_KEY,
            "temperature": self.temperature,
            "max_tokens": self.max_output_tokens,
        }
        if self.response_format:
            kwargs["model_kwargs"] = {"response_format": self.response_format}

        return ChatOpenAI(**kwargs)

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Return the system prompt for this agent."""
        ...

    @abstractmethod
    def build_user_message(self, *args, **kwargs) -> str:
        """Build the user message for a single request."""
        ...

    @abstractmethod
    def parse_response(self, raw_response: str) -> Any:
        """Parse the LLM response into structured output."""
        ...

    async def _call_llm(self, system_prompt: str, user_message: str) -> dict:
        """Call the LLM once. Returns response text + usage metadata."""
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_message),
        ]

        response = await self.llm.ainvoke(messages)

        usage = getattr(response, "usage_metadata", {}) or {}
        return {
            "content": response.content,
            "input_tokens": usage.get("input_tokens", 0),
            "output_tokens": usage.get("output_tokens", 0),
        }

    async def run(self, *args, **kwargs) -> Any:
        """Execute the agent: build prompt, call LLM, parse response.

        Errors are logged and re-raised unchanged; callers decide how to
        present them.
        """
        start_time = time.time()

        try:
            system_prompt = self.get_system_prompt()
            user_message = self.build_user_message(*args, **kwargs)

            llm_result = await self._call_llm(system_prompt, user_message)
            parsed = self.parse_response(llm_result["content"])

            logger.info(
                "agent_completed",
                agent=self.name,
                model=self.model_name,
                duration_seconds=round(time.time() - start_time, 2),
                input_tokens=llm_result["input_tokens"],
                output_tokens=llm_result["output_tokens"],
            )
            return parsed

        except Exception as e:
            logger.error(
                "agent_failed",
                agent=self.name,
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=round(time.time() - start_time, 2),
            )
            raise

    @staticmethod
    def _strip_code_fences(text: str) -> str:
        """Remove markdown code fences from LLM output."""
        cleaned = text.strip()
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:]
        elif cleaned.startswith("```"):
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        return cleaned.strip()

    def _parse_json(self, text: Any) -> dict:
        """Strip fences and decode a JSON object; empty text raises EmptyResponseError."""
        if not isinstance(text, str) or not text.strip():
            raise EmptyResponseError(f"{self.role} returned an empty response")

        cleaned = self._strip_code_fences(text)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError:
            logger.warning(
                "json_parse_failed",
                agent=self.name,
                response_length=len(text),
                response_preview=cleaned[:500],
            )
            raise

        if not isinstance(data, dict):
            raise ValueError(f"{self.role} returned JSON {type(data).__name__}, expected an object")
        return data
