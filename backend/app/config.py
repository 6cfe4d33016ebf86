"""Application configuration via environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys: present only for local development, selects direct model calls
    OPENAI_API_KEY: str = ""

    # Model
    VALIDATOR_MODEL: str = "gpt-4o-mini"
    VALIDATOR_TEMPERATURE: float = 0.0

    # Strategy used by callers: deterministic or model-backed
    VALIDATION_MODE: Literal["local", "remote"] = "local"

    # Delegated mode
    VALIDATE_ENDPOINT_URL: str = "http://localhost:8000/api/v1/validate"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Cosmetic pacing for the local strategy (0 disables)
    LOCAL_VALIDATION_DELAY_SECONDS: float = 0.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def has_model_credential(self) -> bool:
        return bool(self.OPENAI_API_KEY.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
