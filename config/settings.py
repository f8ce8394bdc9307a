"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults.

    A missing ``GROQ_API_KEY`` is not an error: the evaluation service then
    runs in offline mode and every answer is scored by the local heuristic.
    """

    GROQ_API_KEY: Optional[str] = None
    API_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_MODEL: str = "llama-3.3-70b-versatile"
    LLM_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    LLM_MAX_TOKENS: int = Field(default=1000, ge=1)
    LLM_TIMEOUT_S: float = Field(default=60.0, ge=0.1)

    QUICK_QUESTION_COUNT: int = Field(default=5, ge=1)
    COMPLETE_QUESTION_COUNT: int = Field(default=10, ge=1)

    SPEECH_LOCALE: str = "pt-BR"
    PLAYBACK_LOCALE: str = "pt-PT"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)

    def question_target(self, mode: str) -> int:
        return self.QUICK_QUESTION_COUNT if mode == "quick" else self.COMPLETE_QUESTION_COUNT


settings = Settings()
