from __future__ import annotations  # Configuration schema for the chat-completions route

from typing import Dict, Optional

from pydantic import BaseModel, Field

from .settings import Settings, settings as default_settings


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str = "/chat/completions"
    model: str
    timeout_s: float = Field(ge=0.1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1)
    api_key: Optional[str] = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def configured(self) -> bool:  # True when a non-blank key is present
        return bool(self.api_key and self.api_key.strip())


def route_from_settings(cfg: Optional[Settings] = None) -> LlmRoute:  # Build the route from env settings
    cfg = cfg or default_settings
    return LlmRoute(
        name="groq",
        base_url=cfg.API_BASE_URL.rstrip("/"),
        model=cfg.LLM_MODEL,
        timeout_s=cfg.LLM_TIMEOUT_S,
        temperature=cfg.LLM_TEMPERATURE,
        max_tokens=cfg.LLM_MAX_TOKENS,
        api_key=cfg.GROQ_API_KEY,
    )


__all__ = ["LlmRoute", "route_from_settings"]
