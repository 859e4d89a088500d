from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env once on import so OPENROUTER_* can live in a persisted config
# file rather than every shell session.
load_dotenv()

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct:free"
DEFAULT_REFERER = "https://faytech-support.lovable.app"


class CompletionSettings(BaseSettings):
    """Configuration for the chat completion provider."""

    # Missing credentials must not block API startup; they fail the request.
    api_key: Optional[str] = Field(default=None, description="Bearer token for the provider.")
    api_url: str = Field(default=DEFAULT_API_URL, description="Chat completions endpoint.")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent upstream.")
    referer: str = Field(default=DEFAULT_REFERER, description="HTTP-Referer origin tag.")

    timeout_ms: int = Field(default=30000, gt=0)
    max_tokens: int = Field(default=500, gt=0)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    class Config:
        env_prefix = "OPENROUTER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> CompletionSettings:
    """Return completion settings read from the environment."""
    return CompletionSettings()


__all__ = ["CompletionSettings", "get_settings", "DEFAULT_API_URL", "DEFAULT_MODEL"]
