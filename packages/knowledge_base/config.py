from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class KnowledgeBaseSettings(BaseSettings):
    """Configuration for the support knowledge base."""

    company_name: str = Field(
        default="Our Company",
        description="Company name injected into the bundled corpus and prompts.",
    )

    # Optional JSONL corpus replacing the bundled one (one chunk per line).
    corpus_path: Optional[Path] = Field(
        default=None,
        description="Path to a JSONL file with KnowledgeChunk records.",
    )

    class Config:
        env_prefix = "SUPPORT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> KnowledgeBaseSettings:
    """Return knowledge base settings read from the environment."""
    return KnowledgeBaseSettings()


__all__ = ["KnowledgeBaseSettings", "get_settings"]
