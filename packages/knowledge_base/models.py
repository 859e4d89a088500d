from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Topic sections of the knowledge base."""

    SERVICES = "Services"
    SUPPORT = "Support"
    PRICING = "Pricing"
    PROCESS = "Process"
    SECURITY = "Security"
    FAQ = "FAQ"
    LEGAL = "Legal"
    CONTACT = "Contact"


class KnowledgeChunk(BaseModel):
    """One indexed knowledge document with pre-extracted keywords."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique identifier within the corpus.")
    title: str = Field(..., description="Short human readable title.")
    category: Category = Field(..., description="Topic section of the chunk.")
    content: str = Field(..., description="Plain text inserted into the prompt context.")
    keywords: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Pre-extracted lowercase keywords used for matching.",
    )

    @field_validator("keywords")
    @classmethod
    def _lowercase_keywords(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(kw.lower() for kw in value)


__all__ = ["Category", "KnowledgeChunk"]
