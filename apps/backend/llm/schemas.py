from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One message of a chat completion conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class Completion(BaseModel):
    """Reply text returned by the completion provider."""

    reply: str
    model: str


__all__ = ["ChatMessage", "Completion", "Role"]
