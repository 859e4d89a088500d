from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from apps.backend.config import CompletionSettings
from apps.backend.llm.errors import ErrorKind, ServiceError
from apps.backend.llm.openrouter_client import OpenRouterClient
from apps.backend.llm.schemas import ChatMessage
from knowledge_base.models import Category, KnowledgeChunk
from rag_core.models import RetrievedContext
from rag_core.retrieval import get_relevant_context

from .conversation import DEFAULT_MAX_HISTORY, create_conversation

_log = logging.getLogger(__name__)

DEFAULT_ORGANIZATION_NAME = "Our Company"


class SourceRef(BaseModel):
    """Reference to a knowledge chunk used as context."""

    id: str
    title: str
    category: Category
    score: float


class SupportAnswer(BaseModel):
    """Structured answer from the agent."""

    reply: str
    has_context: bool
    model: str
    sources: List[SourceRef] = Field(default_factory=list)


@dataclass
class SupportAgent:
    """Orchestrates retrieval, prompt construction and the completion call."""

    settings: CompletionSettings
    knowledge_base: Sequence[KnowledgeChunk]
    max_history: int = DEFAULT_MAX_HISTORY
    http_client: Optional[httpx.AsyncClient] = None

    def retrieve_context(self, question: str) -> RetrievedContext:
        """Rank the agent's corpus and render the prompt context."""
        return get_relevant_context(question, knowledge_base=self.knowledge_base)

    def client_for(self, organization_name: str) -> OpenRouterClient:
        return OpenRouterClient(
            self.settings,
            organization_name=organization_name,
            http_client=self.http_client,
        )

    async def answer(
        self,
        message: Any,
        history: Sequence[ChatMessage] = (),
        organization_name: str = DEFAULT_ORGANIZATION_NAME,
        knowledge_context: Optional[str] = None,
    ) -> SupportAnswer:
        """Answer one user message grounded on the knowledge base."""
        if not message or not isinstance(message, str):
            _log.error("Invalid message received")
            raise ServiceError(ErrorKind.INVALID_INPUT, "Message is required")

        _log.info("Processing for %s: %s", organization_name, message[:80])

        sources: list[SourceRef] = []
        if knowledge_context is not None:
            # Caller already ran retrieval (e.g. the browser widget).
            context = knowledge_context
        else:
            retrieved = self.retrieve_context(message)
            context = retrieved.context
            sources = [
                SourceRef(
                    id=res.chunk.id,
                    title=res.chunk.title,
                    category=res.chunk.category,
                    score=res.score,
                )
                for res in retrieved.results
            ]
        _log.info("Knowledge context provided: %s", "yes" if context.strip() else "no")

        conversation = create_conversation(
            message,
            context,
            history,
            organization_name=organization_name,
            max_history=self.max_history,
        )

        completion = await self.client_for(organization_name).complete(conversation.messages)
        _log.info("Response generated successfully")

        return SupportAnswer(
            reply=completion.reply,
            has_context=conversation.has_context,
            model=completion.model,
            sources=sources,
        )


__all__ = ["SupportAgent", "SupportAnswer", "SourceRef"]
