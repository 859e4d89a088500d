"""Pytest configuration and fixtures for the support chat tests."""

from typing import Any, AsyncIterator, Callable, List

import httpx
import pytest

from apps.backend.config import CompletionSettings
from knowledge_base import corpus
from knowledge_base.corpus import build_knowledge_base
from knowledge_base.models import KnowledgeChunk

API_URL = "https://openrouter.test/api/v1/chat/completions"
TEST_MODEL = "test/model-free"


def completion_payload(content: Any) -> dict:
    """Minimal OpenRouter success body."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def knowledge_base() -> List[KnowledgeChunk]:
    return build_knowledge_base("Acme")


@pytest.fixture
def completion_settings() -> CompletionSettings:
    return CompletionSettings(
        api_key="test-key",
        api_url=API_URL,
        model=TEST_MODEL,
        referer="https://support.acme.test",
        timeout_ms=30000,
        max_tokens=500,
        temperature=0.3,
        _env_file=None,
    )


@pytest.fixture
async def mock_http() -> AsyncIterator[Callable[[Callable], httpx.AsyncClient]]:
    """Factory for an AsyncClient served by a MockTransport handler."""
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Callable) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
def default_corpus(monkeypatch: pytest.MonkeyPatch):
    """Process-wide corpus built from a clean environment."""
    monkeypatch.delenv("SUPPORT_COMPANY_NAME", raising=False)
    monkeypatch.delenv("SUPPORT_CORPUS_PATH", raising=False)
    corpus._default_knowledge_base.cache_clear()
    yield corpus.get_knowledge_base()
    corpus._default_knowledge_base.cache_clear()
