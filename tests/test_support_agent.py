"""SupportAgent orchestration tests with a mocked completion provider."""

import json

import httpx
import pytest

from agents.conversation import NO_INFORMATION_REPLY
from agents.support_agent import SupportAgent
from apps.backend.llm.errors import ErrorKind, ServiceError
from apps.backend.llm.schemas import ChatMessage

from conftest import TEST_MODEL, completion_payload


@pytest.fixture
def sent_bodies():
    return []


@pytest.fixture
def agent(completion_settings, knowledge_base, mock_http, sent_bodies):
    def handler(request: httpx.Request) -> httpx.Response:
        sent_bodies.append(json.loads(request.content))
        return httpx.Response(200, json=completion_payload("Grounded reply."))

    return SupportAgent(
        settings=completion_settings,
        knowledge_base=knowledge_base,
        http_client=mock_http(handler),
    )


@pytest.mark.asyncio
async def test_answer_grounds_prompt_on_retrieved_chunks(agent, sent_bodies):
    answer = await agent.answer("How much does a website cost?", organization_name="Acme")

    assert answer.reply == "Grounded reply."
    assert answer.has_context is True
    assert answer.model == TEST_MODEL
    assert [s.id for s in answer.sources] == [
        "pricing-billing",
        "faq-redesign",
        "services-overview",
    ]

    messages = sent_bodies[0]["messages"]
    assert messages[0]["role"] == "system"
    assert "[Document 1: Pricing & Billing]" in messages[0]["content"]
    assert "Acme offers flexible pricing models" in messages[0]["content"]
    assert messages[-1] == {"role": "user", "content": "How much does a website cost?"}


@pytest.mark.asyncio
async def test_unrelated_question_uses_refusal_prompt(agent, sent_bodies):
    answer = await agent.answer("xyzabc", organization_name="Acme")

    assert answer.has_context is False
    assert answer.sources == []
    system_prompt = sent_bodies[0]["messages"][0]["content"]
    assert NO_INFORMATION_REPLY in system_prompt
    assert "CONTEXT FROM KNOWLEDGE BASE" not in system_prompt


@pytest.mark.asyncio
async def test_supplied_knowledge_context_skips_retrieval(agent, sent_bodies):
    answer = await agent.answer(
        "xyzabc",
        knowledge_context="[Document 1: Custom]\nClient supplied context.",
    )

    assert answer.has_context is True
    assert answer.sources == []
    assert "Client supplied context." in sent_bodies[0]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_history_is_trimmed_before_sending(agent, sent_bodies):
    history = [
        ChatMessage(role="user" if i % 2 == 0 else "assistant", content=f"turn {i}")
        for i in range(9)
    ]
    await agent.answer("What are your support hours?", history=history)

    messages = sent_bodies[0]["messages"]
    assert len(messages) == 8
    assert [m["content"] for m in messages[1:-1]] == [f"turn {i}" for i in range(3, 9)]


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [None, "", 42, ["hi"]])
async def test_invalid_message_is_rejected(agent, sent_bodies, message):
    with pytest.raises(ServiceError) as exc_info:
        await agent.answer(message)

    assert exc_info.value.kind == ErrorKind.INVALID_INPUT
    assert exc_info.value.status_code == 400
    assert sent_bodies == []


def test_retrieve_context_uses_agent_corpus(agent):
    retrieved = agent.retrieve_context("refund policy")
    assert retrieved.results[0].chunk.id == "refunds-cancellations"
