from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Sequence

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from agents.support_agent import DEFAULT_ORGANIZATION_NAME, SupportAgent, SupportAnswer
from apps.backend.config import CompletionSettings
from apps.backend.config import get_settings as load_completion_settings
from apps.backend.llm.errors import ErrorKind, ServiceError
from apps.backend.llm.schemas import ChatMessage
from knowledge_base.corpus import get_knowledge_base as load_knowledge_base
from knowledge_base.models import KnowledgeChunk

_log = logging.getLogger(__name__)

app = FastAPI(title="Support Chat RAG API")

# CORS: the chat widget is embedded on arbitrary sites, no credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ChatRequest(BaseModel):
    message: Optional[str] = None
    history: List[ChatMessage] = Field(
        default_factory=list,
        validation_alias=AliasChoices("history", "conversationHistory"),
    )
    organization_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("organizationName", "companyName"),
    )
    # Context already retrieved by the caller; bypasses server-side retrieval.
    knowledge_context: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("knowledgeContext", "knowledge_context"),
    )


class SourceModel(BaseModel):
    id: str
    title: str
    category: str
    score: float


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    has_context: bool = Field(alias="hasContext")
    model: str
    sources: List[SourceModel] = Field(default_factory=list)

    @classmethod
    def from_answer(cls, answer: SupportAnswer) -> "ChatResponse":
        return cls(
            reply=answer.reply,
            has_context=answer.has_context,
            model=answer.model,
            sources=[
                SourceModel(id=s.id, title=s.title, category=s.category.value, score=s.score)
                for s in answer.sources
            ],
        )


def _error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.user_message})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    _log.error("Chat request failed: %r", exc)
    return _error_response(exc)


INVALID_REQUEST_MESSAGE = "Invalid request"

# Error locations that mean the message itself is missing or unusable.
_MESSAGE_LOCATIONS = {("body",), ("body", "message")}


def _is_message_error(errors: Sequence[dict]) -> bool:
    return any(
        err.get("type") == "json_invalid" or tuple(err.get("loc", ())) in _MESSAGE_LOCATIONS
        for err in errors
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    _log.error("Invalid chat request: %s", errors)
    if _is_message_error(errors):
        error = ServiceError(ErrorKind.INVALID_INPUT, "Request validation failed")
    else:
        error = ServiceError(
            ErrorKind.INVALID_INPUT,
            "Request validation failed",
            user_message=INVALID_REQUEST_MESSAGE,
        )
    return _error_response(error)


@lru_cache(maxsize=1)
def get_completion_settings() -> CompletionSettings:
    return load_completion_settings()


def get_knowledge_base() -> Sequence[KnowledgeChunk]:
    return load_knowledge_base()


def get_agent(
    settings: CompletionSettings = Depends(get_completion_settings),
    knowledge_base: Sequence[KnowledgeChunk] = Depends(get_knowledge_base),
) -> SupportAgent:
    return SupportAgent(settings=settings, knowledge_base=knowledge_base)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, agent: SupportAgent = Depends(get_agent)) -> ChatResponse:
    try:
        answer = await agent.answer(
            req.message,
            history=req.history,
            organization_name=req.organization_name or DEFAULT_ORGANIZATION_NAME,
            knowledge_context=req.knowledge_context,
        )
    except ServiceError:
        raise
    except Exception as exc:  # noqa: BLE001
        _log.exception("Chat answer failed")
        raise ServiceError(ErrorKind.UNKNOWN, str(exc)) from exc
    return ChatResponse.from_answer(answer)


__all__ = ["app"]
