from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel

from apps.backend.llm.schemas import ChatMessage

DEFAULT_MAX_HISTORY = 6

NO_INFORMATION_REPLY = (
    "I'm sorry, I don't have information about that. "
    "Please contact our support team for assistance."
)

CONTEXT_START_MARKER = "CONTEXT FROM KNOWLEDGE BASE:"
CONTEXT_END_MARKER = "---END OF CONTEXT---"


class Conversation(BaseModel):
    """Ordered messages for one completion call."""

    messages: List[ChatMessage]
    has_context: bool


def build_system_prompt(organization_name: str, context: str, has_context: bool) -> str:
    """Build the system prompt, grounded on context when there is any."""
    if not has_context:
        return (
            f"You are a professional customer support agent for {organization_name}.\n\n"
            "CRITICAL: The user's question does not match any information in your "
            "knowledge base.\n\n"
            "You MUST respond with exactly:\n"
            f'"{NO_INFORMATION_REPLY}"\n\n'
            "Do NOT attempt to answer the question. Do NOT make up any information."
        )

    return (
        f"You are a professional customer support agent for {organization_name}.\n\n"
        "STRICT RULES YOU MUST FOLLOW:\n"
        "1. Answer ONLY using the information provided in the CONTEXT below.\n"
        "2. If the CONTEXT doesn't fully answer the question, say what you know and "
        "mention you don't have more details.\n"
        "3. NEVER invent or assume information not in the CONTEXT.\n"
        "4. Be helpful, professional, and concise.\n"
        "5. Use a friendly but professional tone.\n"
        "6. When answering questions, synthesize the information naturally - don't "
        "just quote the sources.\n\n"
        f"{CONTEXT_START_MARKER}\n"
        f"{context}\n\n"
        f"{CONTEXT_END_MARKER}\n\n"
        "Answer the user's question using ONLY the information above. If you cannot "
        "answer from the context, say \"I don't have specific information about that. "
        'Please contact our support team for assistance."'
    )


def create_conversation(
    user_message: str,
    context: str,
    history: Sequence[ChatMessage] = (),
    organization_name: str = "Our Company",
    max_history: int = DEFAULT_MAX_HISTORY,
) -> Conversation:
    """
    Assemble system prompt, recent history and the user message.

    Only the newest `max_history` history entries are kept; older ones are
    dropped silently. System messages in the history are ignored so the
    conversation carries exactly one system prompt.
    """
    has_context = bool(context and context.strip())
    system_prompt = build_system_prompt(organization_name, context, has_context)

    turns = [m for m in history if m.role != "system"]
    recent = turns[-max_history:] if max_history > 0 else []

    messages = [
        ChatMessage(role="system", content=system_prompt),
        *recent,
        ChatMessage(role="user", content=user_message),
    ]
    return Conversation(messages=messages, has_context=has_context)


__all__ = [
    "Conversation",
    "build_system_prompt",
    "create_conversation",
    "NO_INFORMATION_REPLY",
    "DEFAULT_MAX_HISTORY",
]
