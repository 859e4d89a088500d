from __future__ import annotations

from typing import Sequence

from .models import RetrievalResult

DOCUMENT_SEPARATOR = "\n\n---\n\n"


def format_context_for_prompt(results: Sequence[RetrievalResult]) -> str:
    """Format ranked chunks into a single context block for the LLM."""
    if not results:
        return ""

    parts: list[str] = []
    for i, res in enumerate(results, 1):
        parts.append(f"[Document {i}: {res.chunk.title}]\n{res.chunk.content}")
    return DOCUMENT_SEPARATOR.join(parts)


__all__ = ["format_context_for_prompt", "DOCUMENT_SEPARATOR"]
