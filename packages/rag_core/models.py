from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from knowledge_base.models import KnowledgeChunk


@dataclass(frozen=True)
class RetrievalResult:
    """Score of one chunk against a query term set."""

    chunk: KnowledgeChunk
    score: float
    matched_terms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RetrievedContext:
    """Ranked chunks for a query together with their prompt rendering."""

    context: str
    has_context: bool
    results: Tuple[RetrievalResult, ...] = field(default_factory=tuple)


__all__ = ["RetrievalResult", "RetrievedContext"]
