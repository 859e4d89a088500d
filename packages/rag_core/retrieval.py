from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from knowledge_base.corpus import get_knowledge_base
from knowledge_base.models import Category, KnowledgeChunk

from .context import format_context_for_prompt
from .models import RetrievalResult, RetrievedContext
from .scoring import matches_any, score_chunk
from .tokenizer import extract_terms

_log = logging.getLogger(__name__)

DEFAULT_TOP_K = 4
CATEGORY_TOP_K = 3
DEFAULT_MIN_SCORE = 2.0

# Indicator terms per question type. Order matters: on equal counts the
# category listed first wins.
QUESTION_PATTERNS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (
        Category.SERVICES,
        ("services", "offer", "provide", "build", "develop", "create", "website", "web",
         "app", "application", "saas", "mvp", "chatbot", "ai", "api", "ux", "ui"),
    ),
    (
        Category.PRICING,
        ("price", "cost", "pay", "pricing", "money", "billing", "invoice", "rate", "hourly",
         "fixed", "budget", "quote", "estimate", "charge", "fee", "much"),
    ),
    (
        Category.SUPPORT,
        ("help", "support", "contact", "reach", "call", "email", "hours", "available",
         "when", "time", "schedule", "language", "english", "french"),
    ),
    (
        Category.PROCESS,
        ("process", "workflow", "steps", "phases", "start", "begin", "timeline", "project",
         "stages", "consultation", "delivery"),
    ),
    (
        Category.SECURITY,
        ("security", "privacy", "data", "safe", "secure", "confidential", "access",
         "credentials", "login", "password", "account", "gdpr"),
    ),
    (
        Category.LEGAL,
        ("refund", "cancel", "contract", "agreement", "legal", "terms", "scope", "policy",
         "cancellation"),
    ),
    (
        Category.FAQ,
        ("redesign", "mobile", "app", "api", "integration", "maintain", "maintenance",
         "existing", "third-party", "legacy"),
    ),
)


def _rank(
    query: str,
    top_k: int,
    min_score: float,
    knowledge_base: Optional[Sequence[KnowledgeChunk]],
) -> List[RetrievalResult]:
    terms = extract_terms(query)
    if not terms:
        return []

    if knowledge_base is None:
        knowledge_base = get_knowledge_base()

    scored = [score_chunk(chunk, terms) for chunk in knowledge_base]
    relevant = [res for res in scored if res.score >= min_score]
    # sorted() is stable, so corpus order breaks ties.
    relevant.sort(key=lambda res: res.score, reverse=True)
    return relevant[: max(top_k, 0)]


def retrieve(
    query: str,
    top_k: int = DEFAULT_TOP_K,
    min_score: float = DEFAULT_MIN_SCORE,
    knowledge_base: Optional[Sequence[KnowledgeChunk]] = None,
) -> List[RetrievalResult]:
    """
    Rank the corpus against a query for answering.

    Returns at most `top_k` results, each scoring at least `min_score`,
    sorted by descending score. A query without usable terms returns an
    empty list without scoring anything.
    """
    return _rank(query, top_k, min_score, knowledge_base)


def retrieve_relevant_chunks(
    query: str,
    top_k: int = CATEGORY_TOP_K,
    min_score: float = DEFAULT_MIN_SCORE,
    knowledge_base: Optional[Sequence[KnowledgeChunk]] = None,
) -> List[RetrievalResult]:
    """Smaller ranking used for category-style lookups."""
    return _rank(query, top_k, min_score, knowledge_base)


def classify_question_type(terms: Sequence[str]) -> Optional[Category]:
    """Detect the likely category of a question from its terms."""
    best_match: Optional[Category] = None
    best_score = 0

    for category, patterns in QUESTION_PATTERNS:
        match_count = sum(1 for term in terms if matches_any(term, patterns))
        if match_count > best_score:
            best_score = match_count
            best_match = category

    return best_match


def get_relevant_context(
    query: str,
    knowledge_base: Optional[Sequence[KnowledgeChunk]] = None,
) -> RetrievedContext:
    """Main retrieval entry point: rank, then render the prompt context."""
    terms = extract_terms(query)
    results = retrieve(query, DEFAULT_TOP_K, DEFAULT_MIN_SCORE, knowledge_base)
    context = format_context_for_prompt(results)

    question_type = classify_question_type(terms)
    _log.info("Query: %s", query[:80])
    _log.info(
        "Terms: %s (question type: %s)",
        ", ".join(terms),
        question_type.value if question_type else "none",
    )
    _log.info("Found %d relevant chunks", len(results))

    return RetrievedContext(
        context=context,
        has_context=bool(results),
        results=tuple(results),
    )


__all__ = [
    "retrieve",
    "retrieve_relevant_chunks",
    "classify_question_type",
    "get_relevant_context",
    "QUESTION_PATTERNS",
]
