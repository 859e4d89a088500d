from __future__ import annotations

from typing import Iterable, Sequence

from knowledge_base.models import KnowledgeChunk

from .models import RetrievalResult

# Heuristic weights for where a query term was found.
KEYWORD_WEIGHT = 3.0
TITLE_WEIGHT = 2.0
CONTENT_WEIGHT = 1.0
BREADTH_BONUS = 0.5


def terms_overlap(term: str, other: str) -> bool:
    """
    Bidirectional substring containment.

    Tolerates plural and partial forms ("price" / "pricing") at the cost of
    occasional false positives for short terms.
    """
    return term in other or other in term


def matches_any(term: str, candidates: Iterable[str]) -> bool:
    return any(terms_overlap(term, candidate) for candidate in candidates)


def score_chunk(chunk: KnowledgeChunk, terms: Sequence[str]) -> RetrievalResult:
    """
    Score a chunk against query terms with a weighted overlap heuristic.

    - keyword match (either direction): +3, once per term
    - term found in the title: +2
    - term found in the content: +1
    - +0.5 for every distinct matched term
    """
    matched: dict[str, None] = {}
    score = 0.0

    for term in terms:
        if matches_any(term, chunk.keywords):
            score += KEYWORD_WEIGHT
            matched.setdefault(term)

    title_lower = chunk.title.lower()
    for term in terms:
        if term in title_lower:
            score += TITLE_WEIGHT
            matched.setdefault(term)

    content_lower = chunk.content.lower()
    for term in terms:
        if term in content_lower:
            score += CONTENT_WEIGHT
            matched.setdefault(term)

    score += BREADTH_BONUS * len(matched)

    return RetrievalResult(chunk=chunk, score=score, matched_terms=tuple(matched))


__all__ = ["score_chunk", "terms_overlap", "matches_any"]
