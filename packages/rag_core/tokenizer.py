from __future__ import annotations

import re
from typing import List

# Common function words filtered out of queries.
STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "or", "that",
        "the", "to", "was", "were", "will", "with", "what", "where", "when",
        "who", "why", "how", "can", "could", "would", "should", "do", "does",
        "did", "have", "had", "i", "my", "me", "we", "you", "your", "they",
        "this", "these", "those", "am", "been", "being", "there", "here",
        "just", "about", "also", "some", "any", "all", "more", "other",
        "such", "no", "not", "only", "same", "so", "than", "too", "very",
    }
)

MIN_TERM_LENGTH = 3

_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


def extract_terms(query: str) -> List[str]:
    r"""
    Extract the query terms used for matching.

    Lowercases the query, turns punctuation into whitespace, then drops short
    tokens and stop words. Duplicates are removed keeping the first
    occurrence, so enumeration order is deterministic.

    Word characters follow Python's Unicode `\w`, so accented words such as
    "français" stay whole; an ASCII-only `\w` would split them into
    "fran" and "ais".
    """
    words = _PUNCTUATION_PATTERN.sub(" ", query.lower()).split()
    terms = (
        word
        for word in words
        if len(word) >= MIN_TERM_LENGTH and word not in STOP_WORDS
    )
    return list(dict.fromkeys(terms))


__all__ = ["extract_terms", "STOP_WORDS", "MIN_TERM_LENGTH"]
