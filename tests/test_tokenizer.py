"""Query term extraction tests."""

import pytest

from rag_core.tokenizer import STOP_WORDS, extract_terms


def test_extracts_content_words_in_order():
    assert extract_terms("How much does a website cost?") == ["much", "website", "cost"]


@pytest.mark.parametrize(
    "query",
    [
        "",
        "   ",
        "what is the",
        "How do you do?",
        "an ox is up",
        "Why? Who? When?",
    ],
)
def test_stop_words_and_short_tokens_yield_no_terms(query):
    assert extract_terms(query) == []


def test_punctuation_becomes_whitespace():
    assert extract_terms("pricing/billing, refunds!") == ["pricing", "billing", "refunds"]


def test_terms_are_lowercased_and_deduplicated():
    assert extract_terms("Price price PRICE prices") == ["price", "prices"]


def test_terms_respect_invariants():
    terms = extract_terms("Can I get a REFUND for the unused hours of my SaaS MVP project?")
    assert terms
    for term in terms:
        assert term == term.lower()
        assert len(term) > 2
        assert term not in STOP_WORDS
    assert len(terms) == len(set(terms))


def test_non_ascii_letters_are_kept():
    assert extract_terms("Parlez-vous français ?") == ["parlez", "vous", "français"]
