"""Command line interface tests."""

import pytest
from click.testing import CliRunner

from agents.cli import main


@pytest.fixture
def runner(default_corpus):
    return CliRunner()


def test_search_lists_ranked_chunks(runner):
    result = runner.invoke(main, ["search", "how much does a website cost"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "1. pricing-billing [Pricing] score=7.0 terms=much, cost"
    assert lines[1].startswith("2. faq-redesign [FAQ]")


def test_search_respects_top_k(runner):
    result = runner.invoke(main, ["search", "support", "--top-k", "2"])

    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 2


def test_search_without_matches(runner):
    result = runner.invoke(main, ["search", "xyzabc"])

    assert result.exit_code == 0
    assert "No relevant chunks found." in result.output


@pytest.mark.parametrize(
    "query,expected",
    [
        ("how much does it cost", "Pricing"),
        ("refund and cancellation", "Legal"),
        # "get" is contained in the pricing indicator "budget"
        ("can I get a refund", "Pricing"),
        ("xyzabc", "none"),
    ],
)
def test_classify(runner, query, expected):
    result = runner.invoke(main, ["classify", query])

    assert result.exit_code == 0
    assert result.output.strip() == expected


def test_context_without_matches(runner):
    result = runner.invoke(main, ["context", "xyzabc"])

    assert result.exit_code == 0
    assert result.output.strip() == "(no context)"


def test_context_prints_documents(runner):
    result = runner.invoke(main, ["context", "refund policy"])

    assert result.exit_code == 0
    assert result.output.startswith("[Document 1: Refunds & Cancellations Policy]")


def test_ask_without_api_key_fails(runner, monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)

    result = runner.invoke(main, ["ask", "What are your support hours?"])

    assert result.exit_code == 1
    assert "AI service not configured" in result.output


def test_serve_runs_api_app(runner, monkeypatch):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    result = runner.invoke(main, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    assert calls == [
        ("apps.backend.main:app", {"host": "127.0.0.1", "port": 9001, "reload": False})
    ]
