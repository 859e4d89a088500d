from __future__ import annotations

import asyncio
import logging

import click

from apps.backend.config import get_settings as get_completion_settings
from apps.backend.llm.errors import ServiceError
from knowledge_base.corpus import get_company_name, get_knowledge_base
from rag_core.retrieval import (
    DEFAULT_MIN_SCORE,
    DEFAULT_TOP_K,
    classify_question_type,
    get_relevant_context,
    retrieve,
)
from rag_core.tokenizer import extract_terms

from .support_agent import SupportAgent

_log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show pipeline logs.")
def main(verbose: bool) -> None:
    """CLI entrypoint for the support chat retrieval pipeline."""
    _configure_logging(verbose)


@main.command("search")
@click.argument("query")
@click.option("--top-k", default=DEFAULT_TOP_K, show_default=True, type=int)
@click.option("--min-score", default=DEFAULT_MIN_SCORE, show_default=True, type=float)
def search(query: str, top_k: int, min_score: float) -> None:
    """Rank knowledge chunks for QUERY."""
    results = retrieve(query, top_k=top_k, min_score=min_score)
    if not results:
        click.echo("No relevant chunks found.")
        return

    for i, res in enumerate(results, start=1):
        click.echo(
            f"{i}. {res.chunk.id} [{res.chunk.category.value}] "
            f"score={res.score:.1f} terms={', '.join(res.matched_terms)}"
        )


@main.command("classify")
@click.argument("query")
def classify(query: str) -> None:
    """Detect the question type of QUERY."""
    category = classify_question_type(extract_terms(query))
    click.echo(category.value if category else "none")


@main.command("context")
@click.argument("query")
def context(query: str) -> None:
    """Print the prompt context assembled for QUERY."""
    retrieved = get_relevant_context(query)
    click.echo(retrieved.context if retrieved.has_context else "(no context)")


@main.command("ask")
@click.argument("question")
@click.option("--company", default=None, help="Organization name used in the prompt.")
def ask(question: str, company: str | None) -> None:
    """Answer QUESTION through the full pipeline."""
    agent = SupportAgent(
        settings=get_completion_settings(),
        knowledge_base=get_knowledge_base(),
    )
    try:
        answer = asyncio.run(
            agent.answer(question, organization_name=company or get_company_name())
        )
    except ServiceError as exc:
        _log.error("Answer failed: %r", exc)
        click.echo(exc.user_message, err=True)
        raise SystemExit(1) from exc

    click.echo(answer.reply)
    if answer.sources:
        click.echo("\nSources: " + ", ".join(src.id for src in answer.sources))


@main.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes.")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the chat HTTP API."""
    import uvicorn

    _log.info("Serving chat API on %s:%d", host, port)
    uvicorn.run("apps.backend.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
