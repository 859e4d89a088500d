from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List

from .models import KnowledgeChunk

_log = logging.getLogger(__name__)


def ensure_unique_ids(chunks: Iterable[KnowledgeChunk]) -> None:
    """Raise ValueError if two chunks share an id."""
    seen: set[str] = set()
    for chunk in chunks:
        if chunk.id in seen:
            raise ValueError(f"Duplicate knowledge chunk id: {chunk.id}")
        seen.add(chunk.id)


def load_chunks(corpus_path: Path) -> List[KnowledgeChunk]:
    """
    Load a corpus from a JSONL file, one KnowledgeChunk record per line.

    Blank lines are skipped. Corpus order follows file order and is used as
    the ranking tie-break.
    """
    if not corpus_path.exists():
        raise FileNotFoundError(f"Corpus file not found: {corpus_path}")

    records: list[KnowledgeChunk] = []
    with corpus_path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            records.append(KnowledgeChunk.model_validate(data))

    ensure_unique_ids(records)
    _log.info("Loaded %d knowledge chunks from %s", len(records), corpus_path)
    return records


__all__ = ["ensure_unique_ids", "load_chunks"]
