"""Keyword-overlap document retriever over the chatbot document index."""

from __future__ import annotations

import asyncio

from command_center.config.constants import DOC_INDEX_FILE, DOCS_DIR
from command_center.exceptions import FixtureError
from command_center.keyword_search.tokenizer import keyword_matches, tokenize_query
from command_center.models.domain import (
    DocumentIndexEntry,
    RetrievedDocument,
    ScoredDocument,
)
from command_center.observability.logger import get_logger
from command_center.observability.metrics import log_retrieval_metrics
from command_center.storage.fixture_store import FixtureStore

logger = get_logger("keyword_retriever")


def parse_index(raw) -> list[DocumentIndexEntry]:
    """Parse the index fixture (``{"docs": [...]}``). Malformed entries are skipped."""
    docs = raw.get("docs") if isinstance(raw, dict) else None
    if not isinstance(docs, list):
        return []
    entries = []
    for d in docs:
        if not isinstance(d, dict):
            continue
        doc_id, filename = d.get("doc_id"), d.get("filename")
        if not isinstance(doc_id, str) or not isinstance(filename, str):
            continue
        keywords = d.get("keywords")
        if not isinstance(keywords, list):
            keywords = []
        entries.append(
            DocumentIndexEntry(
                doc_id=doc_id,
                filename=filename,
                keywords=tuple(k.lower() for k in keywords if isinstance(k, str) and k),
            )
        )
    return entries


def score_entries(
    entries: list[DocumentIndexEntry], query_tokens: list[str]
) -> list[ScoredDocument]:
    """Score by matching keyword count, highest first. Ties keep index order."""
    scored = [
        ScoredDocument(
            entry=e,
            score=sum(1 for k in e.keywords if keyword_matches(k, query_tokens)),
        )
        for e in entries
    ]
    # sorted() is stable
    return sorted(scored, key=lambda s: s.score, reverse=True)


class KeywordRetriever:
    def __init__(self, store: FixtureStore, max_chars: int = 3000) -> None:
        self._store = store
        self._max_chars = max_chars

    def _load_index(self) -> list[DocumentIndexEntry]:
        return parse_index(self._store.read_json(DOC_INDEX_FILE))

    def _read_document(self, filename: str) -> str | None:
        try:
            return self._store.read_text(f"{DOCS_DIR}/{filename}")
        except FixtureError as e:
            logger.warning("document_skipped", filename=filename, error=str(e))
            return None

    def retrieve_sync(self, query: str, top_n: int = 3) -> list[RetrievedDocument]:
        try:
            entries = self._load_index()
        except FixtureError as e:
            logger.warning("document_index_unavailable", error=str(e))
            return []

        query_tokens = tokenize_query(query)
        ranked = score_entries(entries, query_tokens)

        results: list[RetrievedDocument] = []
        for scored in ranked[:top_n]:
            if scored.score == 0:
                continue
            content = self._read_document(scored.entry.filename)
            if content is None:
                continue
            results.append(
                RetrievedDocument(doc_id=scored.entry.doc_id, content=content[: self._max_chars])
            )

        log_retrieval_metrics(
            query_tokens=len(query_tokens),
            index_size=len(entries),
            matched=sum(1 for s in ranked if s.score > 0),
            returned=len(results),
        )
        return results

    async def retrieve(self, query: str, top_n: int = 3) -> list[RetrievedDocument]:
        return await asyncio.to_thread(self.retrieve_sync, query, top_n)
