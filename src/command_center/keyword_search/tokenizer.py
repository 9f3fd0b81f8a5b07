"""Text preprocessing for keyword retrieval."""

from __future__ import annotations

import re

from command_center.config.constants import MIN_QUERY_TOKEN_LEN, STOPWORDS


def tokenize_query(text: str) -> list[str]:
    """Lowercase and split on whitespace, dropping tokens of two characters or fewer.

    Punctuation is kept on purpose: matching is by substring, so "port?"
    still matches the keyword "port" one way or the other.
    """
    return [t for t in text.lower().split() if len(t) >= MIN_QUERY_TOKEN_LEN]


def keyword_matches(keyword: str, query_tokens: list[str]) -> bool:
    """True if the keyword contains a query token or a query token contains it."""
    return any(q in keyword or keyword in q for q in query_tokens)


def tokenize_document(text: str) -> list[str]:
    """Tokenize a document body for keyword extraction: strip punctuation and stopwords."""
    text = text.lower()
    text = re.sub(r"[^\w\s]", " ", text)
    return [
        t
        for t in text.split()
        if t not in STOPWORDS and len(t) >= MIN_QUERY_TOKEN_LEN and not t.isdigit()
    ]
