"""Tests for keyword tokenization and matching."""

from command_center.keyword_search.tokenizer import (
    keyword_matches,
    tokenize_document,
    tokenize_query,
)


def test_tokenize_query_lowercase():
    assert tokenize_query("Port CONGESTION") == ["port", "congestion"]


def test_tokenize_query_drops_short_tokens():
    assert tokenize_query("is xy at the port") == ["the", "port"]


def test_tokenize_query_splits_on_any_whitespace():
    assert tokenize_query("delay\tnews\nport") == ["delay", "news", "port"]


def test_tokenize_query_empty():
    assert tokenize_query("") == []
    assert tokenize_query("   ") == []


def test_keyword_matches_both_directions():
    assert keyword_matches("port", ["ports"])
    assert keyword_matches("ports", ["port"])


def test_keyword_matches_requires_containment():
    assert not keyword_matches("harbor", ["port", "delay"])
    assert not keyword_matches("port", [])


def test_tokenize_document_strips_punctuation_and_stopwords():
    tokens = tokenize_document("The port, and its congestion! 2025")
    assert tokens == ["port", "congestion"]
