"""Metric recording helpers for chat requests."""

from __future__ import annotations

from command_center.observability.logger import get_logger

logger = get_logger("metrics")


def log_retrieval_metrics(
    query_tokens: int,
    index_size: int,
    matched: int,
    returned: int,
) -> None:
    logger.info(
        "retrieval_metrics",
        query_tokens=query_tokens,
        index_size=index_size,
        matched=matched,
        returned=returned,
    )


def log_context_metrics(
    emitted: list[str],
    omitted: list[str],
    context_chars: int,
) -> None:
    logger.info(
        "context_metrics",
        emitted=emitted,
        omitted=omitted,
        context_chars=context_chars,
    )


def log_chat_trace(
    trace_id: str,
    spans: list[dict],
    fragments: int,
    response_chars: int,
    outcome: str,
) -> None:
    logger.info(
        "chat_trace",
        trace_id=trace_id,
        spans=spans,
        fragments=fragments,
        response_chars=response_chars,
        outcome=outcome,
    )
