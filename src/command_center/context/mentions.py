"""Shipment id extraction from free text."""

from __future__ import annotations

from command_center.config.constants import SHIPMENT_ID_PATTERN


def extract_shipment_ids(text: str | None, limit: int | None = None) -> list[str]:
    """Return ``SHP_<digits>`` mentions, uppercased and deduplicated in first-seen order."""
    if not text:
        return []
    seen: dict[str, None] = {}
    for match in SHIPMENT_ID_PATTERN.findall(text):
        seen.setdefault(match.upper(), None)
    ids = list(seen)
    return ids[:limit] if limit is not None else ids
