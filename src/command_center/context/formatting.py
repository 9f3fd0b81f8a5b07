"""Rendering helpers for context lines."""

from __future__ import annotations

import json

from command_center.config.constants import ETA_FORECAST_TAIL, PLACEHOLDER
from command_center.models.records import (
    EtaTableRow,
    FixtureRecord,
    NewsArticle,
    Shipment,
)


def fmt(value) -> str:
    """Render a scalar, or the placeholder when it is absent."""
    if value is None or value == "":
        return PLACEHOLDER
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compact_json(data) -> str:
    if isinstance(data, FixtureRecord):
        data = data.to_json_dict()
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def shipment_summary(shipment: Shipment) -> dict:
    forecast = shipment.eta_forecast_timeseries or []
    return {
        "id": shipment.id,
        "shipment_no": shipment.shipment_no or PLACEHOLDER,
        "origin_entity_id": shipment.origin_entity_id or PLACEHOLDER,
        "destination_entity_id": shipment.destination_entity_id or PLACEHOLDER,
        "status": shipment.status or PLACEHOLDER,
        "planned_arrival": shipment.planned_arrival or PLACEHOLDER,
        "predicted_arrival": shipment.predicted_arrival or PLACEHOLDER,
        "path_segment_ids": shipment.path_segment_ids,
        "eta_forecast_timeseries": [
            p.to_json_dict() for p in forecast[-ETA_FORECAST_TAIL:]
        ],
    }


def in_transit_line(shipment: Shipment) -> str:
    return (
        f"- {shipment.id} {shipment.shipment_no or ''} status={fmt(shipment.status)} "
        f"predicted_arrival={fmt(shipment.predicted_arrival)} "
        f"origin={fmt(shipment.origin_entity_id)} dest={fmt(shipment.destination_entity_id)}"
    )


def risk_row_line(rank: int, row: EtaTableRow) -> str:
    drivers = ", ".join(row.top_drivers or [])
    return (
        f"{rank}. {row.shipment_id} {row.shipment_no or ''} "
        f"risk_score={fmt(row.risk_score)} "
        f"predicted_delay_days={fmt(row.predicted_delay_days)} "
        f"status={fmt(row.status)} origin={fmt(row.origin)} dest={fmt(row.destination)} "
        f"top_drivers=[{drivers}]"
    )


def news_line(article: NewsArticle) -> str:
    return f"- [{article.id}] {article.title} {article.summary or ''}".rstrip()
