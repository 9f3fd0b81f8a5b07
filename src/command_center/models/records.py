"""Fixture record types.

Fixture JSON is loosely shaped: every field the code reads is declared
here as optional, and unknown keys are kept (``extra="allow"``) so that
records round-trip to the browser unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FixtureRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class Entity(FixtureRecord):
    id: str
    type: str | None = None
    name: str | None = None
    city: str | None = None
    country: str | None = None
    region: str | None = None
    lat: float | None = None
    lon: float | None = None
    status: str | None = None
    last_updated: str | None = None


class Vehicle(FixtureRecord):
    id: str
    type: str | None = None
    name: str | None = None
    status: str | None = None
    current_segment_id: str | None = None
    lat: float | None = None
    lon: float | None = None


class Segment(FixtureRecord):
    id: str
    from_id: str | None = None
    to_id: str | None = None
    mode: str | None = None
    status: str | None = None


class EtaForecastPoint(FixtureRecord):
    as_of: str | None = None
    eta: str | None = None
    ci_low: str | None = None
    ci_high: str | None = None
    expected_delay_hours: float | None = None
    top_drivers: list[str] | None = None


class Shipment(FixtureRecord):
    id: str
    shipment_no: str | None = None
    origin_entity_id: str | None = None
    destination_entity_id: str | None = None
    path_segment_ids: list[str] = Field(default_factory=list)
    status: str | None = None
    predicted_arrival: str | None = None
    planned_arrival: str | None = None
    eta_forecast_timeseries: list[EtaForecastPoint] | None = None


class Item(FixtureRecord):
    id: str
    type: str | None = None
    name: str | None = None
    category: str | None = None


class ItemTree(FixtureRecord):
    item: Item
    nodes: list[dict] = Field(default_factory=list)
    edges: list[dict] = Field(default_factory=list)


class Scenario(FixtureRecord):
    id: str
    name: str | None = None
    description: str | None = None


class EtaTableRow(FixtureRecord):
    shipment_id: str
    shipment_no: str | None = None
    origin: str | None = None
    destination: str | None = None
    status: str | None = None
    predicted_arrival: str | None = None
    planned_arrival: str | None = None
    predicted_delay_days: float | None = None
    risk_score: float | None = None
    top_drivers: list[str] | None = None


class AnalyticsTab1(FixtureRecord):
    kpis: dict = Field(default_factory=dict)
    shipment_eta_table: list[EtaTableRow] = Field(default_factory=list)


class AnalyticsTab3(FixtureRecord):
    predefined_scenarios: list[Scenario] = Field(default_factory=list)


class NewsArticle(FixtureRecord):
    id: str
    language: str | None = None
    title: str = ""
    title_en: str | None = None
    summary: str | None = None
    summary_en: str | None = None
    published_at: str | None = None
    tags: list[str] = Field(default_factory=list)
    tab_relevance: list[int] | None = None


class NewsResponse(FixtureRecord):
    sources: list[dict] = Field(default_factory=list)
    articles: list[NewsArticle] = Field(default_factory=list)


class Policy(FixtureRecord):
    out_of_scope_policy: str | None = None
    in_scope: list[str] = Field(default_factory=list)

    @classmethod
    def from_fixture(cls, raw: dict | None) -> Policy:
        if not isinstance(raw, dict):
            return cls()
        scope = raw.get("scope") if isinstance(raw.get("scope"), dict) else {}
        in_scope = scope.get("in_scope")
        if not isinstance(in_scope, list):
            in_scope = []
        return cls(
            out_of_scope_policy=raw.get("out_of_scope_policy")
            if isinstance(raw.get("out_of_scope_policy"), str)
            else None,
            in_scope=[s for s in in_scope if isinstance(s, str)],
        )
