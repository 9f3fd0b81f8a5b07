"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from command_center.config.settings import Settings
from command_center.context.builder import ContextBuilder
from command_center.exceptions import CompletionError
from command_center.generation.streaming import FragmentStream
from command_center.providers.fixture_provider import FixtureDataProvider
from command_center.retrieval.keyword_retriever import KeywordRetriever
from command_center.storage.fixture_store import FixtureStore


def _shipment(n: int, status: str = "in_transit", **extra) -> dict:
    return {
        "id": f"SHP_{n}",
        "shipment_no": f"SN-{n}",
        "origin_entity_id": "PORT_SHA",
        "destination_entity_id": "WH_DUI",
        "path_segment_ids": ["SEG_1", "SEG_2"],
        "status": status,
        "planned_arrival": "2025-02-10T00:00:00Z",
        **extra,
    }


FORECAST = [
    {"as_of": f"2025-01-0{i}T00:00:00Z", "eta": f"2025-02-1{i}T00:00:00Z", "expected_delay_hours": i}
    for i in range(1, 6)
]

FIXTURES = {
    "entities/ports.json": [
        {"id": "PORT_SHA", "type": "port", "name": "Port of Shanghai", "region": "APAC"},
        {"id": "PORT_RTM", "type": "port", "name": "Port of Rotterdam", "region": "EMEA"},
    ],
    "entities/airports.json": [
        {"id": "APT_FRA", "type": "airport", "name": "Frankfurt Airport", "region": "EMEA"}
    ],
    "entities/warehouses.json": [
        {"id": "WH_DUI", "type": "warehouse", "name": "Duisburg DC", "region": "EMEA"}
    ],
    "entities/factories.json": [
        {"id": "FAC_SZX", "type": "factory", "name": "Shenzhen Assembly", "region": "APAC"}
    ],
    "vehicles/ships.json": [{"id": "SHIP_1", "type": "ship", "status": "underway"}],
    "vehicles/flights.json": [{"id": "FLT_1", "type": "flight", "status": "scheduled"}],
    "vehicles/trucks.json": [{"id": "TRK_1", "type": "truck", "status": "underway"}],
    "routes/segments.json": [
        {"id": "SEG_1", "from_id": "FAC_SZX", "to_id": "PORT_SHA", "mode": "road"},
        {"id": "SEG_2", "from_id": "PORT_SHA", "to_id": "WH_DUI", "mode": "sea"},
    ],
    "shipments/shipments.json": [
        _shipment(
            2000,
            predicted_arrival="2025-02-14T00:00:00Z",
            eta_forecast_timeseries=FORECAST,
        ),
        *[_shipment(n) for n in range(2001, 2007)],
        _shipment(2100, status="delivered"),
    ],
    "items/products.json": [{"id": "PRD_001", "type": "product", "name": "Smart Speaker"}],
    "items/materials.json": [{"id": "MAT_001", "type": "material", "name": "Lithium Cell"}],
    "trees/PRD_001.json": {
        "item": {"id": "PRD_001", "type": "product", "name": "Smart Speaker"},
        "nodes": [{"id": "N1"}, {"id": "N2"}, {"id": "N3"}],
        "edges": [{"id": "E1"}, {"id": "E2"}],
    },
    "analytics/tab1.json": {
        "kpis": {"on_time_rate": 0.81},
        "shipment_eta_table": [
            {
                "shipment_id": "SHP_2000",
                "shipment_no": "SN-2000",
                "origin": "FAC_SZX",
                "destination": "WH_DUI",
                "status": "in_transit",
                "predicted_delay_days": 4.0,
                "risk_score": 0.87,
                "top_drivers": ["port_congestion", "weather"],
            },
            {
                "shipment_id": "SHP_2001",
                "shipment_no": "SN-2001",
                "origin": "PORT_SHA",
                "destination": "WH_DUI",
                "status": "in_transit",
            },
        ],
    },
    "analytics/tab3.json": {
        "predefined_scenarios": [
            {"id": "SCN_SUEZ", "name": "Suez closure", "description": "Canal closed"},
        ]
    },
    "news/news.json": {
        "sources": [{"id": "SRC_1", "name": "Freight Daily"}],
        "articles": [
            {
                "id": "NEWS_1",
                "language": "en",
                "title": "Shanghai congestion worsens",
                "summary": "Queues at a six-month high.",
                "published_at": "2025-01-09T10:00:00Z",
                "tags": ["congestion"],
                "tab_relevance": [1, 3],
            },
            {
                "id": "NEWS_2",
                "language": "de",
                "title": "Streik in Rotterdam",
                "title_en": "Strike in Rotterdam",
                "published_at": "2025-01-08T10:00:00Z",
                "tags": ["labour"],
                "tab_relevance": [3],
            },
        ],
    },
    "weather/weather.json": {"alerts": [{"id": "WX_1", "type": "typhoon"}]},
    "config/app_config.json": {"app_name": "Command Center", "roles": ["dispatcher"]},
    "config/news_sources.json": [{"id": "SRC_1", "name": "Freight Daily"}],
    "chatbot/topics.json": {"topics": ["Which shipments are most at risk?"]},
    "chatbot/policies.json": {
        "out_of_scope_policy": "I only answer supply chain questions.",
        "scope": {"in_scope": ["shipments", "delays"]},
    },
    "chatbot/rag_index.json": {
        "docs": [
            {"doc_id": "DOC_PORT", "filename": "port.md", "keywords": ["port", "congestion"]},
            {"doc_id": "DOC_ESC", "filename": "escalation.md", "keywords": ["escalation", "delay"]},
            {"doc_id": "DOC_XY", "filename": "xy.md", "keywords": ["xy"]},
            {"doc_id": "DOC_GONE", "filename": "missing.md", "keywords": ["missing"]},
        ]
    },
}

DOCS = {
    "port.md": "Port congestion playbook. " * 200,
    "escalation.md": "Escalate delays above five days.",
    "xy.md": "Two letter keyword document.",
}


def write_fixtures(root: Path) -> Path:
    for relpath, data in FIXTURES.items():
        path = root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
    docs_dir = root / "chatbot" / "rag_docs"
    docs_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in DOCS.items():
        (docs_dir / filename).write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def data_dir(tmp_path):
    """A complete fixture tree in a temp directory."""
    return write_fixtures(tmp_path / "data")


@pytest.fixture
def settings(data_dir):
    return Settings(openai_api_key="test-key", data_dir=str(data_dir))


@pytest.fixture
def store(data_dir):
    return FixtureStore(data_dir)


@pytest.fixture
def provider(store):
    return FixtureDataProvider(store)


@pytest.fixture
def retriever(store):
    return KeywordRetriever(store, max_chars=3000)


@pytest.fixture
def context_builder(provider, retriever, settings):
    return ContextBuilder(provider=provider, retriever=retriever, settings=settings)


class FakeCompletionProvider:
    """Streams canned fragments and records every call."""

    def __init__(
        self,
        fragments: list[str] | None = None,
        fail_on_open: bool = False,
        fail_after: int | None = None,
    ) -> None:
        self.fragments = fragments if fragments is not None else ["Hello", ", ", "world", "."]
        self.fail_on_open = fail_on_open
        self.fail_after = fail_after
        self.calls: list[list[dict]] = []
        self.closed = False

    async def stream_chat(self, messages: list[dict]):
        self.calls.append(messages)
        if self.fail_on_open:
            raise CompletionError("quota exceeded")
        return FragmentStream(self._fragments(), extract=str, close=self._close, source="fake")

    async def _fragments(self):
        for i, fragment in enumerate(self.fragments):
            if self.fail_after is not None and i >= self.fail_after:
                raise CompletionError("connection reset")
            yield fragment

    async def _close(self):
        self.closed = True


@pytest.fixture
def fake_llm():
    return FakeCompletionProvider()


@pytest.fixture
def make_llm():
    return FakeCompletionProvider
