"""Seed a small demo fixture tree for local development."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from command_center.config.constants import (
    ANALYTICS_TAB1_FILE,
    ANALYTICS_TAB3_FILE,
    APP_CONFIG_FILE,
    CHATBOT_TOPICS_FILE,
    DOCS_DIR,
    ENTITY_FILES,
    ITEM_FILES,
    NEWS_FILE,
    NEWS_SOURCES_FILE,
    POLICIES_FILE,
    SEGMENTS_FILE,
    SHIPMENTS_FILE,
    TREES_DIR,
    VEHICLE_FILES,
    WEATHER_FILE,
)
from command_center.config.settings import Settings

ENTITIES = {
    "port": [
        {"id": "PORT_SHA", "type": "port", "name": "Port of Shanghai", "city": "Shanghai",
         "country": "CN", "region": "APAC", "lat": 31.23, "lon": 121.47,
         "status": "congested", "last_updated": "2025-01-10T08:00:00Z"},
        {"id": "PORT_RTM", "type": "port", "name": "Port of Rotterdam", "city": "Rotterdam",
         "country": "NL", "region": "EMEA", "lat": 51.95, "lon": 4.14,
         "status": "normal", "last_updated": "2025-01-10T08:00:00Z"},
    ],
    "airport": [
        {"id": "APT_FRA", "type": "airport", "name": "Frankfurt Airport", "city": "Frankfurt",
         "country": "DE", "region": "EMEA", "lat": 50.04, "lon": 8.56,
         "status": "normal", "last_updated": "2025-01-10T08:00:00Z"},
    ],
    "warehouse": [
        {"id": "WH_DUI", "type": "warehouse", "name": "Duisburg DC", "city": "Duisburg",
         "country": "DE", "region": "EMEA", "lat": 51.43, "lon": 6.76,
         "status": "normal", "last_updated": "2025-01-10T08:00:00Z"},
    ],
    "factory": [
        {"id": "FAC_SZX", "type": "factory", "name": "Shenzhen Assembly", "city": "Shenzhen",
         "country": "CN", "region": "APAC", "lat": 22.54, "lon": 114.06,
         "status": "normal", "last_updated": "2025-01-10T08:00:00Z"},
    ],
}

VEHICLES = {
    "ship": [{"id": "SHIP_001", "type": "ship", "name": "MV Evergreen Star", "status": "underway",
              "current_segment_id": "SEG_SHA_RTM", "segment_progress": 0.4, "lat": 5.1,
              "lon": 80.2, "last_updated": "2025-01-10T08:00:00Z"}],
    "flight": [{"id": "FLT_LH8400", "type": "flight", "name": "LH8400", "status": "scheduled",
                "lat": 22.3, "lon": 113.9, "last_updated": "2025-01-10T08:00:00Z"}],
    "truck": [{"id": "TRK_042", "type": "truck", "status": "underway",
               "current_segment_id": "SEG_RTM_DUI", "segment_progress": 0.7, "lat": 51.6,
               "lon": 5.9, "last_updated": "2025-01-10T08:00:00Z"}],
}

SEGMENTS = [
    {"id": "SEG_SZX_SHA", "from_id": "FAC_SZX", "to_id": "PORT_SHA", "mode": "road",
     "distance_km": 1400, "geometry": [[114.06, 22.54], [121.47, 31.23]], "avg_transit_days": 2,
     "cost_usd_per_ton": 40, "volume_tons_per_week": 900, "delay_days_current": 0,
     "status": "normal"},
    {"id": "SEG_SHA_RTM", "from_id": "PORT_SHA", "to_id": "PORT_RTM", "mode": "sea",
     "distance_km": 19500, "geometry": [[121.47, 31.23], [4.14, 51.95]], "avg_transit_days": 32,
     "cost_usd_per_ton": 95, "volume_tons_per_week": 12000, "delay_days_current": 3,
     "status": "delayed"},
    {"id": "SEG_RTM_DUI", "from_id": "PORT_RTM", "to_id": "WH_DUI", "mode": "road",
     "distance_km": 230, "geometry": [[4.14, 51.95], [6.76, 51.43]], "avg_transit_days": 1,
     "cost_usd_per_ton": 22, "volume_tons_per_week": 3000, "delay_days_current": 0,
     "status": "normal"},
]


def _forecast(n: int) -> list[dict]:
    return [
        {"as_of": f"2025-01-0{i + 1}T00:00:00Z", "eta": f"2025-02-{10 + i}T00:00:00Z",
         "ci_low": f"2025-02-{9 + i}T00:00:00Z", "ci_high": f"2025-02-{12 + i}T00:00:00Z",
         "expected_delay_hours": 12 * i, "top_drivers": ["port_congestion"]}
        for i in range(n)
    ]


SHIPMENTS = [
    {"id": "SHP_2000", "shipment_no": "SN-2000", "origin_entity_id": "FAC_SZX",
     "destination_entity_id": "WH_DUI",
     "path_segment_ids": ["SEG_SZX_SHA", "SEG_SHA_RTM", "SEG_RTM_DUI"],
     "status": "in_transit", "planned_arrival": "2025-02-10T00:00:00Z",
     "predicted_arrival": "2025-02-14T00:00:00Z", "eta_forecast_timeseries": _forecast(5)},
    {"id": "SHP_2001", "shipment_no": "SN-2001", "origin_entity_id": "PORT_SHA",
     "destination_entity_id": "PORT_RTM", "path_segment_ids": ["SEG_SHA_RTM"],
     "status": "in_transit", "planned_arrival": "2025-02-08T00:00:00Z"},
    {"id": "SHP_2002", "shipment_no": "SN-2002", "origin_entity_id": "PORT_RTM",
     "destination_entity_id": "WH_DUI", "path_segment_ids": ["SEG_RTM_DUI"],
     "status": "delivered", "planned_arrival": "2025-01-05T00:00:00Z",
     "predicted_arrival": "2025-01-05T00:00:00Z"},
]

ITEMS = {
    "product": [{"id": "PRD_001", "type": "product", "name": "Smart Speaker",
                 "category": "electronics", "unit": "pcs", "active": True}],
    "material": [{"id": "MAT_001", "type": "material", "name": "Lithium Cell",
                  "category": "battery", "unit": "kg", "active": True}],
}

TREE = {
    "item": ITEMS["product"][0],
    "nodes": [
        {"id": "N1", "entity_id": "FAC_SZX", "name": "Shenzhen Assembly", "node_type": "factory",
         "lat": 22.54, "lon": 114.06, "metrics": {"dwell_avg_days": 1.5}},
        {"id": "N2", "entity_id": "PORT_SHA", "name": "Port of Shanghai", "node_type": "port",
         "lat": 31.23, "lon": 121.47, "metrics": {"dwell_avg_days": 3.2}},
        {"id": "N3", "entity_id": "WH_DUI", "name": "Duisburg DC", "node_type": "warehouse",
         "lat": 51.43, "lon": 6.76, "metrics": {"dwell_avg_days": 2.0}},
    ],
    "edges": [
        {"id": "E1", "from_node_id": "N1", "to_node_id": "N2",
         "underlying_segment_ids": ["SEG_SZX_SHA"], "geometry": [], "metrics": {"avg_days": 2}},
        {"id": "E2", "from_node_id": "N2", "to_node_id": "N3",
         "underlying_segment_ids": ["SEG_SHA_RTM", "SEG_RTM_DUI"], "geometry": [],
         "metrics": {"avg_days": 33}},
    ],
    "metric_options": [{"id": "dwell_avg_days", "label": "Average dwell (days)"}],
}

ANALYTICS_TAB1 = {
    "kpis": {"on_time_rate": 0.81, "shipments_in_transit": 2, "avg_delay_days": 1.7},
    "shipment_eta_table": [
        {"shipment_id": "SHP_2000", "shipment_no": "SN-2000", "origin": "FAC_SZX",
         "destination": "WH_DUI", "status": "in_transit", "predicted_delay_days": 4,
         "risk_score": 0.87, "top_drivers": ["port_congestion", "weather"]},
        {"shipment_id": "SHP_2001", "shipment_no": "SN-2001", "origin": "PORT_SHA",
         "destination": "PORT_RTM", "status": "in_transit"},
    ],
}

ANALYTICS_TAB3 = {
    "predefined_scenarios": [
        {"id": "SCN_SUEZ", "name": "Suez closure",
         "description": "Suez Canal closed for two weeks; sea legs reroute via the Cape.",
         "effects": [{"segment_id": "SEG_SHA_RTM", "delay_days": 10}]},
        {"id": "SCN_STRIKE", "name": "Rotterdam strike",
         "description": "Port labour action halves capacity.",
         "effects": [{"segment_id": "SEG_RTM_DUI", "capacity_factor": 0.5}]},
    ],
}

NEWS = {
    "sources": [{"id": "SRC_1", "name": "Freight Daily", "language": "en", "region": "global"}],
    "articles": [
        {"id": "NEWS_1", "language": "en", "title": "Shanghai port congestion worsens",
         "source": "Freight Daily", "source_id": "SRC_1", "url": "https://example.com/1",
         "published_at": "2025-01-09T10:00:00Z",
         "summary": "Vessel queues at Shanghai reach a six-month high.",
         "tags": ["congestion", "port"], "severity": 3, "related_entities": ["PORT_SHA"],
         "related_items": [], "tab_relevance": [1, 3]},
        {"id": "NEWS_2", "language": "de", "title": "Streik im Hafen Rotterdam angekündigt",
         "title_en": "Strike announced at the port of Rotterdam", "source": "Freight Daily",
         "source_id": "SRC_1", "url": "https://example.com/2",
         "published_at": "2025-01-08T10:00:00Z", "summary": "Gewerkschaften kündigen Streik an.",
         "summary_en": "Unions announce a strike.", "tags": ["labour"], "severity": 2,
         "related_entities": ["PORT_RTM"], "related_items": [], "tab_relevance": [3]},
    ],
}

WEATHER = {"alerts": [{"id": "WX_1", "region": "APAC", "type": "typhoon", "severity": 4,
                       "affected_entities": ["PORT_SHA"]}]}

APP_CONFIG = {
    "app_name": "Supply Chain Command Center",
    "roles": ["dispatcher", "planner", "executive"],
    "default_role": "dispatcher",
    "refresh": {"vehicles_seconds": 30, "news_seconds": 300, "analytics_seconds": 600},
    "map": {"cluster_markers_default": True,
            "default_view": {"lat": 30.0, "lon": 60.0, "zoom": 2}},
}

NEWS_SOURCES = [{"id": "SRC_1", "name": "Freight Daily", "language": "en", "region": "global"}]

TOPICS = {"topics": ["Which shipments are most at risk?", "Why is SHP_2000 delayed?",
                     "What is the impact of the Suez closure scenario?"]}

POLICIES = {
    "out_of_scope_policy": "I can only help with supply chain operations for this dashboard.",
    "scope": {"in_scope": ["shipments", "carriers", "facilities", "delays", "congestion",
                           "scenarios", "news", "weather"]},
}

DOCS = {
    "port_congestion.md": """# Port congestion playbook

When vessel queues at a port exceed three days, dispatchers should review in-transit
shipments routed through that port and consider transshipment or air uplift for
high-priority orders. Congestion typically propagates to downstream road legs within
a week.
""",
    "escalation.md": """# Delay escalation policy

Shipments with a predicted delay above five days or a risk score above 0.8 must be
escalated to the planning team. Include the top risk drivers and the latest ETA
forecast when escalating.
""",
}


def _write_json(root: Path, relpath: str, data) -> None:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def seed(root: Path) -> None:
    for entity_type, relpath in ENTITY_FILES.items():
        _write_json(root, relpath, ENTITIES[entity_type])
    for vehicle_type, relpath in VEHICLE_FILES.items():
        _write_json(root, relpath, VEHICLES[vehicle_type])
    for item_type, relpath in ITEM_FILES.items():
        _write_json(root, relpath, ITEMS[item_type])
    _write_json(root, SEGMENTS_FILE, SEGMENTS)
    _write_json(root, SHIPMENTS_FILE, SHIPMENTS)
    _write_json(root, f"{TREES_DIR}/{TREE['item']['id']}.json", TREE)
    _write_json(root, ANALYTICS_TAB1_FILE, ANALYTICS_TAB1)
    _write_json(root, ANALYTICS_TAB3_FILE, ANALYTICS_TAB3)
    _write_json(root, NEWS_FILE, NEWS)
    _write_json(root, WEATHER_FILE, WEATHER)
    _write_json(root, APP_CONFIG_FILE, APP_CONFIG)
    _write_json(root, NEWS_SOURCES_FILE, NEWS_SOURCES)
    _write_json(root, CHATBOT_TOPICS_FILE, TOPICS)
    _write_json(root, POLICIES_FILE, POLICIES)

    docs_dir = root / DOCS_DIR
    docs_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in DOCS.items():
        (docs_dir / filename).write_text(content, encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", default=Settings().data_dir)
    args = parser.parse_args()

    root = Path(args.data_dir)
    seed(root)
    print(f"Seeded demo fixtures into {root}")
    print("Run scripts/rebuild_index.py to build the document index.")


if __name__ == "__main__":
    main()
