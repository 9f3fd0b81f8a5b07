"""Fixed domain constants and fixture layout."""

from __future__ import annotations

import re

ENTITY_TYPES = ("port", "airport", "warehouse", "factory")
VEHICLE_TYPES = ("ship", "flight", "truck")
ITEM_TYPES = ("product", "material")

DEFAULT_TAB_ID = 1
DEFAULT_ROLE = "dispatcher"

# Rendered wherever a field is absent so row shapes stay stable.
PLACEHOLDER = "—"

SHIPMENT_ID_PATTERN = re.compile(r"\b(SHP_\d+)\b", re.IGNORECASE)
SAFE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")

DEFAULT_SHIPMENT_LIMIT = 500
MAX_SHIPMENT_LIMIT = 2000
ETA_FORECAST_TAIL = 3
MIN_QUERY_TOKEN_LEN = 3

# Fixture paths, relative to Settings.data_dir
ENTITY_FILES = {
    "port": "entities/ports.json",
    "airport": "entities/airports.json",
    "warehouse": "entities/warehouses.json",
    "factory": "entities/factories.json",
}
VEHICLE_FILES = {
    "ship": "vehicles/ships.json",
    "flight": "vehicles/flights.json",
    "truck": "vehicles/trucks.json",
}
ITEM_FILES = {
    "product": "items/products.json",
    "material": "items/materials.json",
}
SEGMENTS_FILE = "routes/segments.json"
SHIPMENTS_FILE = "shipments/shipments.json"
TREES_DIR = "trees"
ANALYTICS_TAB1_FILE = "analytics/tab1.json"
ANALYTICS_TAB3_FILE = "analytics/tab3.json"
NEWS_FILE = "news/news.json"
WEATHER_FILE = "weather/weather.json"
APP_CONFIG_FILE = "config/app_config.json"
NEWS_SOURCES_FILE = "config/news_sources.json"
CHATBOT_TOPICS_FILE = "chatbot/topics.json"
POLICIES_FILE = "chatbot/policies.json"
DOC_INDEX_FILE = "chatbot/rag_index.json"
DOCS_DIR = "chatbot/rag_docs"

# Used only when building the document index offline.
STOPWORDS = frozenset(
    """
    a about above after again against all also am an and any are as at be because been
    before being below between both but by can could did do does doing down during each
    few for from further had has have having he her here hers him his how i if in into
    is it its itself just may me might more most must my no nor not now of off on once
    only or other our ours out over own same shall she should so some such than that the
    their theirs them then there these they this those through to too under until up
    upon us very was we were what when where which while who whom why will with would
    you your yours
    """.split()
)
