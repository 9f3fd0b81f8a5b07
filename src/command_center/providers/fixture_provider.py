"""DataProvider backed by the read-only JSON fixture tree."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError

from command_center.config.constants import (
    ANALYTICS_TAB1_FILE,
    ANALYTICS_TAB3_FILE,
    APP_CONFIG_FILE,
    CHATBOT_TOPICS_FILE,
    DEFAULT_SHIPMENT_LIMIT,
    ENTITY_FILES,
    ITEM_FILES,
    NEWS_FILE,
    NEWS_SOURCES_FILE,
    POLICIES_FILE,
    SAFE_KEY_PATTERN,
    SEGMENTS_FILE,
    SHIPMENTS_FILE,
    TREES_DIR,
    VEHICLE_FILES,
    WEATHER_FILE,
)
from command_center.exceptions import BadRequestError, FixtureError
from command_center.models.records import (
    AnalyticsTab1,
    AnalyticsTab3,
    Entity,
    Item,
    ItemTree,
    NewsArticle,
    NewsResponse,
    Policy,
    Scenario,
    Segment,
    Shipment,
    Vehicle,
)
from command_center.observability.logger import get_logger
from command_center.storage.fixture_store import FixtureStore

logger = get_logger("fixture_provider")


def _parse_timestamp(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class FixtureDataProvider:
    """Query service over static fixtures.

    Holds no mutable state: every call re-reads its fixture file, so one
    instance is created at startup and shared across requests. Lookups by
    id return ``None`` when the record is absent; a missing or corrupt
    fixture file raises ``FixtureError``. Individual records that fail
    validation are skipped and logged so the rest of the file stays usable.
    """

    def __init__(self, store: FixtureStore) -> None:
        self._store = store

    async def _load(self, relpath: str):
        return await asyncio.to_thread(self._store.read_json, relpath)

    async def _load_records(self, relpath: str, model: type[BaseModel]) -> list:
        raw = await self._load(relpath)
        if not isinstance(raw, list):
            raise FixtureError(f"Fixture {relpath} is not a list")
        records = []
        for index, r in enumerate(raw):
            try:
                records.append(model.model_validate(r))
            except ValidationError as e:
                logger.warning(
                    "fixture_record_skipped",
                    path=relpath,
                    index=index,
                    errors=e.error_count(),
                )
        return records

    async def _load_model(self, relpath: str, model: type[BaseModel]):
        raw = await self._load(relpath)
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise FixtureError(f"Invalid fixture {relpath}: {e}") from e

    async def get_entities(
        self, types: list[str], regions: list[str] | None = None
    ) -> list[Entity]:
        entities: list[Entity] = []
        for entity_type, relpath in ENTITY_FILES.items():
            if entity_type in types:
                entities.extend(await self._load_records(relpath, Entity))
        if regions:
            wanted = set(regions)
            entities = [e for e in entities if e.region in wanted]
        return entities

    async def get_vehicles(self, types: list[str]) -> list[Vehicle]:
        vehicles: list[Vehicle] = []
        for vehicle_type, relpath in VEHICLE_FILES.items():
            if vehicle_type in types:
                vehicles.extend(await self._load_records(relpath, Vehicle))
        return vehicles

    async def get_segments(self) -> list[Segment]:
        return await self._load_records(SEGMENTS_FILE, Segment)

    async def get_shipments(
        self,
        status: str | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> list[Shipment]:
        shipments: list[Shipment] = await self._load_records(SHIPMENTS_FILE, Shipment)
        if status:
            shipments = [s for s in shipments if s.status == status]
        if search:
            q = search.lower()
            shipments = [
                s
                for s in shipments
                if any(
                    q in (field or "").lower()
                    for field in (
                        s.shipment_no,
                        s.id,
                        s.origin_entity_id,
                        s.destination_entity_id,
                    )
                )
            ]
        return shipments[: limit if limit is not None else DEFAULT_SHIPMENT_LIMIT]

    async def get_shipment_by_id(self, shipment_id: str) -> Shipment | None:
        shipments: list[Shipment] = await self._load_records(SHIPMENTS_FILE, Shipment)
        return next((s for s in shipments if s.id == shipment_id), None)

    async def get_items(self, item_type: str | None = None) -> list[Item]:
        if item_type is not None:
            return await self._load_records(ITEM_FILES[item_type], Item)
        items: list[Item] = []
        for relpath in ITEM_FILES.values():
            items.extend(await self._load_records(relpath, Item))
        return items

    async def get_tree(self, item_id: str) -> ItemTree | None:
        if not SAFE_KEY_PATTERN.match(item_id) or item_id.startswith("."):
            return None
        raw = await asyncio.to_thread(
            self._store.read_json_safe, f"{TREES_DIR}/{item_id}.json"
        )
        if raw is None:
            return None
        try:
            return ItemTree.model_validate(raw)
        except ValidationError as e:
            logger.warning("tree_invalid", item_id=item_id, error=str(e))
            return None

    async def get_analytics_tab1(self) -> AnalyticsTab1:
        return await self._load_model(ANALYTICS_TAB1_FILE, AnalyticsTab1)

    async def get_analytics_tab3(self) -> AnalyticsTab3:
        return await self._load_model(ANALYTICS_TAB3_FILE, AnalyticsTab3)

    async def get_analytics_tab3_scenarios(self) -> list[Scenario]:
        tab3 = await self.get_analytics_tab3()
        return tab3.predefined_scenarios

    async def get_news(
        self,
        tab: int | None = None,
        tags: list[str] | None = None,
        q: str | None = None,
        since: str | None = None,
        lang: str | None = None,
    ) -> NewsResponse:
        news: NewsResponse = await self._load_model(NEWS_FILE, NewsResponse)
        articles = news.articles
        if tab is not None:
            articles = [a for a in articles if tab in (a.tab_relevance or [])]
        if tags:
            wanted = set(tags)
            articles = [a for a in articles if wanted.intersection(a.tags)]
        if q:
            needle = q.lower()
            articles = [a for a in articles if _article_matches(a, needle)]
        if since:
            try:
                cutoff = _parse_timestamp(since)
            except ValueError as e:
                raise BadRequestError(f"Invalid 'since' timestamp: {since}") from e
            articles = [a for a in articles if _published_after(a, cutoff)]
        if lang:
            articles = [a for a in articles if a.language == lang]
        return news.model_copy(update={"articles": articles})

    async def get_weather(self) -> dict | list:
        return await self._load(WEATHER_FILE)

    async def get_app_config(self) -> dict:
        return await self._load(APP_CONFIG_FILE)

    async def get_news_sources(self) -> dict | list:
        return await self._load(NEWS_SOURCES_FILE)

    async def get_chatbot_topics(self) -> dict | list | None:
        return await asyncio.to_thread(self._store.read_json_safe, CHATBOT_TOPICS_FILE)

    async def get_policy(self) -> Policy:
        raw = await asyncio.to_thread(self._store.read_json_safe, POLICIES_FILE)
        try:
            return Policy.from_fixture(raw)
        except (TypeError, ValueError) as e:
            logger.warning("policy_invalid", path=POLICIES_FILE, error=str(e))
            return Policy()


def _article_matches(article: NewsArticle, needle: str) -> bool:
    fields = (article.title, article.summary, article.title_en, article.summary_en)
    return any(needle in f.lower() for f in fields if f)


def _published_after(article: NewsArticle, cutoff: datetime) -> bool:
    if not article.published_at:
        return False
    try:
        return _parse_timestamp(article.published_at) >= cutoff
    except ValueError:
        return False
