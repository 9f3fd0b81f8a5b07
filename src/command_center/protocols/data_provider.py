"""Protocol for the read-only query service over supply chain data."""

from __future__ import annotations

from typing import Protocol

from command_center.models.records import (
    AnalyticsTab1,
    AnalyticsTab3,
    Entity,
    Item,
    ItemTree,
    NewsResponse,
    Policy,
    Scenario,
    Segment,
    Shipment,
    Vehicle,
)


class DataProvider(Protocol):
    async def get_entities(
        self, types: list[str], regions: list[str] | None = None
    ) -> list[Entity]: ...

    async def get_vehicles(self, types: list[str]) -> list[Vehicle]: ...

    async def get_segments(self) -> list[Segment]: ...

    async def get_shipments(
        self,
        status: str | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> list[Shipment]: ...

    async def get_shipment_by_id(self, shipment_id: str) -> Shipment | None: ...

    async def get_items(self, item_type: str | None = None) -> list[Item]: ...

    async def get_tree(self, item_id: str) -> ItemTree | None: ...

    async def get_analytics_tab1(self) -> AnalyticsTab1: ...

    async def get_analytics_tab3(self) -> AnalyticsTab3: ...

    async def get_analytics_tab3_scenarios(self) -> list[Scenario]: ...

    async def get_news(
        self,
        tab: int | None = None,
        tags: list[str] | None = None,
        q: str | None = None,
        since: str | None = None,
        lang: str | None = None,
    ) -> NewsResponse: ...

    async def get_weather(self) -> dict | list: ...

    async def get_app_config(self) -> dict: ...

    async def get_news_sources(self) -> dict | list: ...

    async def get_chatbot_topics(self) -> dict | list | None: ...

    async def get_policy(self) -> Policy: ...
