"""Context assembly for the chat assistant.

Gathers the user's current selection, mentioned shipments, operational
tables, news and reference documents into one bounded block of text.
Each section is fetched independently: a section whose data is missing
or whose lookup fails is left out, and the others are unaffected.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from command_center.config.constants import ENTITY_TYPES
from command_center.config.settings import Settings
from command_center.context.formatting import (
    compact_json,
    in_transit_line,
    news_line,
    risk_row_line,
    shipment_summary,
)
from command_center.context.mentions import extract_shipment_ids
from command_center.models.domain import ContextBlock, ContextQuery, ContextSection
from command_center.observability.logger import get_logger
from command_center.observability.metrics import log_context_metrics
from command_center.protocols.data_provider import DataProvider
from command_center.protocols.retriever import DocumentRetriever

logger = get_logger("context_builder")

SectionFn = Callable[[ContextQuery], Awaitable[list[str]]]


class ContextBuilder:
    def __init__(
        self,
        provider: DataProvider,
        retriever: DocumentRetriever,
        settings: Settings,
    ) -> None:
        self._provider = provider
        self._retriever = retriever
        self._settings = settings
        # Fixed output order.
        self._sections: list[tuple[str, SectionFn]] = [
            ("selected_entity", self._selected_entity),
            ("selected_item", self._selected_item),
            ("selected_scenario", self._selected_scenario),
            ("mentioned_shipments", self._mentioned_shipments),
            ("in_transit", self._in_transit),
            ("risk_ranking", self._risk_ranking),
            ("news", self._news),
            ("documents", self._documents),
        ]

    async def build(self, query: ContextQuery) -> str:
        return (await self.assemble(query)).render()

    async def assemble(self, query: ContextQuery) -> ContextBlock:
        header = ContextSection(
            name="header",
            parts=[f"Current tab: {query.tab_id}. User role: {query.role}."],
        )
        # gather() returns results in submission order, so concurrency
        # never reorders sections.
        results = await asyncio.gather(
            *(self._run(name, fn, query) for name, fn in self._sections)
        )
        sections = [header] + [s for s in results if s.parts]
        block = ContextBlock(sections=sections)

        emitted = block.section_names
        log_context_metrics(
            emitted=emitted,
            omitted=[name for name, _ in self._sections if name not in emitted],
            context_chars=len(block.render()),
        )
        return block

    async def _run(self, name: str, fn: SectionFn, query: ContextQuery) -> ContextSection:
        try:
            parts = await fn(query)
        except Exception as e:
            logger.warning("context_section_failed", section=name, error=str(e))
            parts = []
        return ContextSection(name=name, parts=parts)

    async def _selected_entity(self, query: ContextQuery) -> list[str]:
        if not query.selected_entity_id:
            return []
        entities = await self._provider.get_entities(list(ENTITY_TYPES))
        entity = next((e for e in entities if e.id == query.selected_entity_id), None)
        if entity is None:
            return []
        return [f"Selected entity: {compact_json(entity)}"]

    async def _selected_item(self, query: ContextQuery) -> list[str]:
        if not query.selected_item_id:
            return []
        tree = await self._provider.get_tree(query.selected_item_id)
        if tree is None:
            return []
        return [
            f"Selected item: {compact_json(tree.item)}",
            f"Tree nodes (summary): {len(tree.nodes)} nodes, {len(tree.edges)} edges.",
        ]

    async def _selected_scenario(self, query: ContextQuery) -> list[str]:
        if not query.selected_scenario_id:
            return []
        scenarios = await self._provider.get_analytics_tab3_scenarios()
        scenario = next((s for s in scenarios if s.id == query.selected_scenario_id), None)
        if scenario is None:
            return []
        return [f"Selected scenario: {compact_json(scenario)}"]

    async def _mentioned_shipments(self, query: ContextQuery) -> list[str]:
        ids = extract_shipment_ids(
            query.last_message, limit=self._settings.max_mentioned_shipments
        )
        parts = []
        for shipment_id in ids:
            try:
                shipment = await self._provider.get_shipment_by_id(shipment_id)
            except Exception as e:
                logger.warning("shipment_lookup_failed", shipment_id=shipment_id, error=str(e))
                continue
            if shipment is not None:
                parts.append(
                    f"Shipment {shipment_id}: {compact_json(shipment_summary(shipment))}"
                )
        return parts

    async def _in_transit(self, query: ContextQuery) -> list[str]:
        shipments = await self._provider.get_shipments(
            status="in_transit", limit=self._settings.in_transit_fetch_limit
        )
        if not shipments:
            return []
        return ["Recent in-transit shipments (sample):"] + [
            in_transit_line(s)
            for s in shipments[: self._settings.in_transit_display_limit]
        ]

    async def _risk_ranking(self, query: ContextQuery) -> list[str]:
        tab1 = await self._provider.get_analytics_tab1()
        rows = tab1.shipment_eta_table[: self._settings.risk_table_limit]
        if not rows:
            return []
        return ["Shipments by risk (from analytics, use for 'top N by risk'):"] + [
            risk_row_line(rank, row) for rank, row in enumerate(rows, 1)
        ]

    async def _news(self, query: ContextQuery) -> list[str]:
        news = await self._provider.get_news(tab=query.tab_id)
        articles = news.articles[: self._settings.news_limit]
        if not articles:
            return []
        return [f"Relevant news (top {self._settings.news_limit}):"] + [
            news_line(a) for a in articles
        ]

    async def _documents(self, query: ContextQuery) -> list[str]:
        if not query.last_message:
            return []
        docs = await self._retriever.retrieve(query.last_message, self._settings.rag_top_n)
        if not docs:
            return []
        return ["Reference document snippets:"] + [
            f"[{d.doc_id}]\n{d.content}" for d in docs
        ]
