"""Tests for context assembly."""

from __future__ import annotations

import json

import pytest

from command_center.context.builder import ContextBuilder
from command_center.exceptions import FixtureError
from command_center.models.domain import ContextQuery, RetrievedDocument

SECTION_ORDER = [
    "header",
    "selected_entity",
    "selected_item",
    "selected_scenario",
    "mentioned_shipments",
    "in_transit",
    "risk_ranking",
    "news",
    "documents",
]


def _query(**kwargs) -> ContextQuery:
    return ContextQuery(tab_id=kwargs.pop("tab_id", 1), role=kwargs.pop("role", "dispatcher"), **kwargs)


def _lines(text: str) -> list[str]:
    return text.split("\n")


async def test_header_always_first(context_builder):
    text = await context_builder.build(_query(tab_id=2, role="planner"))
    assert text.startswith("Current tab: 2. User role: planner.")


async def test_all_sections_in_fixed_order(context_builder):
    block = await context_builder.assemble(
        _query(
            selected_entity_id="WH_DUI",
            selected_item_id="PRD_001",
            selected_scenario_id="SCN_SUEZ",
            last_message="Why is SHP_2000 delayed at the port?",
        )
    )
    assert block.section_names == SECTION_ORDER


async def test_absent_selections_are_skipped_not_reordered(context_builder):
    block = await context_builder.assemble(
        _query(selected_scenario_id="SCN_SUEZ", last_message="port")
    )
    assert block.section_names == [
        "header",
        "selected_scenario",
        "in_transit",
        "risk_ranking",
        "news",
        "documents",
    ]


async def test_sections_joined_by_blank_lines(context_builder):
    text = await context_builder.build(_query(selected_entity_id="PORT_SHA"))
    header, entity = text.split("\n\n")[:2]
    assert header == "Current tab: 1. User role: dispatcher."
    assert entity.startswith('Selected entity: {"id":"PORT_SHA"')


async def test_unknown_selection_omitted(context_builder):
    block = await context_builder.assemble(
        _query(
            selected_entity_id="NOPE",
            selected_item_id="NOPE",
            selected_scenario_id="NOPE",
        )
    )
    assert "selected_entity" not in block.section_names
    assert "selected_item" not in block.section_names
    assert "selected_scenario" not in block.section_names


async def test_item_tree_summary(context_builder):
    text = await context_builder.build(_query(selected_item_id="PRD_001"))
    assert "Tree nodes (summary): 3 nodes, 2 edges." in text
    assert "Selected item: " in text


async def test_mentioned_shipment_summary(context_builder):
    text = await context_builder.build(_query(last_message="Why is shp_2000 delayed?"))
    lines = [line for line in _lines(text) if line.startswith("Shipment SHP_2000:")]
    assert len(lines) == 1
    # Only the three most recent forecast points, oldest first
    assert '"as_of":"2025-01-03T00:00:00Z"' in lines[0]
    assert '"as_of":"2025-01-05T00:00:00Z"' in lines[0]
    assert '"as_of":"2025-01-02T00:00:00Z"' not in lines[0]
    assert lines[0].index("2025-01-03") < lines[0].index("2025-01-05")


async def test_mentioned_shipments_capped(context_builder):
    message = " ".join(f"SHP_{n}" for n in range(2000, 2007))
    text = await context_builder.build(_query(last_message=message))
    mentioned = [line for line in _lines(text) if line.startswith("Shipment SHP_")]
    assert len(mentioned) == 5


async def test_unknown_mentioned_shipment_skipped(context_builder):
    text = await context_builder.build(_query(last_message="SHP_9999 and SHP_2001"))
    assert "Shipment SHP_9999:" not in text
    assert "Shipment SHP_2001:" in text


async def test_in_transit_sample(context_builder, settings):
    text = await context_builder.build(_query())
    assert "Recent in-transit shipments (sample):" in text
    assert "- SHP_2000 SN-2000 status=in_transit predicted_arrival=2025-02-14T00:00:00Z" in text
    assert "predicted_arrival=—" in text
    assert "SHP_2100" not in text


async def test_risk_ranking_rows(context_builder):
    text = await context_builder.build(_query())
    assert (
        "1. SHP_2000 SN-2000 risk_score=0.87 predicted_delay_days=4 status=in_transit "
        "origin=FAC_SZX dest=WH_DUI top_drivers=[port_congestion, weather]"
    ) in text
    assert "2. SHP_2001 SN-2001 risk_score=— predicted_delay_days=—" in text


async def test_news_filtered_by_tab(context_builder):
    tab1 = await context_builder.build(_query(tab_id=1))
    tab2 = await context_builder.build(_query(tab_id=2))
    assert "- [NEWS_1] Shanghai congestion worsens Queues at a six-month high." in tab1
    assert "NEWS_2" not in tab1
    assert "Relevant news" not in tab2


async def test_documents_only_with_message(context_builder):
    without = await context_builder.assemble(_query())
    with_msg = await context_builder.build(_query(last_message="port congestion"))
    assert "documents" not in without.section_names
    assert "[DOC_PORT]\nPort congestion playbook." in with_msg


async def test_missing_index_degrades_gracefully(context_builder, data_dir):
    (data_dir / "chatbot" / "rag_index.json").unlink()
    block = await context_builder.assemble(_query(last_message="port congestion"))
    assert block.section_names[0] == "header"
    assert "risk_ranking" in block.section_names
    assert "news" in block.section_names
    assert "documents" not in block.section_names


async def test_missing_fixture_files_degrade(context_builder, data_dir):
    (data_dir / "shipments" / "shipments.json").unlink()
    (data_dir / "analytics" / "tab1.json").write_text("{broken")
    block = await context_builder.assemble(_query(last_message="SHP_2000"))
    assert block.section_names == ["header", "news"]


async def test_invalid_shipment_row_keeps_sections(context_builder, data_dir):
    path = data_dir / "shipments" / "shipments.json"
    rows = json.loads(path.read_text())
    rows[-1]["shipment_no"] = 2100
    path.write_text(json.dumps(rows))
    text = await context_builder.build(_query(last_message="Why is SHP_2000 delayed?"))
    assert any(line.startswith("Shipment SHP_2000:") for line in _lines(text))
    assert "Recent in-transit shipments (sample):" in text


class _ExplodingProvider:
    """Every lookup fails except news."""

    def __init__(self, delegate):
        self._delegate = delegate

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise FixtureError(f"{name} unavailable")

        return fail

    async def get_news(self, **kwargs):
        return await self._delegate.get_news(**kwargs)


class _FailingRetriever:
    async def retrieve(self, query: str, top_n: int = 3) -> list[RetrievedDocument]:
        raise RuntimeError("disk on fire")


async def test_section_failures_are_isolated(provider, settings):
    builder = ContextBuilder(
        provider=_ExplodingProvider(provider),
        retriever=_FailingRetriever(),
        settings=settings,
    )
    block = await builder.assemble(
        _query(
            selected_entity_id="PORT_SHA",
            selected_item_id="PRD_001",
            selected_scenario_id="SCN_SUEZ",
            last_message="SHP_2000 port",
        )
    )
    assert block.section_names == ["header", "news"]


@pytest.mark.parametrize("limit", [1, 2])
async def test_display_limits_from_settings(provider, retriever, settings, limit):
    settings = settings.model_copy(update={"in_transit_display_limit": limit, "news_limit": limit})
    builder = ContextBuilder(provider=provider, retriever=retriever, settings=settings)
    block = await builder.assemble(_query())
    in_transit = next(s for s in block.sections if s.name == "in_transit")
    assert len(in_transit.parts) == limit + 1
