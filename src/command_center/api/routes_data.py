"""Read-only query endpoints backing the dashboard tabs."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ValidationError

from command_center.api.dependencies import get_data_provider
from command_center.config.constants import ENTITY_TYPES, VEHICLE_TYPES
from command_center.exceptions import BadRequestError, NotFoundError
from command_center.models.records import FixtureRecord
from command_center.models.schemas import ItemsQuery, NewsQuery, ShipmentsQuery
from command_center.protocols.data_provider import DataProvider

router = APIRouter(prefix="/api/v1")


def _parse_query(model: type[BaseModel], **params):
    try:
        return model.model_validate({k: v for k, v in params.items() if v is not None})
    except ValidationError as e:
        raise BadRequestError("Bad request") from e


def _split_csv(value: str | None, default: tuple[str, ...]) -> list[str]:
    if not value:
        return list(default)
    return [v.strip() for v in value.split(",") if v.strip()]


def _dump(records: list[FixtureRecord]) -> list[dict]:
    return [r.to_json_dict() for r in records]


@router.get("/entities")
async def list_entities(
    types: str | None = None,
    region: str | None = None,
    provider: DataProvider = Depends(get_data_provider),
):
    entities = await provider.get_entities(
        _split_csv(types, ENTITY_TYPES),
        regions=_split_csv(region, ()) or None,
    )
    return _dump(entities)


@router.get("/vehicles")
async def list_vehicles(
    types: str | None = None,
    provider: DataProvider = Depends(get_data_provider),
):
    return _dump(await provider.get_vehicles(_split_csv(types, VEHICLE_TYPES)))


@router.get("/segments")
async def list_segments(provider: DataProvider = Depends(get_data_provider)):
    return _dump(await provider.get_segments())


@router.get("/shipments")
async def list_shipments(
    status: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    provider: DataProvider = Depends(get_data_provider),
):
    params = _parse_query(ShipmentsQuery, status=status, limit=limit, search=search)
    shipments = await provider.get_shipments(
        status=params.status, limit=params.limit, search=params.search
    )
    return _dump(shipments)


@router.get("/shipments/{shipment_id}")
async def get_shipment(
    shipment_id: str,
    provider: DataProvider = Depends(get_data_provider),
):
    shipment = await provider.get_shipment_by_id(shipment_id)
    if shipment is None:
        raise NotFoundError(shipment_id)
    return shipment.to_json_dict()


@router.get("/items")
async def list_items(
    type: str | None = None,
    provider: DataProvider = Depends(get_data_provider),
):
    params = _parse_query(ItemsQuery, type=type)
    return _dump(await provider.get_items(params.type))


@router.get("/trees/{item_id}")
async def get_tree(
    item_id: str,
    provider: DataProvider = Depends(get_data_provider),
):
    tree = await provider.get_tree(item_id)
    if tree is None:
        raise NotFoundError(item_id)
    return tree.to_json_dict()


@router.get("/analytics/tab1")
async def analytics_tab1(provider: DataProvider = Depends(get_data_provider)):
    return (await provider.get_analytics_tab1()).to_json_dict()


@router.get("/analytics/tab3")
async def analytics_tab3(provider: DataProvider = Depends(get_data_provider)):
    return (await provider.get_analytics_tab3()).to_json_dict()


@router.get("/news")
async def list_news(
    tab: str | None = None,
    tags: str | None = None,
    q: str | None = None,
    since: str | None = None,
    lang: str | None = None,
    provider: DataProvider = Depends(get_data_provider),
):
    params = _parse_query(NewsQuery, tab=tab, tags=tags, q=q, since=since, lang=lang)
    news = await provider.get_news(
        tab=params.tab,
        tags=params.tags,
        q=params.q,
        since=params.since,
        lang=params.lang,
    )
    return news.to_json_dict()


@router.get("/weather")
async def weather(provider: DataProvider = Depends(get_data_provider)):
    return await provider.get_weather()


@router.get("/config/app")
async def app_config(provider: DataProvider = Depends(get_data_provider)):
    return await provider.get_app_config()


@router.get("/config/news-sources")
async def news_sources(provider: DataProvider = Depends(get_data_provider)):
    return await provider.get_news_sources()


@router.get("/chatbot/topics")
async def chatbot_topics(provider: DataProvider = Depends(get_data_provider)):
    topics = await provider.get_chatbot_topics()
    if topics is None:
        raise NotFoundError("topics")
    return topics
