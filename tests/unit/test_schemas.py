"""Tests for chat request parsing."""

import pytest

from command_center.chat.session import parse_chat_request
from command_center.exceptions import BadRequestError
from command_center.models.schemas import ChatRequest, NewsQuery, ShipmentsQuery


def test_defaults_for_empty_object():
    req = parse_chat_request("{}")
    assert req.messages == []
    assert req.tab_id == 1
    assert req.selected_entity_id is None
    assert req.filters == {}
    assert req.role == "dispatcher"
    assert req.last_user_message == ""


def test_camel_case_fields():
    req = parse_chat_request(
        '{"tabId": 2, "selectedEntityId": "PORT_SHA", "selectedItemId": "PRD_001",'
        ' "selectedScenarioId": "SCN_SUEZ", "role": "planner", "filters": {"region": "APAC"}}'
    )
    assert req.tab_id == 2
    assert req.selected_entity_id == "PORT_SHA"
    assert req.selected_item_id == "PRD_001"
    assert req.selected_scenario_id == "SCN_SUEZ"
    assert req.role == "planner"
    assert req.filters == {"region": "APAC"}


def test_wrong_types_fall_back_to_defaults():
    req = parse_chat_request(
        '{"messages": "hi", "tabId": "2", "selectedEntityId": 5, "filters": [], "role": null}'
    )
    assert req.messages == []
    assert req.tab_id == 1
    assert req.selected_entity_id is None
    assert req.filters == {}
    assert req.role == "dispatcher"


def test_out_of_range_tab_defaults():
    assert parse_chat_request('{"tabId": 7}').tab_id == 1
    assert parse_chat_request('{"tabId": 3.0}').tab_id == 3
    assert parse_chat_request('{"tabId": true}').tab_id == 1


def test_non_finite_tab_defaults():
    assert parse_chat_request('{"tabId": 1e400}').tab_id == 1
    assert parse_chat_request('{"tabId": -1e400}').tab_id == 1
    assert parse_chat_request('{"tabId": 2.5}').tab_id == 1


def test_unknown_fields_ignored():
    req = parse_chat_request('{"tabId": 3, "theme": "dark"}')
    assert req.tab_id == 3


def test_last_user_message():
    req = ChatRequest(
        messages=[
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "answer"},
            {"role": "user", "content": "second"},
            {"role": "assistant", "content": "answer 2"},
        ]
    )
    assert req.last_user_message == "second"


def test_no_user_message():
    req = ChatRequest(messages=[{"role": "assistant", "content": "hello"}])
    assert req.last_user_message == ""


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "",
        "[1, 2]",
        '{"messages": [{"role": "robot", "content": "hi"}]}',
        '{"messages": [{"role": "user", "content": 42}]}',
        '{"messages": ["hi"]}',
    ],
)
def test_malformed_bodies_rejected(body):
    with pytest.raises(BadRequestError):
        parse_chat_request(body)


def test_shipments_query_limit_bounds():
    assert ShipmentsQuery.model_validate({"limit": "25"}).limit == 25
    with pytest.raises(ValueError):
        ShipmentsQuery.model_validate({"limit": "0"})
    with pytest.raises(ValueError):
        ShipmentsQuery.model_validate({"limit": "2001"})


def test_news_query_splits_tags():
    assert NewsQuery.model_validate({"tags": "port,labour"}).tags == ["port", "labour"]
    assert NewsQuery.model_validate({"tags": ""}).tags is None
