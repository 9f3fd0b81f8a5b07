"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from command_center.chat.session import ChatSessionHandler
from command_center.config.settings import Settings
from command_center.protocols.data_provider import DataProvider
from command_center.storage.fixture_store import FixtureStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_data_provider(request: Request) -> DataProvider:
    return request.app.state.data_provider


def get_fixture_store(request: Request) -> FixtureStore:
    return request.app.state.fixture_store


def get_chat_handler(request: Request) -> ChatSessionHandler:
    return request.app.state.chat_handler
