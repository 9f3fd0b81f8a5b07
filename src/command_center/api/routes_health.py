"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from command_center.api.dependencies import get_chat_handler, get_fixture_store
from command_center.chat.session import ChatSessionHandler
from command_center.models.schemas import HealthResponse
from command_center.storage.fixture_store import FixtureStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    store: FixtureStore = Depends(get_fixture_store),
    handler: ChatSessionHandler = Depends(get_chat_handler),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        chat_enabled=handler.enabled,
        data_available=store.root.is_dir(),
    )
