"""Chat endpoint: streamed plain-text answer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from command_center.api.dependencies import get_chat_handler
from command_center.api.errors import error_response
from command_center.chat.session import ChatSessionHandler
from command_center.exceptions import CommandCenterError
from command_center.observability.logger import get_logger

logger = get_logger("routes_chat")

router = APIRouter()


@router.post("/api/chat")
async def chat(
    request: Request,
    handler: ChatSessionHandler = Depends(get_chat_handler),
):
    """Stream raw text fragments with no framing; concatenate to get the answer."""
    body = await request.body()
    try:
        stream = await handler.open(body)
    except CommandCenterError:
        raise
    except Exception as e:
        logger.exception("chat_failed", error=str(e))
        return error_response(500, "Chat failed")

    return StreamingResponse(
        stream,
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
        # Releases the upstream if the client left before streaming began
        background=BackgroundTask(stream.aclose),
    )
