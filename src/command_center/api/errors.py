"""Map the exception hierarchy onto ``{"error": ...}`` JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from command_center.exceptions import (
    BadRequestError,
    CompletionError,
    ConfigurationError,
    FixtureError,
    NotFoundError,
)
from command_center.observability.logger import get_logger

logger = get_logger("errors")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _bad_request(request: Request, exc: BadRequestError) -> JSONResponse:
    return error_response(400, str(exc) or "Bad request")


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(404, "Not found")


async def _configuration(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.warning("configuration_missing", path=request.url.path, error=str(exc))
    return error_response(503, str(exc))


async def _fixture(request: Request, exc: FixtureError) -> JSONResponse:
    logger.error("fixture_failed", path=request.url.path, error=str(exc))
    return error_response(500, "Internal error")


async def _completion(request: Request, exc: CompletionError) -> JSONResponse:
    logger.error("completion_failed", path=request.url.path, error=str(exc))
    return error_response(500, "Chat failed")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BadRequestError, _bad_request)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ConfigurationError, _configuration)
    app.add_exception_handler(FixtureError, _fixture)
    app.add_exception_handler(CompletionError, _completion)
