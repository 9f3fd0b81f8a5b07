"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from command_center.api.errors import register_error_handlers
from command_center.api.middleware import RequestTimingMiddleware
from command_center.api.routes_chat import router as chat_router
from command_center.api.routes_data import router as data_router
from command_center.api.routes_health import router as health_router
from command_center.chat.session import ChatSessionHandler
from command_center.config.settings import Settings
from command_center.context.builder import ContextBuilder
from command_center.generation.factory import build_completion_provider
from command_center.observability.logger import get_logger, setup_logging
from command_center.protocols.llm import CompletionProvider
from command_center.providers.fixture_provider import FixtureDataProvider
from command_center.retrieval.keyword_retriever import KeywordRetriever
from command_center.storage.fixture_store import FixtureStore

logger = get_logger("app")

ProviderFactory = Callable[[Settings], CompletionProvider | None]


def create_app(
    settings: Settings | None = None,
    completion_provider_factory: ProviderFactory = build_completion_provider,
) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()

        # Storage and query service: stateless, shared by all requests
        fixture_store = FixtureStore(settings.data_dir)
        data_provider = FixtureDataProvider(fixture_store)

        # Retrieval and context assembly
        retriever = KeywordRetriever(fixture_store, max_chars=settings.rag_doc_max_chars)
        context_builder = ContextBuilder(
            provider=data_provider,
            retriever=retriever,
            settings=settings,
        )

        # Completion service; None when no credential is configured
        llm = completion_provider_factory(settings)
        chat_handler = ChatSessionHandler(
            llm=llm,
            context_builder=context_builder,
            provider=data_provider,
        )

        app.state.settings = settings
        app.state.fixture_store = fixture_store
        app.state.data_provider = data_provider
        app.state.chat_handler = chat_handler

        logger.info(
            "startup_complete",
            data_dir=str(fixture_store.root),
            data_available=fixture_store.root.is_dir(),
            chat_enabled=chat_handler.enabled,
            llm_provider=settings.llm_provider,
        )
        if llm is None:
            logger.warning("chat_disabled", reason="completion credential not configured")

        yield

        logger.info("shutdown_complete")

    app = FastAPI(
        title="Supply Chain Command Center",
        version="1.0.0",
        description="Read-only supply chain data API with a context-grounded chat assistant",
        lifespan=lifespan,
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(data_router, tags=["data"])
    app.include_router(chat_router, tags=["chat"])
    return app
