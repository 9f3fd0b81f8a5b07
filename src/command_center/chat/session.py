"""Chat session handler: parse, assemble context, relay the completion stream.

Every request is independent. The conversation history lives entirely in
the request body and nothing is kept between requests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from pydantic import ValidationError

from command_center.context.builder import ContextBuilder
from command_center.exceptions import BadRequestError, CompletionError, ConfigurationError
from command_center.generation.prompt_templates import build_messages, build_system_prompt
from command_center.models.domain import ContextQuery
from command_center.models.schemas import ChatRequest
from command_center.observability.logger import get_logger
from command_center.observability.metrics import log_chat_trace
from command_center.observability.tracing import TraceContext
from command_center.protocols.data_provider import DataProvider
from command_center.protocols.llm import CompletionProvider

logger = get_logger("chat_session")


def parse_chat_request(body: bytes | str) -> ChatRequest:
    try:
        return ChatRequest.model_validate_json(body)
    except ValidationError as e:
        raise BadRequestError("Invalid JSON body") from e


class ChatSessionHandler:
    def __init__(
        self,
        llm: CompletionProvider | None,
        context_builder: ContextBuilder,
        provider: DataProvider,
    ) -> None:
        self._llm = llm
        self._context_builder = context_builder
        self._provider = provider

    @property
    def enabled(self) -> bool:
        return self._llm is not None

    async def open(self, body: bytes | str) -> ChatStream:
        """Run every step up to an open upstream stream and return the relay.

        Raises ``ConfigurationError`` without a completion credential,
        ``BadRequestError`` for a malformed body and ``CompletionError`` when
        the completion service rejects the request. Nothing has been sent to
        the caller when any of these is raised.
        """
        if self._llm is None:
            raise ConfigurationError("Completion service API key not configured")

        trace = TraceContext()
        with trace.span("parse"):
            request = parse_chat_request(body)

        query = ContextQuery(
            tab_id=request.tab_id,
            role=request.role,
            selected_entity_id=request.selected_entity_id,
            selected_item_id=request.selected_item_id,
            selected_scenario_id=request.selected_scenario_id,
            last_message=request.last_user_message,
        )

        with trace.span("context") as span:
            policy = await self._provider.get_policy()
            context = await self._context_builder.build(query)
            span.metadata["context_chars"] = len(context)

        messages = build_messages(
            build_system_prompt(policy, context),
            [m.model_dump() for m in request.messages],
        )

        with trace.span("completion_open"):
            try:
                stream = await self._llm.stream_chat(messages)
            except CompletionError:
                log_chat_trace(trace.trace_id, trace.summary(), 0, 0, outcome="failed")
                raise

        logger.info(
            "chat_stream_started",
            trace_id=trace.trace_id,
            tab_id=request.tab_id,
            role=request.role,
            history=len(request.messages),
        )
        return ChatStream(stream, trace)


class ChatStream:
    """Relay returned by ``ChatSessionHandler.open``.

    Iterating forwards each non-empty upstream fragment unmodified. The
    upstream is released when iteration ends, fails or is cancelled, and
    also by ``aclose`` when the caller goes away before the first fragment
    was requested.
    """

    def __init__(self, upstream: AsyncIterator[str], trace: TraceContext) -> None:
        self._upstream = upstream
        self._trace = trace
        self._iterator: AsyncIterator[str] | None = None
        self._upstream_closed = False
        self._logged = False
        self.fragments = 0
        self.chars = 0
        self.outcome = "cancelled"

    def __aiter__(self) -> ChatStream:
        return self

    async def __anext__(self) -> str:
        if self._iterator is None:
            self._iterator = self._relay()
        return await self._iterator.__anext__()

    async def _relay(self) -> AsyncIterator[str]:
        try:
            with self._trace.span("stream"):
                async for fragment in self._upstream:
                    if not fragment:
                        continue
                    self.fragments += 1
                    self.chars += len(fragment)
                    yield fragment
            self.outcome = "done"
        except CompletionError as e:
            # Fragments already sent stay sent; the caller sees the stream abort.
            self.outcome = "failed"
            logger.error("chat_stream_failed", trace_id=self._trace.trace_id, error=str(e))
            raise
        finally:
            await self._finish()

    async def aclose(self) -> None:
        if self._iterator is not None:
            await self._iterator.aclose()
        await self._finish()

    async def _finish(self) -> None:
        if not self._logged:
            self._logged = True
            log_chat_trace(
                self._trace.trace_id,
                self._trace.summary(),
                self.fragments,
                self.chars,
                outcome=self.outcome,
            )
        if not self._upstream_closed:
            aclose = getattr(self._upstream, "aclose", None)
            if aclose is not None:
                await aclose()
            self._upstream_closed = True
