"""OpenAI chat completion provider using the official SDK."""

from __future__ import annotations

from collections.abc import AsyncIterator

from openai import AsyncOpenAI

from command_center.exceptions import CompletionError
from command_center.generation.streaming import FragmentStream
from command_center.observability.logger import get_logger

logger = get_logger("openai")


def _delta_text(chunk) -> str | None:
    if not chunk.choices:
        return None
    return chunk.choices[0].delta.content


class OpenAIProvider:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._temperature = temperature

    async def stream_chat(self, messages: list[dict]) -> AsyncIterator[str]:
        kwargs = {}
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                stream=True,
                **kwargs,
            )
        except Exception as e:
            raise CompletionError(f"OpenAI completion failed: {e}") from e
        logger.info("completion_stream_opened", model=self._model, messages=len(messages))
        return FragmentStream(stream, extract=_delta_text, close=stream.close, source="OpenAI")
