"""Google Gemini chat provider using the google-genai SDK."""

from __future__ import annotations

from collections.abc import AsyncIterator

from google import genai
from google.genai import types

from command_center.exceptions import CompletionError
from command_center.generation.streaming import FragmentStream
from command_center.observability.logger import get_logger

logger = get_logger("gemini")


def to_gemini_contents(messages: list[dict]) -> tuple[str | None, list[types.Content]]:
    """Split chat messages into a system instruction and Gemini contents.

    Gemini has no system role inside the conversation and calls the
    assistant ``model``.
    """
    system_parts: list[str] = []
    contents: list[types.Content] = []
    for m in messages:
        if m["role"] == "system":
            system_parts.append(m["content"])
            continue
        role = "model" if m["role"] == "assistant" else "user"
        contents.append(types.Content(role=role, parts=[types.Part(text=m["content"])]))
    return ("\n\n".join(system_parts) or None), contents


class GeminiProvider:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )
        self._model = model
        self._temperature = temperature

    async def stream_chat(self, messages: list[dict]) -> AsyncIterator[str]:
        system, contents = to_gemini_contents(messages)
        config = types.GenerateContentConfig(temperature=self._temperature)
        if system:
            config.system_instruction = system
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise CompletionError(f"Gemini completion failed: {e}") from e
        logger.info("completion_stream_opened", model=self._model, messages=len(messages))
        return FragmentStream(
            stream,
            extract=lambda chunk: chunk.text,
            close=getattr(stream, "aclose", None),
            source="Gemini",
        )
