"""Protocol for streaming completion providers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol


class CompletionProvider(Protocol):
    async def stream_chat(self, messages: list[dict]) -> AsyncIterator[str]:
        """Open an upstream stream and return an iterator over text fragments.

        Awaiting this call raises ``CompletionError`` if the stream cannot be
        opened. Iterating raises ``CompletionError`` if it breaks mid-way.
        """
        ...
