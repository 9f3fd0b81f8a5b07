"""Text fragment stream over an SDK streaming response."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from typing import Any

from command_center.exceptions import CompletionError


class FragmentStream:
    """Yields the non-empty text of each upstream chunk, in arrival order.

    ``aclose`` releases the upstream response whether or not iteration has
    started. Exhausting the stream or an upstream failure also releases it.
    """

    def __init__(
        self,
        upstream: AsyncIterable[Any],
        extract: Callable[[Any], str | None],
        close: Callable[[], Awaitable[None]] | None = None,
        source: str = "completion",
    ) -> None:
        self._upstream = upstream
        self._extract = extract
        self._close = close
        self._source = source
        self._iterator: AsyncIterator[str] | None = None
        self._released = False

    def __aiter__(self) -> FragmentStream:
        return self

    async def __anext__(self) -> str:
        if self._iterator is None:
            self._iterator = self._iterate()
        return await self._iterator.__anext__()

    async def _iterate(self) -> AsyncIterator[str]:
        try:
            async for chunk in self._upstream:
                text = self._extract(chunk)
                if text:
                    yield text
        except Exception as e:
            raise CompletionError(f"{self._source} stream interrupted: {e}") from e
        finally:
            await self._release()

    async def aclose(self) -> None:
        if self._iterator is not None:
            await self._iterator.aclose()
        await self._release()

    async def _release(self) -> None:
        if self._released:
            return
        if self._close is not None:
            await self._close()
        self._released = True
