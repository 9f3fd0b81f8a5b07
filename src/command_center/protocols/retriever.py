"""Protocol for document retrieval."""

from __future__ import annotations

from typing import Protocol

from command_center.models.domain import RetrievedDocument


class DocumentRetriever(Protocol):
    async def retrieve(self, query: str, top_n: int = 3) -> list[RetrievedDocument]: ...
