"""Core domain objects used throughout the chat pipeline.

Everything here is built once per request and discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DocumentIndexEntry:
    doc_id: str
    filename: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class ScoredDocument:
    entry: DocumentIndexEntry
    score: int  # number of matching keywords


@dataclass(frozen=True)
class RetrievedDocument:
    doc_id: str
    content: str


@dataclass(frozen=True)
class ContextQuery:
    tab_id: int
    role: str
    selected_entity_id: str | None = None
    selected_item_id: str | None = None
    selected_scenario_id: str | None = None
    last_message: str = ""


@dataclass
class ContextSection:
    name: str
    parts: list[str] = field(default_factory=list)


@dataclass
class ContextBlock:
    sections: list[ContextSection]

    @property
    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]

    def render(self) -> str:
        return "\n\n".join(part for s in self.sections for part in s.parts)
