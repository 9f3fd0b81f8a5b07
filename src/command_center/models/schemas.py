"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from command_center.config.constants import (
    DEFAULT_ROLE,
    DEFAULT_TAB_ID,
    MAX_SHIPMENT_LIMIT,
)


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Inbound chat body.

    Parsing is forward compatible: unknown fields are ignored and fields of
    the wrong type fall back to their defaults. Only the messages
    themselves are validated strictly.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    messages: list[ChatMessage] = Field(default_factory=list)
    tab_id: int = Field(default=DEFAULT_TAB_ID, alias="tabId")
    selected_entity_id: str | None = Field(default=None, alias="selectedEntityId")
    selected_item_id: str | None = Field(default=None, alias="selectedItemId")
    selected_scenario_id: str | None = Field(default=None, alias="selectedScenarioId")
    filters: dict = Field(default_factory=dict)
    role: str = DEFAULT_ROLE

    @field_validator("messages", mode="before")
    @classmethod
    def _messages_list(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("tab_id", mode="before")
    @classmethod
    def _tab_id(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return DEFAULT_TAB_ID
        # is_integer() is False for inf and nan
        if isinstance(v, float) and not v.is_integer():
            return DEFAULT_TAB_ID
        if not 1 <= v <= 3:
            return DEFAULT_TAB_ID
        return int(v)

    @field_validator(
        "selected_entity_id", "selected_item_id", "selected_scenario_id", mode="before"
    )
    @classmethod
    def _optional_text(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("filters", mode="before")
    @classmethod
    def _filters_map(cls, v):
        return v if isinstance(v, dict) else {}

    @field_validator("role", mode="before")
    @classmethod
    def _role_text(cls, v):
        return v if isinstance(v, str) else DEFAULT_ROLE

    @property
    def last_user_message(self) -> str:
        for message in reversed(self.messages):
            if message.role == "user":
                return message.content
        return ""


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    chat_enabled: bool
    data_available: bool


class ShipmentsQuery(BaseModel):
    status: str | None = None
    limit: int | None = Field(default=None, ge=1, le=MAX_SHIPMENT_LIMIT)
    search: str | None = None


class NewsQuery(BaseModel):
    tab: int | None = Field(default=None, ge=1, le=3)
    tags: list[str] | None = None
    q: str | None = None
    since: str | None = None
    lang: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, v):
        if isinstance(v, str):
            return [t for t in v.split(",") if t] or None
        return v


class ItemsQuery(BaseModel):
    type: Literal["product", "material"] | None = None
