"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    openai_api_key: str = ""
    google_api_key: str = ""

    # Completion service
    llm_provider: str = "openai"  # "openai" or "gemini"
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-2.0-flash"
    llm_temperature: float | None = None
    completion_timeout_seconds: float = 120.0

    # Fixture data
    data_dir: str = "mock-data/v1"

    # Context assembly limits
    rag_top_n: int = 3
    rag_doc_max_chars: int = 3000
    max_mentioned_shipments: int = 5
    in_transit_fetch_limit: int = 25
    in_transit_display_limit: int = 15
    risk_table_limit: int = 15
    news_limit: int = 5

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:3000"  # comma-separated

    model_config = {"env_file": ".env", "env_prefix": "SCC_"}

    @property
    def completion_api_key(self) -> str:
        if self.llm_provider == "gemini":
            return self.google_api_key
        return self.openai_api_key

    @property
    def chat_enabled(self) -> bool:
        return bool(self.completion_api_key)

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
