"""Construct the configured completion provider."""

from __future__ import annotations

from command_center.config.settings import Settings
from command_center.exceptions import ConfigurationError
from command_center.protocols.llm import CompletionProvider


def build_completion_provider(settings: Settings) -> CompletionProvider | None:
    """Return the provider for ``settings.llm_provider``, or None without a credential."""
    if not settings.chat_enabled:
        return None
    if settings.llm_provider == "gemini":
        from command_center.generation.gemini_provider import GeminiProvider

        return GeminiProvider(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.llm_temperature,
            timeout=settings.completion_timeout_seconds,
        )
    if settings.llm_provider == "openai":
        from command_center.generation.openai_provider import OpenAIProvider

        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.llm_temperature,
            timeout=settings.completion_timeout_seconds,
        )
    raise ConfigurationError(f"Unknown llm_provider: {settings.llm_provider}")
