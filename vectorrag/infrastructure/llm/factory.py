"""Factory helpers for answer clients."""
from __future__ import annotations

from ...config import Settings
from .base import LLMClient
from .ollama import OllamaClient
from .openai_compat import OpenAICompatibleClient


def create_llm_client(settings: Settings) -> LLMClient:
    if settings.llm.provider == "ollama":
        return OllamaClient(settings)
    return OpenAICompatibleClient(settings)


__all__ = ["create_llm_client"]
