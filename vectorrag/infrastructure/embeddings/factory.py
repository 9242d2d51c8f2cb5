"""Factory helpers for embedding clients."""
from __future__ import annotations

import logging

from ...config import Settings
from .base import EmbeddingClient
from .constants import (
    DEFAULT_OLLAMA_EMBEDDING_MODEL,
    SUPPORTED_OLLAMA_EMBEDDING_MODELS,
    embedding_dimension_for_model,
)
from .local import LocalEmbeddingClient
from .ollama import OllamaEmbeddingClient
from .openai_compat import OpenAIEmbeddingClient

LOGGER = logging.getLogger(__name__)


def create_embedding_client(settings: Settings) -> EmbeddingClient:
    """Create an embedding client based on runtime configuration."""

    llm = settings.llm
    if llm.embedding_provider == "openai":
        return OpenAIEmbeddingClient(
            host=llm.openai_host,
            model_name=llm.openai_embedding_model,
            request_timeout=llm.request_timeout,
            api_key=llm.openai_api_key,
        )
    if llm.embedding_provider == "ollama":
        model_name = llm.ollama_embedding_model or DEFAULT_OLLAMA_EMBEDDING_MODEL
        if model_name.lower() not in SUPPORTED_OLLAMA_EMBEDDING_MODELS:
            LOGGER.warning(
                "Unsupported Ollama embedding model '%s'. Falling back to %s.",
                model_name,
                DEFAULT_OLLAMA_EMBEDDING_MODEL,
            )
            model_name = DEFAULT_OLLAMA_EMBEDDING_MODEL
        return OllamaEmbeddingClient(
            host=llm.ollama_host,
            model_name=model_name,
            request_timeout=llm.request_timeout,
            dimension=llm.embedding_dimension or embedding_dimension_for_model(model_name),
        )
    return LocalEmbeddingClient(dimension=llm.embedding_dimension or embedding_dimension_for_model(None))


__all__ = ["create_embedding_client"]
