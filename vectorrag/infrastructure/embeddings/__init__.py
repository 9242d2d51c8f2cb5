"""Embedding client exports."""

from .base import EmbeddingClient, embed_text
from .factory import create_embedding_client
from .local import LocalEmbeddingClient
from .ollama import OllamaEmbeddingClient
from .openai_compat import OpenAIEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "embed_text",
    "create_embedding_client",
    "LocalEmbeddingClient",
    "OllamaEmbeddingClient",
    "OpenAIEmbeddingClient",
]
