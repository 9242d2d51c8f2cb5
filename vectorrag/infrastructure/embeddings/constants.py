"""Shared constants for embedding backends."""
from __future__ import annotations

DEFAULT_EMBEDDING_DIMENSION = 1536
DEFAULT_OLLAMA_EMBEDDING_MODEL = "qwen3-embedding:0.6b"
SUPPORTED_OLLAMA_EMBEDDING_MODELS = {
    "qwen3-embedding:0.6b",
    "qwen3-embedding:4b",
    "embeddinggemma",
    "nomic-embed-text",
}

MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    "qwen3-embedding:0.6b": 1024,
    "qwen3-embedding:4b": 2560,
    "embeddinggemma": 768,
    "nomic-embed-text": 768,
}


def embedding_dimension_for_model(model_name: str | None) -> int:
    """Return the expected embedding dimensionality for a given model string."""

    if not model_name:
        return DEFAULT_EMBEDDING_DIMENSION
    key = model_name.lower()
    if key in MODEL_DIMENSIONS:
        return MODEL_DIMENSIONS[key]
    # Some models might be referenced without the exact suffix; try prefix matches.
    for candidate, dimension in MODEL_DIMENSIONS.items():
        if key.startswith(candidate):
            return dimension
    return DEFAULT_EMBEDDING_DIMENSION


__all__ = [
    "DEFAULT_EMBEDDING_DIMENSION",
    "DEFAULT_OLLAMA_EMBEDDING_MODEL",
    "SUPPORTED_OLLAMA_EMBEDDING_MODELS",
    "MODEL_DIMENSIONS",
    "embedding_dimension_for_model",
]
