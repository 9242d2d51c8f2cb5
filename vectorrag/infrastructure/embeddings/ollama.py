"""Embedding client backed by the Ollama embeddings API."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ...exceptions import ProviderError
from .base import EmbeddingClient

LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:  # pragma: no cover - for static analysis only
    from ollama import AsyncClient  # noqa: F401
else:
    AsyncClient = Any


def _normalise_dimension(vector: Sequence[float], dimension: int) -> list[float]:
    """Resize embeddings to the configured length so every stored vector matches."""

    values = [float(value) for value in vector]
    current = len(values)
    if current == dimension:
        return values
    if current > dimension:
        LOGGER.debug("Truncating embedding from %s to %s dimensions", current, dimension)
        return values[:dimension]
    LOGGER.debug("Padding embedding from %s to %s dimensions", current, dimension)
    return values + [0.0] * (dimension - current)


class OllamaEmbeddingClient(EmbeddingClient):
    """Generate embeddings via an Ollama server."""

    def __init__(self, *, host: str, model_name: str, request_timeout: float, dimension: int) -> None:
        self._host = host.rstrip("/")
        self.model_name = model_name
        self._timeout = request_timeout
        self._dimension = dimension
        self._client: AsyncClient | None = None

    def _ensure_client(self) -> AsyncClient:
        if self._client is None:
            from ollama import AsyncClient

            self._client = AsyncClient(host=self._host, timeout=self._timeout)
        return self._client

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        client = self._ensure_client()
        embeddings: list[list[float]] = []
        for text in texts:
            try:
                response = await client.embeddings(model=self.model_name, prompt=text)
            except Exception as exc:  # noqa: BLE001
                message = str(exc)
                if "context length" in message.lower():
                    raise ProviderError(
                        "Ollama embeddings rejected the text because it exceeds the model context window "
                        f"(approximately {len(text.split())} words).",
                        cause=exc,
                    ) from exc
                raise ProviderError(f"Ollama embeddings request failed: {message}", cause=exc) from exc
            vector = response.get("embedding")
            if not isinstance(vector, Sequence) or not vector:
                raise ProviderError("Unexpected response format from Ollama embeddings endpoint")
            embeddings.append(_normalise_dimension(vector, self._dimension))
        return embeddings


__all__ = ["OllamaEmbeddingClient"]
