"""Embedding client abstractions."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from time import perf_counter

from ...exceptions import ProviderError

LOGGER = logging.getLogger(__name__)


class EmbeddingClient(ABC):
    """Interface for text embedding providers."""

    model_name: str

    @abstractmethod
    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Return embeddings for the provided texts."""


async def embed_text(client: EmbeddingClient, text: str, *, timeout: float | None = None) -> list[float]:
    """Embed a single text, translating every provider failure to :class:`ProviderError`."""

    start = perf_counter()
    try:
        embeddings = await asyncio.wait_for(client.embed([text]), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise ProviderError(f"Embedding request timed out after {timeout}s", cause=exc) from exc
    except ProviderError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise ProviderError(f"Embedding request failed: {exc}", cause=exc) from exc
    if not embeddings or not embeddings[0]:
        raise ProviderError("Embedding provider returned an empty vector")
    LOGGER.debug(
        "Embedded text | model=%s chars=%d dimension=%d duration=%.3fs",
        getattr(client, "model_name", None),
        len(text),
        len(embeddings[0]),
        perf_counter() - start,
    )
    return [float(value) for value in embeddings[0]]


__all__ = ["EmbeddingClient", "embed_text"]
