"""Embedding client for OpenAI-compatible ``/v1/embeddings`` endpoints."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from time import perf_counter
from typing import Any

import httpx

from ...exceptions import ProviderError
from .base import EmbeddingClient

LOGGER = logging.getLogger(__name__)


class OpenAIEmbeddingClient(EmbeddingClient):
    """Request float embeddings from OpenAI or any server exposing the same API."""

    def __init__(
        self,
        *,
        host: str,
        model_name: str,
        request_timeout: float,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._host = host.rstrip("/")
        self.model_name = model_name
        self._timeout = request_timeout
        self._api_key = api_key
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        url = f"{self._host}/v1/embeddings"
        payload = {"model": self.model_name, "input": list(texts), "encoding_format": "float"}
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=self._headers())
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Embedding request failed with status {exc.response.status_code}: {exc.response.text}",
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Failed to reach embedding server at {url}: {exc}", cause=exc) from exc
        embeddings = self._parse_response(response.json(), expected=len(texts))
        LOGGER.info(
            "Embedding request finished | model=%s texts=%d duration=%.2fs",
            self.model_name,
            len(texts),
            perf_counter() - start,
        )
        return embeddings

    @staticmethod
    def _parse_response(body: Any, *, expected: int) -> list[list[float]]:
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list) or len(data) != expected:
            raise ProviderError("Unexpected response format from embeddings endpoint")
        ordered = sorted(data, key=lambda item: item.get("index", 0) if isinstance(item, dict) else 0)
        embeddings: list[list[float]] = []
        for item in ordered:
            vector = item.get("embedding") if isinstance(item, dict) else None
            if not isinstance(vector, list) or not vector:
                raise ProviderError("Embeddings endpoint returned an item without a vector")
            embeddings.append([float(value) for value in vector])
        return embeddings


__all__ = ["OpenAIEmbeddingClient"]
