"""Ollama backed LLM client with streaming responses."""
from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from time import perf_counter
from typing import Any

import httpx

from ...config import Settings
from ...exceptions import ProviderError
from .base import LLMClient

LOGGER = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    """Stream completions from an Ollama server."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._host = settings.llm.ollama_host.rstrip("/")
        self._model = settings.llm.ollama_model
        self._timeout = settings.llm.request_timeout
        self._transport = transport
        self.max_prompt_chars = settings.llm.max_prompt_chars

    async def generate(self, prompt: str) -> AsyncGenerator[str, None]:
        """Generate a completion using the configured Ollama model."""

        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": True,
            "options": {
                "temperature": 0.1,
                "top_p": 0.9,
            },
        }
        url = f"{self._host}/api/generate"
        timeout = httpx.Timeout(self._timeout, connect=self._timeout, read=None, write=self._timeout)
        LOGGER.info("Ollama request started | model=%s prompt_chars=%d", self._model, len(prompt))
        start_time = perf_counter()
        chunk_count = 0
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                async with client.stream("POST", url, json=payload) as response:
                    if response.is_error:
                        await response.aread()
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line:
                            continue
                        chunk = self._parse_chunk(line)
                        if chunk:
                            chunk_count += 1
                            yield chunk
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Ollama generation failed with status {exc.response.status_code}: {exc.response.text}",
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Failed to reach Ollama server at {url}: {exc}", cause=exc) from exc
        finally:
            LOGGER.info(
                "Ollama request finished | model=%s duration=%.2fs chunks=%d",
                self._model,
                perf_counter() - start_time,
                chunk_count,
            )

    @staticmethod
    def _parse_chunk(payload: str) -> str:
        try:
            data: dict[str, Any] = json.loads(payload)
        except json.JSONDecodeError:
            return ""
        if data.get("done"):
            return ""
        chunk = data.get("response")
        return str(chunk) if chunk else ""


__all__ = ["OllamaClient"]
