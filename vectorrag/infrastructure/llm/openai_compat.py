"""Chat completion client for OpenAI-compatible servers (OpenAI, vLLM, ...)."""
from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from time import perf_counter

import httpx

from ...config import Settings
from ...exceptions import ProviderError
from .base import LLMClient

LOGGER = logging.getLogger(__name__)


class OpenAICompatibleClient(LLMClient):
    """Stream chat completions from ``/v1/chat/completions``."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._host = settings.llm.openai_host.rstrip("/")
        self._model = settings.llm.openai_model
        self._api_key = settings.llm.openai_api_key
        self._timeout = settings.llm.request_timeout
        self._transport = transport
        self.max_prompt_chars = settings.llm.max_prompt_chars

    async def generate(self, prompt: str) -> AsyncGenerator[str, None]:
        """Generate a streamed completion for a single user message."""

        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": True,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        url = f"{self._host}/v1/chat/completions"
        timeout = httpx.Timeout(self._timeout, connect=self._timeout, read=None, write=self._timeout)
        LOGGER.info("Chat completion started | model=%s prompt_chars=%d", self._model, len(prompt))
        start_time = perf_counter()
        chunk_count = 0
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                async with client.stream("POST", url, json=payload, headers=headers) as response:
                    if response.is_error:
                        await response.aread()
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line:
                            continue
                        chunk = self._parse_line(line)
                        if chunk:
                            chunk_count += 1
                            yield chunk
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Chat completion failed with status {exc.response.status_code}: {exc.response.text}",
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Failed to reach completion server at {url}: {exc}", cause=exc) from exc
        finally:
            LOGGER.info(
                "Chat completion finished | model=%s duration=%.2fs chunks=%d",
                self._model,
                perf_counter() - start_time,
                chunk_count,
            )

    @staticmethod
    def _parse_line(line: str) -> str:
        prefix = "data:"
        if not line.startswith(prefix):
            return ""
        data = line[len(prefix) :].strip()
        if not data or data == "[DONE]":
            return ""
        try:
            payload = json.loads(data)
        except json.JSONDecodeError:
            return ""
        choices = payload.get("choices") or []
        if not choices:
            return ""
        delta = (choices[0] or {}).get("delta") or {}
        text = delta.get("content")
        return str(text) if text else ""


__all__ = ["OpenAICompatibleClient"]
