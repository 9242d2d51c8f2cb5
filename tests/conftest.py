from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi import FastAPI

from vectorrag import dependencies
from vectorrag.config import DatabaseSettings, LLMSettings, LoaderSettings, LoggingSettings, Settings
from vectorrag.dependencies import ServiceContainer, build_container
from vectorrag.infrastructure.embeddings.base import EmbeddingClient
from vectorrag.infrastructure.llm.base import LLMClient

CATS = "cats are mammals"
DOGS = "dogs bark"

SCENARIO_VECTORS: dict[str, list[float]] = {
    CATS: [1.0, 0.0],
    DOGS: [0.0, 1.0],
    "about cats": [0.9, 0.1],
    "about dogs": [0.1, 0.9],
}


class KeywordEmbedder(EmbeddingClient):
    """Return a fixed vector per text and record every call."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, default: list[float] | None = None) -> None:
        self.vectors = dict(SCENARIO_VECTORS if vectors is None else vectors)
        self.default = default or [0.5, 0.5]
        self.model_name = "keyword-test-embedding"
        self.calls: list[str] = []

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.extend(texts)
        return [list(self.vectors.get(text, self.default)) for text in texts]


class FailingEmbedder(EmbeddingClient):
    model_name = "failing-embedding"

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        raise RuntimeError("embedding backend unavailable")


class SlowEmbedder(EmbeddingClient):
    model_name = "slow-embedding"

    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        await asyncio.sleep(self.delay)
        return [[1.0, 0.0] for _ in texts]


class RecordingLLM(LLMClient):
    """Answer generator that records the context and question it was given."""

    def __init__(self, reply: str = "They are mammals.", *, max_prompt_chars: int | None = 10_000) -> None:
        self.reply = reply
        self.max_prompt_chars = max_prompt_chars
        self.calls: list[tuple[str, str]] = []
        self.prompts: list[str] = []

    async def answer(self, context: str, question: str) -> str:
        self.calls.append((context, question))
        return await super().answer(context, question)

    async def generate(self, prompt: str) -> AsyncGenerator[str, None]:
        self.prompts.append(prompt)
        for word in self.reply.split(" "):
            yield word + " "


class FailingLLM(LLMClient):
    async def generate(self, prompt: str) -> AsyncGenerator[str, None]:
        raise RuntimeError("completion backend unavailable")
        yield ""  # pragma: no cover


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file and log directory."""

    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'vectors.db'}"),
        llm=LLMSettings(embedding_provider="local", request_timeout=5.0),
        loader=LoaderSettings(documents_dir=tmp_path / "documents"),
        logging=LoggingSettings(directory=tmp_path / "logs"),
    )


@pytest.fixture
def embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def llm() -> RecordingLLM:
    return RecordingLLM()


@pytest.fixture
def services(
    settings: Settings, embedder: KeywordEmbedder, llm: RecordingLLM
) -> Callable[..., AsyncIterator[ServiceContainer]]:
    """Return an async context manager yielding a wired service container."""

    @asynccontextmanager
    async def _services(
        *, embedder_override: EmbeddingClient | None = None, llm_override: LLMClient | None = None
    ) -> AsyncIterator[ServiceContainer]:
        container = await build_container(
            settings,
            embedder=embedder_override or embedder,
            llm=llm_override or llm,
        )
        try:
            yield container
        finally:
            await container.close()

    return _services


@pytest.fixture
def app(settings: Settings, embedder: KeywordEmbedder, llm: RecordingLLM) -> FastAPI:
    """Provide a FastAPI app wired to a temporary SQLite database and fake providers."""

    dependencies.get_settings.cache_clear()

    from vectorrag.main import create_app

    return create_app(settings, embedder=embedder, llm=llm)
