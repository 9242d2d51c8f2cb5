"""Service wiring and common dependency helpers."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from .config import Settings, load_settings
from .infrastructure.database import configure_engine, create_schema
from .infrastructure.embeddings.base import EmbeddingClient
from .infrastructure.embeddings.factory import create_embedding_client
from .infrastructure.llm.base import LLMClient
from .infrastructure.llm.factory import create_llm_client
from .infrastructure.repositories.document_repo import DocumentStore
from .infrastructure.vectorstore.memory import InMemoryVectorIndex
from .infrastructure.vectorstore.projection import projection_from_settings
from .infrastructure.vectorstore.sync import IndexSynchronizer
from .ingestion.pipeline import IngestionPipeline
from .retrieval.pipeline import RetrievalPipeline

LOGGER = logging.getLogger(__name__)


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return load_settings()


@dataclass
class ServiceContainer:
    """Objects shared by every request for the lifetime of the app."""

    settings: Settings
    engine: AsyncEngine
    store: DocumentStore
    index: InMemoryVectorIndex
    embedder: EmbeddingClient
    llm: LLMClient
    synchronizer: IndexSynchronizer
    ingestion: IngestionPipeline
    retrieval: RetrievalPipeline

    async def close(self) -> None:
        self.index.drop()
        await self.engine.dispose()


async def build_container(
    settings: Settings,
    *,
    embedder: EmbeddingClient | None = None,
    llm: LLMClient | None = None,
) -> ServiceContainer:
    """Create the store schema and assemble the pipelines around one index."""

    engine, session_factory = configure_engine(settings)
    await create_schema(engine)
    store = DocumentStore(session_factory)
    index = InMemoryVectorIndex(projection_from_settings(settings.index))
    embedder = embedder or create_embedding_client(settings)
    llm = llm or create_llm_client(settings)
    # Ingestion and resync both mutate the index; they share one lock.
    write_lock = asyncio.Lock()
    timeout = settings.llm.request_timeout
    LOGGER.info(
        "Services configured | database=%s projection=%s embedder=%s",
        engine.url.render_as_string(hide_password=True),
        settings.index.projection,
        getattr(embedder, "model_name", type(embedder).__name__),
    )
    return ServiceContainer(
        settings=settings,
        engine=engine,
        store=store,
        index=index,
        embedder=embedder,
        llm=llm,
        synchronizer=IndexSynchronizer(store, index, lock=write_lock),
        ingestion=IngestionPipeline(store, index, embedder, lock=write_lock, provider_timeout=timeout),
        retrieval=RetrievalPipeline(
            store,
            index,
            embedder,
            llm,
            max_prompt_chars=settings.llm.max_prompt_chars,
            provider_timeout=timeout,
        ),
    )


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "services", None)
    if container is None:
        raise RuntimeError("Services have not been initialised; is the lifespan running?")
    return container


__all__ = ["ServiceContainer", "build_container", "get_container", "get_settings"]
