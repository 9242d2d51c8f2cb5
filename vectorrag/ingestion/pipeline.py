"""Add a document: embed, write the store, then update the index."""
from __future__ import annotations

import asyncio
import logging
from time import perf_counter

from ..exceptions import PlatformError, ValidationError
from ..infrastructure.embeddings.base import EmbeddingClient, embed_text
from ..infrastructure.repositories.document_repo import DocumentStore, InsertResult
from ..infrastructure.vectorstore.base import VectorIndex
from ..infrastructure.vectorstore.codec import quantize_vector

LOGGER = logging.getLogger(__name__)


class IngestionPipeline:
    """Insert-if-absent for documents with an ordered dual write.

    The store row is committed before the index entry is added. A crash in
    between leaves a stored document without an index entry; the next full
    resync picks it up, nothing repairs it incrementally.
    """

    def __init__(
        self,
        store: DocumentStore,
        index: VectorIndex,
        embedder: EmbeddingClient,
        *,
        lock: asyncio.Lock | None = None,
        provider_timeout: float | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.embedder = embedder
        self.provider_timeout = provider_timeout
        self._lock = lock or asyncio.Lock()

    async def ingest(self, content: str | None) -> InsertResult:
        if content is None or not content.strip():
            raise ValidationError("Content is required")

        start = perf_counter()
        vector = await embed_text(self.embedder, content, timeout=self.provider_timeout)
        # Index and store must hold the same values; apply the storage encoding up front.
        vector = quantize_vector(vector)
        # Once the store write begins, finish both phases even if the caller goes away.
        result = await asyncio.shield(self._write(content, vector))
        LOGGER.info(
            "Ingested document | id=%s created=%s dimension=%d duration=%.3fs",
            result.document_id,
            result.created,
            len(vector),
            perf_counter() - start,
        )
        return result

    async def _write(self, content: str, vector: list[float]) -> InsertResult:
        async with self._lock:
            # Reject vectors the index cannot hold before anything is written.
            self.index.ensure_compatible(vector)
            result = await self.store.insert_if_absent(content, vector)
            if not result.created:
                return result
            try:
                self.index.add(result.document_id, vector)
            except (PlatformError, ValueError):
                LOGGER.error(
                    "Document %s stored but not indexed; resync required",
                    result.document_id,
                    exc_info=True,
                )
                raise
            return result


__all__ = ["IngestionPipeline"]
