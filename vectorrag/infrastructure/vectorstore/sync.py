"""Rebuild the in-memory index from the document store."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from time import perf_counter

from ..repositories.document_repo import DocumentStore
from .base import VectorIndex

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncReport:
    indexed: int
    skipped: list[int] = field(default_factory=list)


class IndexSynchronizer:
    """Treat the index as a derived cache of the store.

    ``resync`` is a full replace, so running it again without intervening
    writes yields the same index. It is the only repair for a document that
    was stored but never indexed.
    """

    def __init__(self, store: DocumentStore, index: VectorIndex, *, lock: asyncio.Lock | None = None) -> None:
        self.store = store
        self.index = index
        self._lock = lock or asyncio.Lock()

    async def resync(self) -> SyncReport:
        start = perf_counter()
        async with self._lock:
            rows = await self.store.get_all_ids_and_vectors()
            indexed, skipped = self.index.rebuild(rows)
        LOGGER.info(
            "Synchronized index with document store | indexed=%d skipped=%d dimension=%s duration=%.3fs",
            indexed,
            len(skipped),
            self.index.dimension,
            perf_counter() - start,
        )
        return SyncReport(indexed=indexed, skipped=skipped)


__all__ = ["IndexSynchronizer", "SyncReport"]
