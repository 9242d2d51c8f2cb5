"""Exact brute-force cosine similarity index held in process memory."""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence

import numpy as np

from ...exceptions import DimensionMismatch
from .base import SearchHit, VectorIndex
from .projection import Projection, identity_projection

LOGGER = logging.getLogger(__name__)


class InMemoryVectorIndex(VectorIndex):
    """Score every stored vector against the query; no pruning.

    Cosine similarity against a zero-magnitude vector is defined as ``0.0``
    and the entry stays in the ranking.
    """

    def __init__(self, projection: Projection | None = None) -> None:
        self._projection = projection or identity_projection
        self._lock = threading.Lock()
        self._vectors: dict[int, np.ndarray] = {}
        self._dimension: int | None = None
        # Stacked copy of ``_vectors``; rebuilt lazily after writes.
        self._cache: tuple[np.ndarray, np.ndarray, np.ndarray] | None = None

    @property
    def dimension(self) -> int | None:
        return self._dimension

    def __len__(self) -> int:
        with self._lock:
            return len(self._vectors)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._vectors

    def _project(self, vector: Sequence[float]) -> np.ndarray:
        projected = np.asarray(self._projection(vector), dtype=np.float64)
        if projected.ndim != 1 or projected.shape[0] == 0:
            raise ValueError("Vectors must be non-empty and one dimensional")
        return projected

    def ensure_compatible(self, vector: Sequence[float]) -> None:
        projected = self._project(vector)
        with self._lock:
            if self._dimension is not None and projected.shape[0] != self._dimension:
                raise DimensionMismatch(self._dimension, projected.shape[0])

    def add(self, document_id: int, vector: Sequence[float]) -> None:
        projected = self._project(vector)
        with self._lock:
            if self._dimension is not None and projected.shape[0] != self._dimension:
                raise DimensionMismatch(self._dimension, projected.shape[0])
            previous = self._vectors.get(document_id)
            if previous is not None and not np.array_equal(previous, projected):
                LOGGER.warning("Replacing differing vector for document %s in index", document_id)
            self._vectors[document_id] = projected
            self._dimension = projected.shape[0]
            self._cache = None
        LOGGER.debug("Indexed document %s | dimension=%s", document_id, projected.shape[0])

    def search(self, query_vector: Sequence[float], k: int) -> list[SearchHit]:
        if k <= 0:
            return []
        query = self._project(query_vector)
        with self._lock:
            if not self._vectors:
                return []
            if query.shape[0] != self._dimension:
                raise DimensionMismatch(self._dimension, query.shape[0])
            ids, matrix, norms = self._stacked()
            dots = matrix @ query
            denominator = norms * float(np.linalg.norm(query))
            scores = np.zeros_like(dots)
            np.divide(dots, denominator, out=scores, where=denominator > 0)
            np.clip(scores, -1.0, 1.0, out=scores)
            # lexsort uses the last key as the primary one.
            order = np.lexsort((ids, -scores))[:k]
            return [SearchHit(document_id=int(ids[i]), score=float(scores[i])) for i in order]

    def _stacked(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        if self._cache is None:
            ids = np.fromiter(self._vectors.keys(), dtype=np.int64, count=len(self._vectors))
            matrix = np.vstack(list(self._vectors.values()))
            norms = np.linalg.norm(matrix, axis=1)
            self._cache = (ids, matrix, norms)
        return self._cache

    def rebuild(self, entries: Iterable[tuple[int, Sequence[float]]]) -> tuple[int, list[int]]:
        prepared: dict[int, np.ndarray] = {}
        rejected: list[int] = []
        dimension: int | None = None
        for document_id, vector in entries:
            try:
                projected = self._project(vector)
            except ValueError:
                LOGGER.error("Skipping document %s during rebuild: empty vector", document_id)
                rejected.append(document_id)
                continue
            if dimension is not None and projected.shape[0] != dimension:
                LOGGER.error(
                    "Skipping document %s during rebuild: %s",
                    document_id,
                    DimensionMismatch(dimension, projected.shape[0]),
                )
                rejected.append(document_id)
                continue
            dimension = projected.shape[0]
            prepared[document_id] = projected
        with self._lock:
            self._vectors = prepared
            self._dimension = dimension
            self._cache = None
        return len(prepared), rejected

    def drop(self) -> None:
        with self._lock:
            self._vectors = {}
            self._dimension = None
            self._cache = None


__all__ = ["InMemoryVectorIndex"]
