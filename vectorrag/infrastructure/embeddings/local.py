"""Deterministic local embedding generator used for development and testing."""
from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence

import numpy as np

from .base import EmbeddingClient
from .constants import DEFAULT_EMBEDDING_DIMENSION

_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


class LocalEmbeddingClient(EmbeddingClient):
    """Hash lower-cased word tokens into a fixed number of signed buckets.

    Texts sharing words land close together, which is enough to exercise
    search locally without a model server. Output vectors are unit length,
    or all zeros for text without word characters.
    """

    def __init__(self, *, dimension: int = DEFAULT_EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        self.model_name = "local-hashing-embedding"

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        return [self._embed_single(text) for text in texts]

    def _embed_single(self, text: str) -> list[float]:
        vector = np.zeros(self.dimension, dtype=np.float64)
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.sha256(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:8], "big") % self.dimension
            vector[bucket] += 1.0 if digest[8] & 1 else -1.0
        norm = float(np.linalg.norm(vector))
        if norm == 0:
            return vector.tolist()
        return (vector / norm).tolist()


__all__ = ["LocalEmbeddingClient"]
