"""Projections applied to embeddings before they reach the index."""
from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from ...config import IndexSettings

Projection = Callable[[Sequence[float]], np.ndarray]


def identity_projection(vector: Sequence[float]) -> np.ndarray:
    return np.asarray(vector, dtype=np.float64)


def truncate_projection(length: int) -> Projection:
    """Keep only the first ``length`` components of each vector."""

    if length <= 0:
        raise ValueError("Truncation length must be positive")

    def _project(vector: Sequence[float]) -> np.ndarray:
        return np.asarray(vector, dtype=np.float64)[:length]

    return _project


def projection_from_settings(settings: IndexSettings) -> Projection:
    if settings.projection == "truncate":
        return truncate_projection(settings.truncate_dimension)
    return identity_projection


__all__ = ["Projection", "identity_projection", "truncate_projection", "projection_from_settings"]
