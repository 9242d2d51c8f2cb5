"""Abstract interfaces for vector index access."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A single scored search result."""

    document_id: int
    score: float


class VectorIndex(ABC):
    """Identifier to vector mapping with top-k similarity search."""

    @property
    @abstractmethod
    def dimension(self) -> int | None:
        """Established vector length, or ``None`` while the index is empty."""

    @abstractmethod
    def add(self, document_id: int, vector: Sequence[float]) -> None:
        """Insert or replace the entry for ``document_id``."""

    @abstractmethod
    def ensure_compatible(self, vector: Sequence[float]) -> None:
        """Raise :class:`DimensionMismatch` if ``add(_, vector)`` would be rejected."""

    @abstractmethod
    def search(self, query_vector: Sequence[float], k: int) -> list[SearchHit]:
        """Return the ``k`` best entries, best first, ties by ascending id."""

    @abstractmethod
    def rebuild(self, entries: Iterable[tuple[int, Sequence[float]]]) -> tuple[int, list[int]]:
        """Replace all entries; return the number indexed and the rejected ids."""

    @abstractmethod
    def drop(self) -> None:
        """Remove every entry and forget the established dimension."""

    @abstractmethod
    def __len__(self) -> int:
        ...


__all__ = ["SearchHit", "VectorIndex"]
