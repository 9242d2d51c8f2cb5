"""In-memory cosine index behaviour."""
from __future__ import annotations

import math

import pytest

from vectorrag.exceptions import DimensionMismatch
from vectorrag.infrastructure.vectorstore.memory import InMemoryVectorIndex
from vectorrag.infrastructure.vectorstore.projection import truncate_projection


def test_search_ranks_by_cosine_similarity() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])
    index.add(2, [0.0, 1.0])

    hits = index.search([0.9, 0.1], 1)

    assert [hit.document_id for hit in hits] == [1]
    assert hits[0].score == pytest.approx(0.9 / math.sqrt(0.82))
    assert hits[0].score == pytest.approx(0.994, abs=1e-3)


def test_search_returns_all_entries_when_k_exceeds_size() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])
    index.add(2, [0.0, 1.0])
    index.add(3, [-1.0, 0.0])

    hits = index.search([1.0, 0.2], 10)

    assert [hit.document_id for hit in hits] == [1, 2, 3]
    scores = [hit.score for hit in hits]
    assert scores == sorted(scores, reverse=True)
    assert all(-1.0 <= score <= 1.0 for score in scores)


def test_equal_scores_break_ties_by_ascending_id() -> None:
    index = InMemoryVectorIndex()
    index.add(9, [2.0, 0.0])
    index.add(4, [1.0, 0.0])
    index.add(6, [3.0, 0.0])

    hits = index.search([1.0, 0.0], 3)

    assert [hit.document_id for hit in hits] == [4, 6, 9]


def test_zero_vector_scores_zero_and_stays_ranked() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [0.0, 0.0])
    index.add(2, [-1.0, 0.0])

    hits = index.search([1.0, 0.0], 2)

    assert [(hit.document_id, hit.score) for hit in hits] == [(1, 0.0), (2, -1.0)]
    assert [hit.score for hit in index.search([0.0, 0.0], 2)] == [0.0, 0.0]


def test_empty_index_and_non_positive_k_return_nothing() -> None:
    index = InMemoryVectorIndex()
    assert index.search([1.0, 0.0], 3) == []

    index.add(1, [1.0, 0.0])
    assert index.search([1.0, 0.0], 0) == []
    assert index.search([1.0, 0.0], -2) == []


def test_dimension_mismatch_is_rejected() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])

    with pytest.raises(DimensionMismatch) as add_error:
        index.add(2, [1.0, 0.0, 0.0])
    assert add_error.value.expected == 2
    assert add_error.value.actual == 3

    with pytest.raises(DimensionMismatch):
        index.search([1.0], 1)
    assert len(index) == 1


def test_re_adding_an_id_replaces_its_vector() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])
    index.add(1, [0.0, 1.0])

    assert len(index) == 1
    hits = index.search([0.0, 1.0], 5)
    assert [(hit.document_id, hit.score) for hit in hits] == [(1, pytest.approx(1.0))]


def test_truncate_projection_applies_to_entries_and_queries() -> None:
    index = InMemoryVectorIndex(truncate_projection(2))
    index.add(1, [1.0, 0.0, 5.0, 5.0])
    index.add(2, [0.0, 1.0, -5.0, 9.0])

    hits = index.search([1.0, 0.0, -100.0], 2)

    assert index.dimension == 2
    assert [hit.document_id for hit in hits] == [1, 2]
    assert hits[0].score == pytest.approx(1.0)
    assert hits[1].score == pytest.approx(0.0)


def test_rebuild_replaces_contents_and_reports_rejected_rows() -> None:
    index = InMemoryVectorIndex()
    index.add(42, [1.0, 1.0])

    indexed, rejected = index.rebuild([(1, [1.0, 0.0]), (2, [0.0, 1.0, 0.0]), (3, []), (4, [0.0, 1.0])])

    assert indexed == 2
    assert rejected == [2, 3]
    assert 42 not in index
    assert 1 in index and 4 in index


def test_drop_clears_index() -> None:
    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])
    index.drop()

    assert len(index) == 0
    assert index.dimension is None
    index.add(2, [1.0, 0.0, 0.0])
    assert index.dimension == 3


def test_empty_vectors_are_invalid() -> None:
    index = InMemoryVectorIndex()
    with pytest.raises(ValueError):
        index.add(1, [])


def test_ensure_compatible_checks_projected_length_without_mutation() -> None:
    truncated = InMemoryVectorIndex(truncate_projection(2))
    truncated.ensure_compatible([1.0, 2.0, 3.0])
    assert len(truncated) == 0
    truncated.add(1, [1.0, 0.0, 9.0])
    truncated.ensure_compatible([0.0, 1.0, 4.0, 4.0])

    index = InMemoryVectorIndex()
    index.add(1, [1.0, 0.0])
    with pytest.raises(DimensionMismatch):
        index.ensure_compatible([1.0, 0.0, 0.0])
    assert len(index) == 1
    assert index.dimension == 2
