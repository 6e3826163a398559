"""Tests for batch similarity."""

import numpy as np
import pytest

from semantic_search.batch import batch_similarity
from semantic_search.similarity import cosine_similarity


def test_matches_pairwise_cosine():
    rng = np.random.default_rng(0)
    queries = [rng.standard_normal(768).astype(np.float32) for _ in range(3)]
    embeddings = [rng.standard_normal(768).astype(np.float32) for _ in range(5)]

    result = batch_similarity(queries, embeddings)

    assert result.shape == (3, 5)
    for i, q in enumerate(queries):
        for j, e in enumerate(embeddings):
            assert result[i, j] == pytest.approx(cosine_similarity(q, e), abs=1e-5)


def test_zero_vectors_score_zero():
    result = batch_similarity([[0, 0, 0], [1, 0, 0]], [[1, 2, 3], [0, 0, 0]])
    assert result[0, 0] == 0
    assert result[0, 1] == 0
    assert result[1, 1] == 0
    assert result[1, 0] == pytest.approx(1 / np.sqrt(14), abs=1e-6)


def test_mixed_dimensions_score_zero_for_mismatches():
    result = batch_similarity([[1, 0]], [[1, 0], [1, 0, 0]])
    np.testing.assert_array_almost_equal(result, [[1.0, 0.0]])


def test_empty_inputs():
    assert batch_similarity([], [[1, 2]]).shape == (0, 1)
    assert batch_similarity([[1, 2]], []).shape == (1, 0)


def test_returns_float32():
    assert batch_similarity([[1, 2]], [[2, 1]]).dtype == np.float32


def test_uses_same_magnitudes_as_pairwise():
    rng = np.random.default_rng(9)
    vectors = [rng.standard_normal(768).astype(np.float32) * 1000 for _ in range(4)]

    result = batch_similarity(vectors, vectors)

    for i, v in enumerate(vectors):
        assert result[i, i] == pytest.approx(cosine_similarity(v, v), rel=1e-5)
