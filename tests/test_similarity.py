"""Tests for cosine similarity and L2 distance."""

import math

import numpy as np
import pytest

from semantic_search.similarity import cosine_similarity, l2_distance


class TestCosineSimilarity:
    def test_identical_vectors_score_one(self):
        assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0, abs=1e-6)

    def test_opposite_vectors_score_minus_one(self):
        assert cosine_similarity([1, 0], [-1, 0]) == pytest.approx(-1.0)

    def test_orthogonal_vectors_score_zero(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0
        assert cosine_similarity([1, 2, 3], [0, 0, 0]) == 0

    def test_length_mismatch_scores_zero(self):
        assert cosine_similarity([1, 2], [1, 2, 3]) == 0

    def test_scale_invariant(self):
        assert cosine_similarity([1, 2, 3], [10, 20, 30]) == pytest.approx(1.0, abs=1e-6)

    def test_self_similarity_high_dimension(self):
        rng = np.random.default_rng(42)
        v = rng.standard_normal(768).astype(np.float32)
        assert cosine_similarity(v, v) == pytest.approx(1.0, abs=1e-5)

    def test_symmetric(self):
        rng = np.random.default_rng(3)
        for _ in range(10):
            a = rng.standard_normal(768).astype(np.float32)
            b = rng.standard_normal(768).astype(np.float32)
            assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_returns_python_float(self):
        assert isinstance(cosine_similarity([1, 2], [2, 1]), float)


class TestL2Distance:
    def test_distance(self):
        assert l2_distance([0, 0], [3, 4]) == pytest.approx(5.0)

    def test_identical_vectors_distance_zero(self):
        assert l2_distance([1, 2, 3], [1, 2, 3]) == 0.0

    def test_length_mismatch_is_infinite(self):
        assert l2_distance([1, 2], [1, 2, 3]) == math.inf

    def test_symmetric(self):
        rng = np.random.default_rng(5)
        for _ in range(10):
            a = rng.standard_normal(768).astype(np.float32)
            b = rng.standard_normal(768).astype(np.float32)
            assert l2_distance(a, b) == l2_distance(b, a)
