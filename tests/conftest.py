"""Pytest configuration and shared fixtures."""

import math

import numpy as np
import pytest


@pytest.fixture
def temp_cache_dir(tmp_path):
    """Provide a temporary cache directory for tests."""
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return str(cache_dir)


def vector_with_similarity(similarity: float) -> np.ndarray:
    """2-D unit vector whose cosine similarity to [1, 0] is ``similarity``."""
    return np.array([similarity, math.sqrt(1.0 - similarity ** 2)], dtype=np.float32)


@pytest.fixture
def query():
    return np.array([1.0, 0.0], dtype=np.float32)


@pytest.fixture
def make_vector():
    return vector_with_similarity
