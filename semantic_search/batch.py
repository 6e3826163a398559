"""Dense query x candidate cosine similarity matrices."""

from typing import Sequence

import numpy as np

from .kernel import VectorLike, as_vector, magnitude
from .similarity import cosine_similarity


def batch_similarity(
    queries: Sequence[VectorLike],
    embeddings: Sequence[VectorLike],
) -> np.ndarray:
    """Compute cosine similarity of every query against every embedding.

    ``result[i][j]`` equals ``cosine_similarity(queries[i], embeddings[j])`` up to
    float32 rounding (the matrix is float32 and the dot products come from one
    matrix multiply), including the zero score for mismatched lengths and zero
    vectors.

    Args:
        queries: Query vectors
        embeddings: Candidate vectors

    Returns:
        float32 array of shape (len(queries), len(embeddings))
    """
    queries = [as_vector(q) for q in queries]
    embeddings = [as_vector(e) for e in embeddings]
    result = np.zeros((len(queries), len(embeddings)), dtype=np.float32)
    if not queries or not embeddings:
        return result

    dimensions = {v.shape[0] for v in queries} | {v.shape[0] for v in embeddings}
    if len(dimensions) > 1:
        for i, query in enumerate(queries):
            for j, embedding in enumerate(embeddings):
                result[i, j] = cosine_similarity(query, embedding)
        return result

    q = np.stack(queries)
    e = np.stack(embeddings)
    dots = q @ e.T
    # Same magnitudes as cosine_similarity uses
    norms = np.outer(
        np.array([magnitude(v) for v in queries]),
        np.array([magnitude(v) for v in embeddings]),
    )

    # Zero vectors score 0
    mask = norms > 0
    result[mask] = dots.astype(np.float64)[mask] / norms[mask]
    return result
