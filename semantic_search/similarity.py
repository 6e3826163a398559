"""Cosine similarity and Euclidean distance between embeddings.

Mismatched dimensions never raise here. Cosine similarity degrades to 0 and
L2 distance to +inf, so a single malformed candidate sorts last instead of
aborting a whole ranking pass.
"""

import math

from .kernel import VectorLike, as_vector, dot, magnitude, subtract, sum_of_squares


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """Compute cosine similarity between two vectors.

    Args:
        a: First embedding vector
        b: Second embedding vector

    Returns:
        Similarity in [-1, 1]; 0.0 when lengths differ or either vector is zero
    """
    a = as_vector(a)
    b = as_vector(b)
    if a.shape[0] != b.shape[0]:
        return 0.0

    denominator = magnitude(a) * magnitude(b)
    if denominator <= 0:
        return 0.0

    return dot(a, b) / denominator


def l2_distance(a: VectorLike, b: VectorLike) -> float:
    """Compute Euclidean distance between two vectors.

    Args:
        a: First embedding vector
        b: Second embedding vector

    Returns:
        Distance >= 0; +inf when lengths differ
    """
    a = as_vector(a)
    b = as_vector(b)
    if a.shape[0] != b.shape[0]:
        return math.inf

    return math.sqrt(sum_of_squares(subtract(b, a)))
