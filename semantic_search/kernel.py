"""Fixed-dimension float32 vector primitives."""

import math
from typing import Sequence, Union

import numpy as np

VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(v: VectorLike) -> np.ndarray:
    """Return ``v`` as a 1-D float32 array (no copy if it already is one)."""
    arr = np.asarray(v, dtype=np.float32)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    return arr


def _check_lengths(a: np.ndarray, b: np.ndarray):
    if a.shape[0] != b.shape[0]:
        raise ValueError(f"Vector lengths differ: {a.shape[0]} vs {b.shape[0]}")


def dot(a: VectorLike, b: VectorLike) -> float:
    """Dot product of two equal-length vectors.

    Raises:
        ValueError: If the vectors have different lengths
    """
    a = as_vector(a)
    b = as_vector(b)
    _check_lengths(a, b)
    return float(np.dot(a, b))


def sum_of_squares(v: VectorLike) -> float:
    v = as_vector(v)
    return float(np.dot(v, v))


def subtract(a: VectorLike, b: VectorLike) -> np.ndarray:
    """Element-wise ``a - b``.

    Raises:
        ValueError: If the vectors have different lengths
    """
    a = as_vector(a)
    b = as_vector(b)
    _check_lengths(a, b)
    return np.subtract(a, b, dtype=np.float32)


def magnitude(v: VectorLike) -> float:
    return math.sqrt(sum_of_squares(v))
