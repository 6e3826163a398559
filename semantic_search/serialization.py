"""Binary encoding of embeddings for the persistence layer.

Layout: little-endian IEEE-754 float32, 4 bytes per element, no header.
The element count is ``len(data) // 4``. Changing this layout breaks every
stored blob.
"""

from typing import Optional

import numpy as np

from .kernel import VectorLike

DTYPE = np.dtype("<f4")


def to_bytes(embedding: VectorLike) -> bytes:
    """Encode an embedding as little-endian float32 bytes."""
    return np.asarray(embedding, dtype=DTYPE).reshape(-1).tobytes()


def from_bytes(data: bytes, dimensions: Optional[int] = None) -> np.ndarray:
    """Decode bytes produced by ``to_bytes``.

    Args:
        data: Raw embedding bytes
        dimensions: Expected element count, if known

    Returns:
        Native float32 embedding

    Raises:
        ValueError: If the length is not a multiple of 4 or does not match dimensions
    """
    if len(data) % DTYPE.itemsize != 0:
        raise ValueError(
            f"Embedding blob size {len(data)} is not a multiple of {DTYPE.itemsize} bytes"
        )

    if dimensions is not None and len(data) != dimensions * DTYPE.itemsize:
        raise ValueError(
            f"Blob size mismatch: expected {dimensions * DTYPE.itemsize} bytes "
            f"({dimensions} x {DTYPE.itemsize}), got {len(data)} bytes"
        )

    return np.frombuffer(data, dtype=DTYPE).astype(np.float32)
