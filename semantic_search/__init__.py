"""In-process semantic search over embeddings with a bounded embedding cache."""

import logging
import threading
from typing import Optional

from .batch import batch_similarity
from .cache import EmbeddingCache
from .config import Settings, settings
from .errors import BatchTooLargeError, EmbeddingError, NoEmbeddingError, RateLimitError
from .kernel import dot, magnitude, subtract, sum_of_squares
from .ranking import SearchResult, hybrid_search, knn_search
from .serialization import from_bytes, to_bytes
from .service import EmbeddingService
from .similarity import cosine_similarity, l2_distance
from .storage import EmbeddingStorage

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Process-wide cache shared by callers that don't bring their own
_default_cache: Optional[EmbeddingCache] = None
_default_cache_lock = threading.Lock()


def get_default_cache() -> EmbeddingCache:
    """Return the process-wide EmbeddingCache, creating it on first use.

    The cache is built from ``settings`` (capacity, eviction batch and policy),
    which are validated first; invalid settings raise ValueError.
    This function is thread-safe; the same instance is returned to every caller.

    Example:
        >>> from semantic_search import get_default_cache
        >>> cache = get_default_cache()
        >>> cache.set("hello", [0.1, 0.2, 0.3])
    """
    global _default_cache

    if _default_cache is None:
        with _default_cache_lock:
            # Double-check pattern to avoid race condition
            if _default_cache is None:
                settings.validate_settings()
                logger.debug("Creating default EmbeddingCache singleton")
                _default_cache = EmbeddingCache()

    return _default_cache


__all__ = [
    "BatchTooLargeError",
    "EmbeddingCache",
    "EmbeddingError",
    "EmbeddingService",
    "EmbeddingStorage",
    "NoEmbeddingError",
    "RateLimitError",
    "SearchResult",
    "Settings",
    "batch_similarity",
    "cosine_similarity",
    "dot",
    "from_bytes",
    "get_default_cache",
    "hybrid_search",
    "knn_search",
    "l2_distance",
    "magnitude",
    "settings",
    "subtract",
    "sum_of_squares",
    "to_bytes",
]
