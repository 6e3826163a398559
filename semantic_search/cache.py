"""Bounded in-memory key -> embedding cache."""

import logging
import threading
from collections import OrderedDict
from typing import Optional

import numpy as np

from .config import EVICTION_POLICIES, settings
from .kernel import VectorLike

logger = logging.getLogger(__name__)


class EmbeddingCache:
    """Thread-safe embedding cache with bulk eviction at capacity.

    Before each ``set``, if the cache holds ``max_size`` entries, the first
    ``eviction_batch`` keys in eviction order are dropped. Eviction order is
    insertion order for ``"fifo"``; for ``"lru"`` a hit or overwrite moves the
    key to the back, so the least recently used keys go first.

    Stored embeddings are private read-only float32 copies.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        eviction_batch: Optional[int] = None,
        policy: Optional[str] = None,
    ):
        """Initialize EmbeddingCache.

        Args:
            max_size: Maximum number of entries (default: settings.cache_max_size)
            eviction_batch: Entries dropped per eviction (default: settings.cache_eviction_batch)
            policy: "fifo" or "lru" (default: settings.cache_eviction_policy)

        Raises:
            ValueError: On non-positive sizes or an unknown policy
        """
        self.max_size = settings.cache_max_size if max_size is None else max_size
        self.eviction_batch = (
            settings.cache_eviction_batch if eviction_batch is None else eviction_batch
        )
        self.policy = settings.cache_eviction_policy if policy is None else policy

        if self.max_size <= 0:
            raise ValueError(f"max_size must be positive, got {self.max_size}")
        if self.eviction_batch <= 0:
            raise ValueError(f"eviction_batch must be positive, got {self.eviction_batch}")
        if self.policy not in EVICTION_POLICIES:
            raise ValueError(f"Unknown eviction policy '{self.policy}'")

        self._entries: "OrderedDict[str, np.ndarray]" = OrderedDict()
        self._lock = threading.Lock()
        self.stats = {
            "hits": 0,
            "misses": 0,
            "evictions": 0,
        }

    def get(self, key: str) -> Optional[np.ndarray]:
        """Look up an embedding.

        Args:
            key: Cache key

        Returns:
            The stored embedding, or None if absent or evicted
        """
        with self._lock:
            embedding = self._entries.get(key)
            if embedding is None:
                self.stats["misses"] += 1
                return None

            self.stats["hits"] += 1
            if self.policy == "lru":
                self._entries.move_to_end(key)
            return embedding

    def set(self, key: str, embedding: VectorLike):
        """Insert or overwrite an embedding, evicting a batch first if full.

        Args:
            key: Cache key
            embedding: Embedding vector (copied and stored as float32)
        """
        stored = np.array(embedding, dtype=np.float32).reshape(-1)
        stored.setflags(write=False)

        with self._lock:
            if len(self._entries) >= self.max_size:
                self._evict()
            self._entries[key] = stored
            if self.policy == "lru":
                self._entries.move_to_end(key)

    def _evict(self):
        # Caller holds the lock
        count = min(self.eviction_batch, len(self._entries))
        for _ in range(count):
            self._entries.popitem(last=False)
        self.stats["evictions"] += 1
        logger.debug(
            f"Evicted {count} entries ({self.policy}), {len(self._entries)} remain"
        )

    def clear(self):
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
