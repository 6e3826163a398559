"""Cache-fronted embedding generation for assistant records."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cache import EmbeddingCache
from .config import settings
from .providers import GeminiProvider, LocalProvider
from .ranking import SearchResult, hybrid_search, knn_search
from .utils import generate_cache_key, normalize_text

logger = logging.getLogger(__name__)


def _default_provider():
    gemini = GeminiProvider()
    if gemini.is_available():
        logger.debug("Using Gemini provider")
        return gemini
    logger.debug("Gemini API key not configured, using local provider")
    return LocalProvider()


class EmbeddingService:
    """Turns text into embeddings, consulting an EmbeddingCache first.

    Note: Stats tracking is thread-safe, and so is the cache. Two threads that
    miss on the same key at once may both call the provider; the later write wins.
    """

    def __init__(
        self,
        provider=None,
        cache: Optional[EmbeddingCache] = None,
        model: Optional[str] = None,
        batch_size: Optional[int] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize EmbeddingService.

        Args:
            provider: Object with ``embed(text) -> np.ndarray`` (default: Gemini if
                an API key is configured, else sentence-transformers)
            cache: Embedding cache (default: a new EmbeddingCache from settings)
            model: Model name mixed into cache keys (default: settings.model)
            batch_size: Default chunk size for embed_batch
            max_workers: Threads used per chunk in embed_batch

        Raises:
            ValueError: If the global settings are invalid
        """
        settings.validate_settings()
        self.provider = provider if provider is not None else _default_provider()
        self.cache = cache if cache is not None else EmbeddingCache()
        self.model = model or settings.model
        self.batch_size = batch_size or settings.embed_batch_size
        self.max_workers = max_workers or settings.embed_max_workers

        self._stats_lock = threading.Lock()
        self.stats = {
            "hits": 0,
            "misses": 0,
        }

    @staticmethod
    def _check_text(text) -> None:
        if text is None:
            raise ValueError("Text cannot be None")
        if not isinstance(text, str):
            raise TypeError(f"Text must be string, got {type(text).__name__}")
        if not text:
            raise ValueError("Text cannot be empty string")

    def cache_key(self, text: str) -> str:
        """Cache key for ``text``: normalized, truncated, hashed with the model."""
        return generate_cache_key(
            normalize_text(text), self.model, settings.cache_key_prefix_length
        )

    def _get_embedding(self, text: str) -> np.ndarray:
        key = self.cache_key(text)

        cached = self.cache.get(key)
        if cached is not None:
            with self._stats_lock:
                self.stats["hits"] += 1
            return cached

        with self._stats_lock:
            self.stats["misses"] += 1
        embedding = np.array(self.provider.embed(text), dtype=np.float32)
        if embedding.shape[0] != settings.dimension:
            logger.warning(
                f"Provider returned {embedding.shape[0]} dimensions, expected {settings.dimension}"
            )
        # Same read-only contract as a cache hit
        embedding.setflags(write=False)
        self.cache.set(key, embedding)
        return embedding

    def embed(self, text: str) -> np.ndarray:
        """Embed one text, using the cache when possible.

        Raises:
            ValueError: If text is None or empty
            TypeError: If text is not a string
            EmbeddingError: If the provider fails
        """
        self._check_text(text)
        return self._get_embedding(text)

    def embed_batch(self, texts: List[str], batch_size: Optional[int] = None) -> List[np.ndarray]:
        """Embed many texts, one chunk at a time.

        Texts within a chunk are embedded concurrently. The returned list is
        in input order. Any provider failure propagates.

        Args:
            texts: List of input texts
            batch_size: Chunk size (default: self.batch_size)

        Returns:
            List of embeddings

        Raises:
            ValueError: If batch_size is not positive, or on invalid text
            TypeError: If texts is not a list of strings
        """
        batch_size = self.batch_size if batch_size is None else batch_size
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        if not isinstance(texts, list):
            raise TypeError(f"Texts must be a list of strings, got {type(texts).__name__}")
        for text in texts:
            self._check_text(text)

        results: List[np.ndarray] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for start in range(0, len(texts), batch_size):
                chunk = texts[start:start + batch_size]
                results.extend(executor.map(self._get_embedding, chunk))
        return results

    def embed_email(self, subject: str, body: str, sender: str) -> np.ndarray:
        return self.embed(f"Email from {sender}: {subject}. {body[:500]}")

    def embed_task(
        self, title: str, notes: Optional[str] = None, context: Iterable[str] = ()
    ) -> np.ndarray:
        text = f"Task: {title}"
        if notes:
            text += f". {notes}"
        context = list(context)
        if context:
            text += f". Context: {', '.join(context)}"
        return self.embed(text)

    def embed_contact(
        self, name: str, company: Optional[str] = None, contexts: Iterable[str] = ()
    ) -> np.ndarray:
        text = f"Contact: {name}"
        if company:
            text += f" at {company}"
        contexts = list(contexts)
        if contexts:
            text += f". {', '.join(contexts)}"
        return self.embed(text)

    def embed_conversation(self, role: str, content: str) -> np.ndarray:
        return self.embed(f"{role}: {content}")

    def search(
        self,
        query_text: str,
        candidates: Iterable[Tuple],
        k: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> List[SearchResult]:
        """Embed ``query_text`` and run k-NN ranking over the candidates.

        ``k`` and ``threshold`` default to settings.knn_k and settings.knn_threshold.
        """
        return knn_search(
            self.embed(query_text),
            candidates,
            k=settings.knn_k if k is None else k,
            threshold=settings.knn_threshold if threshold is None else threshold,
        )

    def hybrid_search(
        self,
        query_text: str,
        candidates: Iterable[Tuple],
        k: Optional[int] = None,
        vector_weight: Optional[float] = None,
        keyword_weight: Optional[float] = None,
    ) -> List[SearchResult]:
        """Embed ``query_text`` and rank candidates by vector and keyword scores.

        Unset arguments come from settings (knn_k and the hybrid_* weights).
        """
        return hybrid_search(
            self.embed(query_text),
            query_text,
            candidates,
            k=settings.knn_k if k is None else k,
            vector_weight=settings.hybrid_vector_weight if vector_weight is None else vector_weight,
            keyword_weight=(
                settings.hybrid_keyword_weight if keyword_weight is None else keyword_weight
            ),
        )
