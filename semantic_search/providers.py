"""Embedding generator implementations."""

import logging
import threading
from typing import List, Optional

import httpx
import numpy as np

from .config import settings
from .errors import BatchTooLargeError, EmbeddingError, NoEmbeddingError, RateLimitError

logger = logging.getLogger(__name__)

# batchEmbedContents request limit
GEMINI_MAX_BATCH = 100


class GeminiProvider:
    """Remote embedding provider using the Gemini embedContent REST API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize Gemini provider.

        Args:
            api_key: API key (defaults to settings.gemini_api_key)
            model: Embedding model name (defaults to settings.model)
            base_url: API root URL (defaults to settings.gemini_base_url)
            timeout: Request timeout in seconds (defaults to settings.request_timeout)
        """
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.model
        self.base_url = (base_url or settings.gemini_base_url).rstrip('/')
        self.timeout = settings.request_timeout if timeout is None else timeout

    def is_available(self) -> bool:
        """Check that an API key is configured."""
        return bool(self.api_key)

    def _request(self, text: str) -> dict:
        return {
            "model": f"models/{self.model}",
            "content": {"parts": [{"text": text}]},
        }

    def _post(self, method: str, payload: dict) -> dict:
        """POST to ``models/{model}:{method}`` and return the JSON body.

        Raises:
            RateLimitError: On HTTP 429
            EmbeddingError: On timeout, network or other HTTP failures
        """
        if not self.is_available():
            raise EmbeddingError("Gemini API key not configured", code="not_configured")

        url = f"{self.base_url}/models/{self.model}:{method}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after")
                    raise RateLimitError(
                        retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
                    )
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException as e:
            raise EmbeddingError(f"Embedding API timeout: {e}", code="timeout")
        except httpx.NetworkError as e:
            raise EmbeddingError(f"Embedding API network error: {e}", code="network_error")
        except httpx.HTTPStatusError as e:
            raise EmbeddingError(
                f"Embedding API error: {e}",
                code="http_error",
                status=e.response.status_code,
            )

    def embed(self, text: str) -> np.ndarray:
        """Embed a single text string.

        Args:
            text: Input text

        Returns:
            Embedding vector

        Raises:
            NoEmbeddingError: If the response has no embedding values
        """
        data = self._post("embedContent", self._request(text))
        values = (data.get("embedding") or {}).get("values")
        if not values:
            raise NoEmbeddingError()
        return np.array(values, dtype=np.float32)

    def embed_batch(self, texts: List[str]) -> List[np.ndarray]:
        """Embed up to GEMINI_MAX_BATCH texts in one request.

        Args:
            texts: List of input texts

        Returns:
            List of embedding vectors, in input order

        Raises:
            BatchTooLargeError: If more than GEMINI_MAX_BATCH texts are given
            NoEmbeddingError: If any embedding is missing from the response
        """
        if len(texts) > GEMINI_MAX_BATCH:
            raise BatchTooLargeError(
                f"Batch of {len(texts)} exceeds maximum of {GEMINI_MAX_BATCH}"
            )
        if not texts:
            return []

        data = self._post(
            "batchEmbedContents",
            {"requests": [self._request(t) for t in texts]},
        )
        embeddings = data.get("embeddings") or []
        if len(embeddings) != len(texts) or not all(e.get("values") for e in embeddings):
            raise NoEmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(embeddings)} usable"
            )
        return [np.array(e["values"], dtype=np.float32) for e in embeddings]


class LocalProvider:
    """sentence-transformers model, loaded on first use (768-d nomic by default)."""

    def __init__(self, model: str = "nomic-ai/nomic-embed-text-v1.5"):
        self.model_name = model
        self._model = None
        self._load_lock = threading.Lock()

    def is_available(self) -> bool:
        try:
            import sentence_transformers  # noqa: F401
        except ImportError:
            return False
        return True

    def _ensure_model(self):
        # embed_batch calls in from several worker threads
        if self._model is not None:
            return self._model

        with self._load_lock:
            if self._model is None:
                if not self.is_available():
                    raise EmbeddingError(
                        "sentence-transformers not installed. "
                        "Install with: pip install semantic-search[local]",
                        code="not_configured",
                    )
                from sentence_transformers import SentenceTransformer
                logger.info(f"Loading local embedding model {self.model_name}")
                # nomic-embed ships custom modeling code
                self._model = SentenceTransformer(self.model_name, trust_remote_code=True)
        return self._model

    def embed(self, text: str) -> np.ndarray:
        return self._ensure_model().encode(text, convert_to_numpy=True).astype(np.float32)

    def embed_batch(self, texts: List[str]) -> List[np.ndarray]:
        encoded = self._ensure_model().encode(texts, convert_to_numpy=True)
        return [row.astype(np.float32) for row in encoded]
