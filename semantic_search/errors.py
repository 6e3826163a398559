"""Exception classes for embedding generation."""

from __future__ import annotations


class EmbeddingError(RuntimeError):
    """Base exception for embedding generator failures."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "embedding_failed",
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class NoEmbeddingError(EmbeddingError):
    """Raised when the generator response carries no embedding."""

    def __init__(self, message: str = "No embedding returned from API", **kwargs) -> None:
        kwargs.setdefault("code", "no_embedding")
        super().__init__(message, **kwargs)


class BatchTooLargeError(EmbeddingError):
    """Raised when a batch exceeds the generator's maximum size."""

    def __init__(self, message: str = "Batch size exceeds maximum", **kwargs) -> None:
        kwargs.setdefault("code", "batch_too_large")
        super().__init__(message, **kwargs)


class RateLimitError(EmbeddingError):
    """Raised for 429 Too Many Requests responses."""

    def __init__(
        self,
        message: str = "Rate limited by embedding API",
        *,
        code: str = "rate_limited",
        status: int | None = 429,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, code=code, status=status)
        self.retry_after = retry_after
