# semantic_search/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

EVICTION_POLICIES = {"fifo", "lru"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEMANTIC_SEARCH_",
        env_file=".env",
        extra="ignore",
    )

    dimension: int = 768

    # Embedding cache
    cache_max_size: int = 1000
    cache_eviction_batch: int = 100
    cache_eviction_policy: str = "fifo"
    cache_key_prefix_length: int = 200

    # Ranking defaults
    knn_k: int = 10
    knn_threshold: float = 0.7
    hybrid_vector_weight: float = 0.7
    hybrid_keyword_weight: float = 0.3

    # Embedding generator
    model: str = "text-embedding-004"
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 10.0
    embed_batch_size: int = 100
    embed_max_workers: int = 8

    def validate_settings(self) -> None:
        """Validate sizes and the eviction policy.

        Raises:
            ValueError: Listing every invalid setting found
        """
        problems = []
        for name in ("dimension", "cache_max_size", "cache_eviction_batch",
                     "cache_key_prefix_length", "embed_batch_size", "embed_max_workers"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive")
        if self.cache_eviction_batch > self.cache_max_size:
            problems.append("cache_eviction_batch cannot exceed cache_max_size")
        if self.cache_eviction_policy not in EVICTION_POLICIES:
            problems.append(
                f"cache_eviction_policy must be one of {sorted(EVICTION_POLICIES)}, "
                f"got '{self.cache_eviction_policy}'"
            )
        if problems:
            raise ValueError(f"Invalid settings: {'; '.join(problems)}")


settings = Settings()
