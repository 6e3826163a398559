"""Text normalization and cache key derivation."""

import hashlib
import json
from typing import Optional


def normalize_text(text: str) -> str:
    """Normalize text for cache key generation.

    Applies:
    - Lowercase conversion
    - Leading/trailing whitespace removal

    Args:
        text: Input text to normalize

    Returns:
        Normalized text
    """
    return text.lower().strip()


def generate_cache_key(text: str, model: str, prefix_length: Optional[int] = None) -> str:
    """Generate a cache key from text and model name.

    Uses SHA-256 hash of JSON-encoded text and model to prevent collisions.

    Args:
        text: Normalized text
        model: Model name (e.g., "text-embedding-004")
        prefix_length: If given, only the first prefix_length characters of text are keyed

    Returns:
        Hex string of SHA-256 hash
    """
    if prefix_length is not None:
        text = text[:prefix_length]
    combined = json.dumps({"text": text, "model": model}, sort_keys=True)
    return hashlib.sha256(combined.encode('utf-8')).hexdigest()
