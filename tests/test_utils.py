"""Tests for utility functions."""

from semantic_search.utils import generate_cache_key, normalize_text


def test_normalize_text():
    assert normalize_text("  Hello World \n") == "hello world"


def test_generate_cache_key_consistent():
    """Should generate consistent keys for same input."""
    assert generate_cache_key("hello", "model-v1") == generate_cache_key("hello", "model-v1")


def test_generate_cache_key_different_text():
    assert generate_cache_key("hello", "model-v1") != generate_cache_key("world", "model-v1")


def test_generate_cache_key_different_model():
    assert generate_cache_key("hello", "model-v1") != generate_cache_key("hello", "model-v2")


def test_generate_cache_key_format():
    """Should return a hex string (SHA-256)."""
    key = generate_cache_key("hello", "model-v1")
    assert len(key) == 64  # SHA-256 hex length
    assert all(c in '0123456789abcdef' for c in key)


def test_generate_cache_key_no_delimiter_collision():
    """Should handle delimiter characters in inputs without collision."""
    key1 = generate_cache_key("text", "model::with::colons")
    key2 = generate_cache_key("text::with::colons", "model")
    assert key1 != key2, "Different inputs must produce different keys"


def test_generate_cache_key_prefix_length():
    key1 = generate_cache_key("abcdef", "m", prefix_length=3)
    key2 = generate_cache_key("abcxyz", "m", prefix_length=3)
    assert key1 == key2
    assert key1 == generate_cache_key("abc", "m")
