"""Exact top-k ranking over a caller-supplied candidate list.

Two modes are provided:

- ``knn_search`` ranks by cosine similarity alone and drops candidates that
  score below a threshold.
- ``hybrid_search`` blends cosine similarity with a keyword-overlap ratio and
  ranks every candidate (no threshold).

Items are opaque: they are carried through to ``SearchResult.item`` untouched.
Both functions sort with Python's stable ``sorted`` so equal scores keep the
candidate input order.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, Set, Tuple, TypeVar

from .kernel import VectorLike, as_vector
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_K = 10
DEFAULT_THRESHOLD = 0.7
DEFAULT_VECTOR_WEIGHT = 0.7
DEFAULT_KEYWORD_WEIGHT = 0.3


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """A ranked item. Higher ``score`` is always better."""

    item: T
    score: float


def tokenize(text: Optional[str]) -> Set[str]:
    """Split text on whitespace into a set of lower-cased terms."""
    if not text:
        return set()
    return set(text.lower().split())


def keyword_score(query_terms: Set[str], text: Optional[str]) -> float:
    """Fraction of query terms that also appear in ``text``."""
    matches = len(query_terms & tokenize(text))
    return matches / max(1, len(query_terms))


def _top_k(results: List[SearchResult], k: int) -> List[SearchResult]:
    if k <= 0:
        return []
    return sorted(results, key=lambda r: r.score, reverse=True)[:k]


def _warn_mismatched(mismatched: int, dimension: int):
    if mismatched:
        logger.warning(
            f"{mismatched} candidate(s) do not match query dimension {dimension}; scored as 0"
        )


def knn_search(
    query: VectorLike,
    candidates: Iterable[Tuple],
    k: int = DEFAULT_K,
    threshold: float = DEFAULT_THRESHOLD,
) -> List[SearchResult]:
    """Find the k nearest candidates by cosine similarity.

    Args:
        query: Query embedding
        candidates: ``(item, embedding)`` or ``(item, embedding, text)`` tuples
        k: Maximum number of results
        threshold: Minimum similarity a candidate needs to be returned

    Returns:
        Up to k results sorted by descending similarity. Fewer are returned
        when fewer candidates meet the threshold.
    """
    query = as_vector(query)
    mismatched = 0

    results = []
    for candidate in candidates:
        item, embedding = candidate[0], as_vector(candidate[1])
        if embedding.shape[0] != query.shape[0]:
            mismatched += 1
        score = cosine_similarity(query, embedding)
        if score >= threshold:
            results.append(SearchResult(item=item, score=score))

    _warn_mismatched(mismatched, query.shape[0])
    return _top_k(results, k)


def hybrid_search(
    query: VectorLike,
    query_text: str,
    candidates: Iterable[Tuple],
    k: int = DEFAULT_K,
    vector_weight: float = DEFAULT_VECTOR_WEIGHT,
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
) -> List[SearchResult]:
    """Rank candidates by a weighted blend of vector and keyword scores.

    ``score = cosine * vector_weight + overlap * keyword_weight`` where
    ``overlap`` is the share of distinct query terms found in the candidate
    text. Weights are used as given, without renormalization.

    Args:
        query: Query embedding
        query_text: Raw query text, tokenized on whitespace
        candidates: ``(item, embedding, text)`` tuples; ``text`` may be None
        k: Maximum number of results
        vector_weight: Weight of the cosine similarity
        keyword_weight: Weight of the keyword overlap

    Returns:
        Top k results sorted by descending combined score
    """
    query = as_vector(query)
    query_terms = tokenize(query_text)
    mismatched = 0

    results = []
    for item, embedding, text in candidates:
        embedding = as_vector(embedding)
        if embedding.shape[0] != query.shape[0]:
            mismatched += 1
        vector_score = cosine_similarity(query, embedding)
        combined = vector_score * vector_weight + keyword_score(query_terms, text) * keyword_weight
        results.append(SearchResult(item=item, score=combined))

    _warn_mismatched(mismatched, query.shape[0])
    return _top_k(results, k)
