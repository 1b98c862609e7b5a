"""Similarity scoring used by the retrieval engine."""
from typing import Iterable, List, Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    The dot product runs over the shorter of the two lengths; each magnitude
    is taken over its full vector. Returns 0.0 when either magnitude is zero.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Cosine similarity score (-1 to 1); 0.0 if the computation is not finite
    """
    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)

    with np.errstate(over="ignore", invalid="ignore"):
        norm_a = np.linalg.norm(vec_a)
        norm_b = np.linalg.norm(vec_b)
        if norm_a == 0 or norm_b == 0:
            return 0.0

        n = min(vec_a.shape[0], vec_b.shape[0])
        score = float(np.dot(vec_a[:n], vec_b[:n]) / (norm_a * norm_b))

    # NaN or inf inputs, or norms overflowing to inf
    if not np.isfinite(score):
        return 0.0
    return score


def token_overlap_score(query_tokens: List[str], chunk_tokens: Iterable[str]) -> int:
    """
    Count query tokens that occur anywhere in the chunk.

    Repeated query tokens count once per occurrence in the query; repeats in
    the chunk add nothing.
    """
    present = set(chunk_tokens)
    return sum(1 for token in query_tokens if token in present)
