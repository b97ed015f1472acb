"""
Cosine similarity and top-K ranking over embedding vectors.

Pure numeric code with no provider or storage access. Used to rank catalog
interventions against an embedded behavior description.

Usage:
    from intervention_engine.core.similarity import VectorCandidate, rank

    matches = rank(
        query_vector,
        [VectorCandidate(id="attention-001", label="Differential Attention", vector=vec)],
        top_k=3,
    )
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from intervention_engine.core.exceptions import DimensionMismatch

DEFAULT_TOP_K = 3


@dataclass(frozen=True)
class VectorCandidate:
    """An item to rank: identifier, display label and its vector."""
    id: str
    label: str
    vector: Sequence[float]


@dataclass(frozen=True)
class RankedMatch:
    """A ranked candidate with its cosine similarity to the query."""
    id: str
    label: str
    score: float


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two equal-length vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))

    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))


def rank(
    query: Sequence[float],
    candidates: Sequence[VectorCandidate],
    top_k: int = DEFAULT_TOP_K,
) -> list[RankedMatch]:
    """
    Rank candidates by cosine similarity to ``query``.

    Sort is descending and stable, so exact ties keep candidate order.
    Output length is ``min(top_k, len(candidates))``.

    Raises:
        ValueError: If top_k is not positive
        DimensionMismatch: If any candidate vector differs in length from the query
    """
    if top_k < 1:
        raise ValueError(f"top_k must be positive, got {top_k}")

    scored = [
        RankedMatch(id=c.id, label=c.label, score=similarity(query, c.vector))
        for c in candidates
    ]
    scored.sort(key=lambda m: m.score, reverse=True)
    return scored[:top_k]


def as_percent(score: float) -> int:
    """Similarity as a whole percentage, halves rounded up."""
    return math.floor(score * 100 + 0.5)
